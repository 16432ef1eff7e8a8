"""Identifier helpers for workspace package names."""

from __future__ import annotations

import re
import unicodedata

__all__ = ["IDENTIFIER_PATTERN", "is_valid_identifier", "suggest_identifier", "title_case"]


IDENTIFIER_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
_SEPARATORS = re.compile(r"[\s_\-]+")
_INVALID_CHARACTERS = re.compile(r"[^a-z0-9\- ]")


def is_valid_identifier(value: object) -> bool:
    """Return ``True`` when ``value`` is a kebab-case workspace identifier.

    An identifier is one or more runs of lowercase ASCII letters and digits
    joined by single hyphens, e.g. ``logger`` or ``eslint-config``.
    """

    if not isinstance(value, str):
        return False
    return IDENTIFIER_PATTERN.fullmatch(value) is not None


def suggest_identifier(value: str) -> str:
    """Return the closest valid identifier for ``value``, or ``""``.

    Used to hint at a fix when a user supplies something like ``Bad_Name``.
    """

    text = unicodedata.normalize("NFKD", str(value))
    text = text.encode("ascii", "ignore").decode("ascii").lower()
    text = _SEPARATORS.sub(" ", text)
    text = _INVALID_CHARACTERS.sub("", text).strip()
    if not text:
        return ""

    collapsed = _SEPARATORS.sub("-", text).strip("-")
    return collapsed if is_valid_identifier(collapsed) else ""


def title_case(identifier: str) -> str:
    """Turn ``my-cool-thing`` into ``My Cool Thing``."""

    words = [part for part in identifier.split("-") if part]
    return " ".join(word[0].upper() + word[1:] for word in words)
