"""Lightweight string templating used for generated text files."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from .errors import RepokitError
from .naming import title_case

__all__ = [
    "TemplateRenderer",
    "TemplateRenderingError",
]


_PLACEHOLDER_PATTERN = re.compile(r"{{\s*(?P<expression>[^{}]+?)\s*}}")


class TemplateRenderingError(RepokitError):
    """Raised when the renderer cannot evaluate a placeholder."""


def _default_filters() -> dict[str, Callable[[Any], str]]:
    return {"title": lambda value: title_case(str(value))}


@dataclass(slots=True)
class TemplateRenderer:
    """Render templates with ``{{ name }}`` and ``{{ name|filter }}`` placeholders.

    Every placeholder must resolve against the context and every filter must
    be registered; anything else raises :class:`TemplateRenderingError` so no
    raw placeholder reaches a generated file.
    """

    filters: Mapping[str, Callable[[Any], str]] = field(default_factory=_default_filters)

    def render_string(self, template: str, context: Mapping[str, Any]) -> str:
        def substitute(match: re.Match[str]) -> str:
            key, *filters = (part.strip() for part in match.group("expression").split("|"))
            if key not in context:
                raise TemplateRenderingError(f"missing value for '{key}'")

            value = context[key]
            for filter_name in filters:
                filter_func = self.filters.get(filter_name)
                if filter_func is None:
                    raise TemplateRenderingError(f"unknown filter '{filter_name}'")
                value = filter_func(value)
            return str(value)

        return _PLACEHOLDER_PATTERN.sub(substitute, template)
