"""Token parser for ``scaffold-package`` arguments.

The grammar is small but exact (``--type x`` and ``--type=x`` forms, a single
positional, ``-h`` stopping the scan), so parsing is a left-to-right fold over
the tokens instead of an :mod:`argparse` parser. Each step returns a new
immutable :class:`_ParseState`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import reduce
from typing import Sequence

from .config import PackageKind
from .errors import UsageError

__all__ = ["ParsedArgs", "USAGE", "parse_args"]


USAGE = """\
Usage: scaffold-package <name> [--type <node-lib|react-library|config-only>]
       scaffold-package <name> [--description "<text>"]

Examples:
  scaffold-package logger
  scaffold-package ui --type react-library
  scaffold-package commitlint-config --type config-only"""

_HELP_FLAGS = frozenset({"--help", "-h"})
# flag -> ParsedArgs field it sets
_VALUE_FLAGS = {"--type": "kind", "--description": "description"}


@dataclass(frozen=True, slots=True)
class ParsedArgs:
    """Raw result of parsing; ``kind`` is not validated yet."""

    help: bool = False
    name: str | None = None
    kind: str = PackageKind.NODE_LIB.value
    description: str | None = None


@dataclass(frozen=True, slots=True)
class _ParseState:
    args: ParsedArgs = ParsedArgs()
    pending: str | None = None
    done: bool = False


def _assign(state: _ParseState, flag: str, value: str) -> _ParseState:
    args = replace(state.args, **{_VALUE_FLAGS[flag]: value})
    return replace(state, args=args, pending=None)


def _step(state: _ParseState, token: str) -> _ParseState:
    if state.done:
        return state

    if state.pending is not None:
        if not token:
            raise UsageError(f"Missing value for {state.pending}.")
        return _assign(state, state.pending, token)

    if token in _HELP_FLAGS:
        return replace(state, args=ParsedArgs(help=True), done=True)

    if token in _VALUE_FLAGS:
        return replace(state, pending=token)

    flag, equals, value = token.partition("=")
    if equals and flag in _VALUE_FLAGS:
        return _assign(state, flag, value)

    if token.startswith("-"):
        raise UsageError(f"Unknown option: {token}")

    if state.args.name:
        raise UsageError(f"Unexpected extra argument: {token}")

    return replace(state, args=replace(state.args, name=token))


def parse_args(tokens: Sequence[str]) -> ParsedArgs:
    """Parse ``tokens`` (the arguments after the program name).

    Raises
    ------
    UsageError
        On a missing flag value, an unknown option or a second positional.
    """

    state = reduce(_step, tokens, _ParseState())
    if state.pending is not None:
        raise UsageError(f"Missing value for {state.pending}.")
    return state.args
