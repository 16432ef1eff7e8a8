"""Custom exception types raised by repokit."""

from __future__ import annotations

from typing import Sequence


class RepokitError(RuntimeError):
    """Base class for errors the command line tools report to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class UsageError(RepokitError):
    """Raised when command line input is malformed or fails validation."""


class TargetExistsError(RepokitError, FileExistsError):
    """Raised when the scaffold target directory is already present."""


class EnvValidationError(RepokitError, ValueError):
    """Raised when merged environment values do not satisfy a schema.

    ``issues`` holds one ``(field_path, message)`` pair per violation.
    """

    def __init__(self, issues: Sequence[tuple[str, str]]) -> None:
        self.issues = tuple(issues)
        lines = [f"  {path}: {message}" for path, message in self.issues]
        super().__init__("\n".join(["Environment variable validation failed:", *lines]))
