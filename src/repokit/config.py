"""Configuration objects shared by the package scaffolder and CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .env import format_validation_issues
from .errors import EnvValidationError, UsageError
from .naming import is_valid_identifier, suggest_identifier

__all__ = ["PackageKind", "ScaffoldRequest", "ScaffoldSettings"]


class PackageKind(str, Enum):
    """Kinds of workspace package the scaffolder knows how to generate."""

    NODE_LIB = "node-lib"
    REACT_LIBRARY = "react-library"
    CONFIG_ONLY = "config-only"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(kind.value for kind in cls)

    @property
    def has_build_step(self) -> bool:
        return self is not PackageKind.CONFIG_ONLY


@dataclass(frozen=True, slots=True)
class ScaffoldRequest:
    """A validated request to scaffold one workspace package.

    Attributes
    ----------
    name:
        Kebab-case identifier used for the directory and the package name.
    kind:
        The :class:`PackageKind` selecting which files are generated.
    description:
        Optional free text. Generators fall back to a kind specific sentence
        when it is missing or blank.
    """

    name: str
    kind: PackageKind = PackageKind.NODE_LIB
    description: str | None = None

    @classmethod
    def from_parsed(
        cls,
        name: str | None,
        kind: str = PackageKind.NODE_LIB.value,
        description: str | None = None,
    ) -> "ScaffoldRequest":
        """Validate raw parser output and build a :class:`ScaffoldRequest`.

        Raises
        ------
        UsageError
            When the name is missing or not kebab-case, or the kind is not one
            of :class:`PackageKind`.
        """

        if not name:
            raise UsageError("Missing package name.")

        if not is_valid_identifier(name):
            message = f'Invalid package name "{name}". Use kebab-case (letters, numbers, dashes).'
            suggestion = suggest_identifier(name)
            if suggestion and suggestion != name:
                message = f'{message} Did you mean "{suggestion}"?'
            raise UsageError(message)

        try:
            package_kind = PackageKind(kind)
        except ValueError:
            raise UsageError(
                f'Invalid package type "{kind}". Valid values: {", ".join(PackageKind.values())}.'
            ) from None

        return cls(name=name, kind=package_kind, description=description or None)


_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ScaffoldSettings(BaseModel):
    """Monorepo conventions baked into generated packages.

    Every field can be overridden with a ``REPOKIT_*`` environment variable,
    see :meth:`from_env`.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    scope: str = Field(default="repo", alias="REPOKIT_SCOPE", description="npm scope without the '@'.")
    packages_dir: str = Field(
        default="packages",
        alias="REPOKIT_PACKAGES_DIR",
        description="Workspace directory, relative to the repository root, that holds packages.",
    )
    package_manager: str = Field(default="pnpm@10.13.1", alias="REPOKIT_PACKAGE_MANAGER")
    node_engine: str = Field(default=">=24", alias="REPOKIT_NODE_ENGINE")
    version: str = Field(default="1.0.0", alias="REPOKIT_PACKAGE_VERSION")
    log_level: str = Field(default="WARNING", alias="REPOKIT_LOG_LEVEL")

    @field_validator("scope")
    @classmethod
    def _check_scope(cls, value: str) -> str:
        value = value.strip().lstrip("@")
        if not is_valid_identifier(value):
            raise ValueError("scope must be kebab-case (letters, numbers, dashes)")
        return value

    @field_validator("packages_dir")
    @classmethod
    def _check_packages_dir(cls, value: str) -> str:
        path = PurePosixPath(value.strip().replace("\\", "/"))
        if not value.strip() or path.is_absolute() or ".." in path.parts:
            raise ValueError("packages_dir must be a relative path inside the repository")
        return path.as_posix()

    @field_validator("package_manager", "node_engine", "version")
    @classmethod
    def _check_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(_LOG_LEVELS)}")
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "ScaffoldSettings":
        """Build settings from ``REPOKIT_*`` variables in ``environ``.

        Raises
        ------
        EnvValidationError
            When an override is present but invalid.
        """

        overrides = {key: value for key, value in environ.items() if key.startswith("REPOKIT_")}
        try:
            return cls.model_validate(overrides)
        except ValidationError as exc:
            raise EnvValidationError(format_validation_issues(exc)) from exc

    @property
    def package_manager_command(self) -> str:
        """The executable name, e.g. ``pnpm`` for ``pnpm@10.13.1``."""

        return self.package_manager.split("@", 1)[0] or self.package_manager

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)

    def package_name(self, identifier: str) -> str:
        return f"@{self.scope}/{identifier}"

    def relative_target(self, identifier: str) -> str:
        """Return ``packages/<identifier>`` as shown to users."""

        return f"{self.packages_dir}/{identifier}"

