"""Layered ``.env`` loading with schema validation.

Applications in the monorepo call :func:`load_env` from their settings module::

    from pydantic import BaseModel

    class Settings(BaseModel):
        DATABASE_URL: str
        PORT: int = 3000

    settings = load_env(Settings, __file__)

Files are looked up in the parent of the caller's directory (an app's
``src/settings.py`` reads the app root) and merged in increasing priority:

1. ``.env``
2. ``.env.<NODE_ENV>`` (``development`` when ``NODE_ENV`` is unset)
3. ``.env.local``
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import MutableMapping, TypeVar
from urllib.parse import unquote, urlparse

from dotenv import dotenv_values
from pydantic import BaseModel, ValidationError

from .errors import EnvValidationError

__all__ = ["DEFAULT_MODE", "env_files", "format_validation_issues", "load_env", "resolve_env_dir"]

LOGGER = logging.getLogger(__name__)

DEFAULT_MODE = "development"

ModelT = TypeVar("ModelT", bound=BaseModel)


def resolve_env_dir(origin: str | Path) -> Path:
    """Return the directory holding the env files for ``origin``.

    ``origin`` is the calling module's path or a ``file://`` URL pointing at
    it.
    """

    if isinstance(origin, str) and origin.startswith("file:"):
        origin = unquote(urlparse(origin).path)
    caller_dir = Path(origin).expanduser().resolve().parent
    return caller_dir.parent


def env_files(env_dir: Path, mode: str) -> list[Path]:
    """Return candidate env files for ``mode`` in increasing priority."""

    return [env_dir / ".env", env_dir / f".env.{mode}", env_dir / ".env.local"]


def format_validation_issues(exc: ValidationError) -> list[tuple[str, str]]:
    """Flatten a pydantic error into ``(field_path, message)`` pairs."""

    issues: list[tuple[str, str]] = []
    for error in exc.errors():
        path = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
        issues.append((path, error.get("msg", "invalid value")))
    return issues


def load_env(
    schema: type[ModelT],
    origin: str | Path,
    *,
    environ: MutableMapping[str, str] | None = None,
) -> ModelT:
    """Merge layered env files into ``environ`` and validate the result.

    Parameters
    ----------
    schema:
        Pydantic model whose fields name the expected variables.
    origin:
        ``__file__`` (or a ``file://`` URL) of the calling module.
    environ:
        Mapping updated in place. Defaults to :data:`os.environ`; values from
        the files override values already present.

    Raises
    ------
    EnvValidationError
        With one ``path: message`` line per violated field.
    """

    target = os.environ if environ is None else environ
    env_dir = resolve_env_dir(origin)
    mode = target.get("NODE_ENV") or DEFAULT_MODE

    for path in env_files(env_dir, mode):
        if not path.is_file():
            continue
        values = {key: value for key, value in dotenv_values(path).items() if value is not None}
        LOGGER.debug("loaded %d value(s) from %s", len(values), path)
        target.update(values)

    try:
        return schema.model_validate(dict(target))
    except ValidationError as exc:
        raise EnvValidationError(format_validation_issues(exc)) from exc
