"""Developer tooling for a pnpm/TypeScript monorepo.

The package scaffolds new workspace packages from built-in templates
(``scaffold-package``) and loads layered ``.env`` files validated against a
pydantic model (:func:`load_env`). Generation is a pure function of a
:class:`ScaffoldRequest`; only :func:`materialize` touches the filesystem.
"""

from __future__ import annotations

from .args import ParsedArgs, parse_args
from .config import PackageKind, ScaffoldRequest, ScaffoldSettings
from .env import load_env
from .errors import EnvValidationError, RepokitError, TargetExistsError, UsageError
from .naming import is_valid_identifier, title_case
from .registry import GeneratedFileSet, generate
from .scaffold import PackageScaffolder, materialize
from .template import TemplateRenderer, TemplateRenderingError

__all__ = [
    "EnvValidationError",
    "GeneratedFileSet",
    "PackageKind",
    "PackageScaffolder",
    "ParsedArgs",
    "RepokitError",
    "ScaffoldRequest",
    "ScaffoldSettings",
    "TargetExistsError",
    "TemplateRenderer",
    "TemplateRenderingError",
    "UsageError",
    "generate",
    "is_valid_identifier",
    "load_env",
    "materialize",
    "parse_args",
    "title_case",
]

__version__ = "0.1.0"
