"""Command line interfaces for the repokit utilities."""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Sequence

from pydantic import BaseModel

from .args import USAGE, parse_args
from .config import PackageKind, ScaffoldRequest, ScaffoldSettings
from .env import load_env
from .errors import EnvValidationError, TargetExistsError, UsageError
from .scaffold import PackageScaffolder

LOGGER = logging.getLogger(__name__)


def _configure_logging(level: int | str) -> None:
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _fail(message: str, *, usage: bool = True) -> int:
    print(message, file=sys.stderr)
    if usage:
        print("", file=sys.stderr)
        print(USAGE, file=sys.stderr)
    return 1


def next_steps(request: ScaffoldRequest, settings: ScaffoldSettings) -> list[str]:
    """Return the numbered follow-up instructions printed after scaffolding."""

    target = settings.relative_target(request.name)
    pm = settings.package_manager_command
    steps = ["Review generated metadata and exports", f"{pm} install"]
    if request.kind is PackageKind.CONFIG_ONLY:
        steps += [
            f"Customize {target}/index.js (or replace with your config file layout)",
            f"Update {target}/README.md",
        ]
    else:
        steps += [f"{pm} -C {target} {script}" for script in ("lint", "check-types", "build")]
    return [f"{index}) {step}" for index, step in enumerate(steps, start=1)]


def main(
    argv: Sequence[str] | None = None,
    *,
    cwd: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Entry point for ``scaffold-package``; returns the process exit code."""

    tokens = list(sys.argv[1:] if argv is None else argv)
    repo_root = Path.cwd() if cwd is None else Path(cwd)
    environment = os.environ if environ is None else environ

    try:
        settings = ScaffoldSettings.from_env(environment)
    except EnvValidationError as exc:
        return _fail(str(exc), usage=False)
    _configure_logging(settings.level)

    try:
        parsed = parse_args(tokens)
        if parsed.help:
            print(USAGE)
            return 0
        request = ScaffoldRequest.from_parsed(parsed.name, parsed.kind, parsed.description)
    except UsageError as exc:
        return _fail(str(exc))
    LOGGER.debug("scaffold request: %s", request)

    scaffolder = PackageScaffolder(settings)
    try:
        scaffolder.create(request, repo_root)
    except TargetExistsError as exc:
        return _fail(str(exc), usage=False)

    print(f"Created {settings.relative_target(request.name)} ({request.kind.value}).")
    print("Next steps:")
    for line in next_steps(request, settings):
        print(line)
    return 0


def _load_schema(reference: str) -> type[BaseModel]:
    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise argparse.ArgumentTypeError(
            f"invalid schema reference '{reference}'. Expected MODULE:CLASS syntax."
        )
    try:
        schema = getattr(importlib.import_module(module_name), attribute)
    except (ImportError, AttributeError) as exc:
        raise argparse.ArgumentTypeError(f"cannot import '{reference}': {exc}") from exc
    if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
        raise argparse.ArgumentTypeError(f"'{reference}' is not a pydantic model")
    return schema


def build_env_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repokit-check-env",
        description="Load layered .env files and validate them against a pydantic model",
    )
    parser.add_argument(
        "schema",
        type=_load_schema,
        help="Model to validate against, as MODULE:CLASS",
    )
    parser.add_argument(
        "--origin",
        type=Path,
        default=Path.cwd() / "src" / "env.py",
        help="Caller file whose parent directory holds the .env files (default: ./src/env.py)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the validated values as JSON",
    )
    return parser


def check_env_main(argv: Sequence[str] | None = None) -> int:
    """Entry point for ``repokit-check-env``."""

    # schema modules are importable relative to the working directory
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    parser = build_env_parser()
    args = parser.parse_args(argv)
    _configure_logging(logging.WARNING)

    try:
        validated = load_env(args.schema, args.origin)
    except EnvValidationError as exc:
        print(exc, file=sys.stderr)
        return 1

    fields = validated.model_dump(mode="json")
    print(f"Environment OK ({len(fields)} fields).")
    if args.show:
        print(json.dumps(fields, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
