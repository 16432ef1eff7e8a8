"""File content generators for each :class:`~repokit.config.PackageKind`.

Everything here is a pure function of a :class:`~repokit.config.ScaffoldRequest`
and the :class:`~repokit.config.ScaffoldSettings`: no clock, no randomness and
no filesystem access, so generating twice yields byte-identical files.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, assert_never

from .config import PackageKind, ScaffoldRequest, ScaffoldSettings
from .template import TemplateRenderer

__all__ = [
    "GeneratedFileSet",
    "build_gitignore",
    "build_manifest",
    "build_readme",
    "build_tsconfig",
    "default_description",
    "generate",
    "type_label",
]

GeneratedFileSet = dict[str, str]


README_TEMPLATE = """# {{ name|title }}

`{{ package_name }}`

{{ description }}

## Package Type

- {{ type_label }}

## Usage

Replace this README with package-specific documentation once the API/export surface is defined.
"""

ESLINT_CONFIG_TEMPLATE = (
    "import { config as base } from '@{{ scope }}/eslint-config/base';\nexport default [...base];\n"
)

SOURCE_ENTRY = "export {};\n"

CONFIG_ENTRY = (
    "// Replace with the actual config export surface for this package.\nexport default {};\n"
)


def type_label(kind: PackageKind) -> str:
    match kind:
        case PackageKind.REACT_LIBRARY:
            return "React library"
        case PackageKind.NODE_LIB:
            return "Node library"
        case PackageKind.CONFIG_ONLY:
            return "config-only package"
        case _:
            assert_never(kind)


def default_description(kind: PackageKind) -> str:
    """Sentence used in ``package.json`` when no description was supplied."""

    match kind:
        case PackageKind.REACT_LIBRARY:
            return "Shared React package for the monorepo."
        case PackageKind.NODE_LIB:
            return "Shared Node package for the monorepo."
        case PackageKind.CONFIG_ONLY:
            return "Shared config-only package for the monorepo."
        case _:
            assert_never(kind)


def _description(request: ScaffoldRequest, fallback: str) -> str:
    return (request.description or "").strip() or fallback


def _dump_json(data: Mapping[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def build_gitignore(kind: PackageKind) -> str:
    lines = ["node_modules/", ".turbo/"]
    if kind.has_build_step:
        lines.append("dist/")
    lines.extend(["*.tsbuildinfo", "coverage/"])
    return "\n".join(lines) + "\n"


def build_readme(
    request: ScaffoldRequest,
    settings: ScaffoldSettings,
    renderer: TemplateRenderer,
) -> str:
    """Render ``README.md`` with a title-cased heading for ``request.name``."""

    label = type_label(request.kind)
    context = {
        "name": request.name,
        "package_name": settings.package_name(request.name),
        "description": _description(request, f"{label} for the monorepo."),
        "type_label": label,
    }
    return renderer.render_string(README_TEMPLATE, context)


def build_manifest(request: ScaffoldRequest, settings: ScaffoldSettings) -> dict[str, Any]:
    """Return the ``package.json`` document for ``request``.

    Key order is part of the output and must stay stable.
    """

    manifest: dict[str, Any] = {
        "name": settings.package_name(request.name),
        "version": settings.version,
        "description": _description(request, default_description(request.kind)),
        "private": True,
        "type": "module",
        "packageManager": settings.package_manager,
        "engines": {"node": settings.node_engine},
    }

    if not request.kind.has_build_step:
        manifest["exports"] = {".": "./index.js"}
        manifest["files"] = ["index.js", "README.md", "LICENSE"]
        return manifest

    scope = f"@{settings.scope}"
    manifest.update(
        {
            "exports": {
                ".": {
                    "import": "./dist/index.js",
                    "types": "./dist/index.d.ts",
                },
            },
            "types": "./dist/index.d.ts",
            "files": ["dist", "README.md", "LICENSE"],
            "scripts": {
                "build": "tsc -p tsconfig.json",
                "dev": "tsc -w -p tsconfig.json",
                "lint": "eslint . --max-warnings 0",
                "check-types": "tsc -p tsconfig.json --noEmit",
            },
            "dependencies": {},
            "devDependencies": {
                f"{scope}/eslint-config": "workspace:*",
                f"{scope}/typescript-config": "workspace:*",
                "@types/node": "catalog:",
                "eslint": "catalog:",
                "typescript": "catalog:",
            },
        }
    )
    return manifest


def build_tsconfig(request: ScaffoldRequest, settings: ScaffoldSettings) -> dict[str, Any]:
    """Return ``tsconfig.json`` extending the base config for the kind."""

    match request.kind:
        case PackageKind.REACT_LIBRARY:
            base = "react-library.json"
        case PackageKind.NODE_LIB:
            base = "node-lib.json"
        case PackageKind.CONFIG_ONLY:
            raise ValueError("config-only packages have no TypeScript build")
        case _:
            assert_never(request.kind)

    return {
        "extends": f"@{settings.scope}/typescript-config/{base}",
        "compilerOptions": {
            "outDir": "dist",
            "rootDir": "src",
            "types": ["node"],
            "verbatimModuleSyntax": True,
        },
        "include": ["src"],
        "exclude": ["node_modules", "dist", "test", "**/*.test.ts"],
    }


def _source_package_files(
    request: ScaffoldRequest,
    settings: ScaffoldSettings,
    renderer: TemplateRenderer,
) -> GeneratedFileSet:
    return {
        ".gitignore": build_gitignore(request.kind),
        "README.md": build_readme(request, settings, renderer),
        "package.json": _dump_json(build_manifest(request, settings)),
        "tsconfig.json": _dump_json(build_tsconfig(request, settings)),
        "eslint.config.js": renderer.render_string(
            ESLINT_CONFIG_TEMPLATE, {"scope": settings.scope}
        ),
        "src/index.ts": SOURCE_ENTRY,
    }


def _config_only_files(
    request: ScaffoldRequest,
    settings: ScaffoldSettings,
    renderer: TemplateRenderer,
) -> GeneratedFileSet:
    return {
        ".gitignore": build_gitignore(request.kind),
        "README.md": build_readme(request, settings, renderer),
        "package.json": _dump_json(build_manifest(request, settings)),
        "index.js": CONFIG_ENTRY,
    }


def generate(
    request: ScaffoldRequest,
    settings: ScaffoldSettings | None = None,
    *,
    renderer: TemplateRenderer | None = None,
) -> GeneratedFileSet:
    """Return every file for ``request`` keyed by path relative to the package root."""

    if settings is None:
        settings = ScaffoldSettings()
    renderer = renderer or TemplateRenderer()

    match request.kind:
        case PackageKind.CONFIG_ONLY:
            return _config_only_files(request, settings, renderer)
        case PackageKind.NODE_LIB | PackageKind.REACT_LIBRARY:
            return _source_package_files(request, settings, renderer)
        case _:
            assert_never(request.kind)
