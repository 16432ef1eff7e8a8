"""Workspace package scaffolding helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .config import ScaffoldRequest, ScaffoldSettings
from .errors import TargetExistsError
from .registry import GeneratedFileSet, generate
from .template import TemplateRenderer

__all__ = ["PackageScaffolder", "materialize"]

LOGGER = logging.getLogger(__name__)


def _destination(target_path: Path, relative_path: str) -> Path:
    destination = (target_path / relative_path).resolve()
    if destination == target_path or not destination.is_relative_to(target_path):
        raise ValueError(f"refusing to write {relative_path!r} outside {target_path}")
    return destination


def materialize(
    target_dir: str | Path,
    files: Mapping[str, str],
    *,
    label: str | None = None,
) -> Path:
    """Create ``target_dir`` and write ``files`` into it.

    The target must not exist yet; its parent is created when missing. Files
    are written one at a time in mapping order and nothing is rolled back if
    a later write fails. ``label`` names the target in error messages.

    Raises
    ------
    TargetExistsError
        When ``target_dir`` already exists, including as a dangling symlink.
        Nothing is written in that case.
    """

    target = Path(target_dir).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    # mkdir before resolving so a symlink at the target counts as existing
    try:
        target.mkdir()
    except FileExistsError:
        raise TargetExistsError(f"Target already exists: {label or target}") from None

    target_path = target.resolve()
    for relative_path, content in files.items():
        destination = _destination(target_path, relative_path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(content, encoding="utf-8")
        LOGGER.debug("wrote %s (%d bytes)", destination, len(content))

    return target_path


@dataclass(slots=True)
class PackageScaffolder:
    """Generate and write workspace packages under ``settings.packages_dir``."""

    settings: ScaffoldSettings = field(default_factory=ScaffoldSettings)
    renderer: TemplateRenderer = field(default_factory=TemplateRenderer)

    def target_for(self, request: ScaffoldRequest, repo_root: str | Path) -> Path:
        return Path(repo_root) / self.settings.packages_dir / request.name

    def render(self, request: ScaffoldRequest) -> GeneratedFileSet:
        """Return the files for ``request`` without touching the filesystem."""

        return generate(request, self.settings, renderer=self.renderer)

    def create(self, request: ScaffoldRequest, repo_root: str | Path) -> Path:
        """Scaffold ``request`` inside ``repo_root`` and return the package path.

        The target is checked before any content is generated, so an existing
        package is reported without doing further work.
        """

        target = self.target_for(request, repo_root)
        label = self.settings.relative_target(request.name)
        if target.exists() or target.is_symlink():
            raise TargetExistsError(f"Target already exists: {label}")

        files = self.render(request)
        package_path = materialize(target, files, label=label)
        LOGGER.info("created %s (%s, %d files)", package_path, request.kind.value, len(files))
        return package_path
