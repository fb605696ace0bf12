"""Project base path discovery.

The base path anchors every relative path of the keys-manager configuration.
It is taken from ``KEYFORGE_PROJECT_BASE_PATH`` when set, otherwise from the
``sourceRoot`` of the project described by an Angular or Nx manifest in the
working directory, and finally defaults to ``src``.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping as MappingABC
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from keyforge.core.logging import get_logger
from keyforge.project.errors import ProjectConfigError

__all__ = [
    "DEFAULT_PROJECT_BASE_PATH",
    "PROJECT_BASE_PATH_ENV",
    "ProjectBasePath",
    "resolve_project_base_path",
]

DEFAULT_PROJECT_BASE_PATH = "src"
PROJECT_BASE_PATH_ENV = "KEYFORGE_PROJECT_BASE_PATH"

_WORKSPACE_MANIFESTS: tuple[str, ...] = ("angular.json", "workspace.json")
_PROJECT_MANIFEST = "project.json"


@dataclass(frozen=True, slots=True)
class ProjectBasePath:
    """Base path plus the manifest kind it was read from."""

    path: str
    source: str = "default"


def _read_json(path: Path) -> Mapping[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ProjectConfigError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(payload, MappingABC):
        raise ProjectConfigError(f"Expected an object at the root of {path}")
    return payload


def _workspace_source_root(manifest: Mapping[str, Any]) -> str | None:
    projects = manifest.get("projects")
    if not isinstance(projects, MappingABC) or not projects:
        return None

    name = manifest.get("defaultProject")
    if not isinstance(name, str) or name not in projects:
        name = next(iter(projects))
    project = projects[name]
    if not isinstance(project, MappingABC):
        return None

    source_root = project.get("sourceRoot")
    if isinstance(source_root, str) and source_root:
        return source_root
    root = project.get("root")
    if isinstance(root, str) and root:
        return f"{root.rstrip('/')}/src"
    return None


def resolve_project_base_path(
    cwd: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> ProjectBasePath:
    """Locate the project base path for the current project.

    Raises:
        ProjectConfigError: If a manifest exists but is not valid JSON.

    Example:
        >>> from pathlib import Path
        >>> resolve_project_base_path(Path("/nonexistent"), environ={})
        ProjectBasePath(path='src', source='default')
    """

    env = os.environ if environ is None else environ
    override = env.get(PROJECT_BASE_PATH_ENV)
    if override:
        return ProjectBasePath(path=override, source="env")

    root = cwd if cwd is not None else Path.cwd()
    logger = get_logger(__name__)

    for name in _WORKSPACE_MANIFESTS:
        manifest_path = root / name
        if not manifest_path.is_file():
            continue
        source_root = _workspace_source_root(_read_json(manifest_path))
        if source_root is not None:
            return ProjectBasePath(path=source_root, source=name)
        logger.debug("project-source-root-missing", manifest=str(manifest_path))

    project_path = root / _PROJECT_MANIFEST
    if project_path.is_file():
        source_root = _read_json(project_path).get("sourceRoot")
        if isinstance(source_root, str) and source_root:
            return ProjectBasePath(path=source_root, source=_PROJECT_MANIFEST)

    return ProjectBasePath(path=DEFAULT_PROJECT_BASE_PATH)
