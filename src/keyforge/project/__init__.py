"""Collaborators that read project state for :mod:`keyforge`.

These helpers supply the project base path, the Transloco global config and
the scopes map consumed by :func:`keyforge.core.resolve.resolve_config`.
"""

from __future__ import annotations

from .base_path import ProjectBasePath, resolve_project_base_path
from .errors import GlobalConfigError, ProjectConfigError
from .scopes import Scopes, collect_scopes
from .transloco import load_global_config

__all__ = [
    "GlobalConfigError",
    "ProjectBasePath",
    "ProjectConfigError",
    "Scopes",
    "collect_scopes",
    "load_global_config",
    "resolve_project_base_path",
]
