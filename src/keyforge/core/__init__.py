"""Core configuration pipeline shared across :mod:`keyforge` commands.

The core namespace holds the configuration models and layer merger, path
resolution, directory validation and logging setup.

Example:
    >>> from keyforge.core import default_config
    >>> default_config().translations_path
    'assets/i18n'
"""

from __future__ import annotations

from .config import (
    GlobalConfig,
    KeysCommand,
    KeysConfig,
    ResolvedConfig,
    default_config,
    merge_config,
)
from .errors import ConfigPathError, PathIssue, PathIssueKind
from .logging import configure_logging, get_logger
from .paths import resolve_many, resolve_one
from .validation import validate_config_paths

__all__ = [
    "ConfigPathError",
    "GlobalConfig",
    "KeysCommand",
    "KeysConfig",
    "PathIssue",
    "PathIssueKind",
    "ResolvedConfig",
    "configure_logging",
    "default_config",
    "get_logger",
    "merge_config",
    "resolve_many",
    "resolve_one",
    "validate_config_paths",
]
