"""Errors raised while reading project and Transloco configuration files."""

from __future__ import annotations

from keyforge.core.errors import KeyforgeError


class ProjectConfigError(KeyforgeError):
    """Raised when a workspace/project manifest cannot be parsed."""


class GlobalConfigError(KeyforgeError):
    """Raised when ``transloco.config.json`` cannot be parsed."""


__all__ = ["GlobalConfigError", "ProjectConfigError"]
