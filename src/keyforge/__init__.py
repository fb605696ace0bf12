"""Configuration resolution for the :mod:`keyforge` i18n keys manager.

Example:
    >>> from keyforge import __version__
    >>> isinstance(__version__, str)
    True
"""

from importlib import metadata

from keyforge.core.resolve import resolve_config

try:
    __version__ = metadata.version("keyforge")
except metadata.PackageNotFoundError:  # pragma: no cover - fallback for source checkouts
    __version__ = "0.0.0"

__all__ = ["__version__", "resolve_config"]
