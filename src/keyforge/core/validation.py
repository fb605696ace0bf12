"""Directory checks applied to a resolved configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from keyforge.core.config import KeysCommand, KeysConfig
from keyforge.core.errors import PathIssue, PathIssueKind

__all__ = [
    "INPUT_SUBJECT",
    "TRANSLATIONS_SUBJECT",
    "check_directory",
    "validate_config_paths",
]

INPUT_SUBJECT = "Input"
TRANSLATIONS_SUBJECT = "Translations"


def check_directory(path: str | Path) -> PathIssueKind | None:
    """Return the problem with ``path`` as a directory, or ``None``.

    Example:
        >>> check_directory("/definitely/not/here")
        <PathIssueKind.PATH_DOESNT_EXIST: 'pathDoesntExist'>
    """

    candidate = Path(path)
    if not candidate.exists():
        return PathIssueKind.PATH_DOESNT_EXIST
    if not candidate.is_dir():
        return PathIssueKind.PATH_IS_NOT_DIR
    return None


def _first_issue(
    paths: Iterable[str | Path],
    subject: str,
) -> PathIssue | None:
    for path in paths:
        kind = check_directory(path)
        if kind is not None:
            return PathIssue(kind=kind, subject=subject, path=Path(path))
    return None


def validate_config_paths(config: KeysConfig) -> PathIssue | None:
    """Return the first invalid directory in ``config``, if any.

    Every ``input`` entry must be an existing directory. The translations
    directory is only required when the command is not ``extract``, since
    extraction writes it. ``output`` is a write target and is never checked.
    Checking stops at the first failure.
    """

    issue = _first_issue(config.input, INPUT_SUBJECT)
    if issue is not None:
        return issue

    if config.command is not KeysCommand.EXTRACT:
        return _first_issue([config.translations_path], TRANSLATIONS_SUBJECT)
    return None
