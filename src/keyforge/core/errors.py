"""Domain-specific exceptions and path diagnostics for :mod:`keyforge`."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class PathIssueKind(StrEnum):
    """Reasons a configured directory fails validation."""

    PATH_DOESNT_EXIST = "pathDoesntExist"
    PATH_IS_NOT_DIR = "pathIsNotDir"


MESSAGES: dict[PathIssueKind, str] = {
    PathIssueKind.PATH_DOESNT_EXIST: "path does not exist",
    PathIssueKind.PATH_IS_NOT_DIR: "path is not a directory",
}


@dataclass(frozen=True, slots=True)
class PathIssue:
    """First validation failure found for a configured path.

    Example:
        >>> from pathlib import Path
        >>> issue = PathIssue(
        ...     kind=PathIssueKind.PATH_IS_NOT_DIR,
        ...     subject="Input",
        ...     path=Path("/tmp/file.html"),
        ... )
        >>> issue.message
        'Input path is not a directory'
    """

    kind: PathIssueKind
    subject: str
    path: Path

    @property
    def message(self) -> str:
        """Return the user-facing ``"<Subject> <message>"`` line."""

        return f"{self.subject} {MESSAGES[self.kind]}"


class KeyforgeError(RuntimeError):
    """Base error for keyforge failures."""


class ConfigPathError(KeyforgeError):
    """Raised when a resolved configuration points at an invalid directory."""

    def __init__(self, issue: PathIssue) -> None:
        super().__init__(issue.message)
        self.issue = issue

    @property
    def kind(self) -> PathIssueKind:
        return self.issue.kind

    @property
    def subject(self) -> str:
        return self.issue.subject


__all__ = [
    "ConfigPathError",
    "KeyforgeError",
    "MESSAGES",
    "PathIssue",
    "PathIssueKind",
]
