"""Path resolution helpers for :mod:`keyforge`.

Configured paths are written relative to the project base path (the
``sourceRoot`` of the project). Users sometimes include that prefix anyway,
e.g. ``src/app`` with a base path of ``src``; such paths are resolved from the
working directory instead of being prefixed twice, and a warning is logged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from keyforge.core.config import KeysConfig
from keyforge.core.logging import Logger, get_logger

__all__ = [
    "has_base_prefix",
    "resolve_config_paths",
    "resolve_many",
    "resolve_one",
]


def _absolute(candidate: Path, cwd: Path) -> Path:
    raw = candidate.expanduser()
    if not raw.is_absolute():
        raw = cwd / raw
    return raw.resolve(strict=False)


def has_base_prefix(path: str | Path, project_base_path: str | Path) -> bool:
    """Return ``True`` when ``path`` already starts with the base path.

    Components are compared, so ``srcfoo`` is not prefixed by ``src``.

    Example:
        >>> has_base_prefix("src/app", "src")
        True
        >>> has_base_prefix("srcfoo/app", "src")
        False
        >>> has_base_prefix("app", ".")
        False
    """

    base_parts = Path(project_base_path).parts
    if not base_parts:
        return False
    return Path(path).parts[: len(base_parts)] == base_parts


def resolve_one(
    path: str | Path,
    project_base_path: str | Path,
    *,
    cwd: Path | None = None,
    logger: Logger | None = None,
    field: str | None = None,
) -> Path:
    """Return the absolute form of ``path`` anchored at the project base path.

    Args:
        path: Configured path, relative to the project base path.
        project_base_path: Project source root (absolute or cwd-relative).
        cwd: Working directory used for relative anchors. Defaults to
            :meth:`Path.cwd`.
        logger: Logger receiving the redundant-prefix warning.
        field: Configuration field name reported alongside the warning.

    Returns:
        The absolute path; the filesystem is not consulted.
    """

    working_dir = cwd if cwd is not None else Path.cwd()
    candidate = Path(path)

    if has_base_prefix(candidate, project_base_path):
        log = logger or get_logger(__name__)
        log.warning(
            "path-already-prefixed",
            path=str(path),
            project_base_path=str(project_base_path),
            field=field,
        )
        return _absolute(candidate, working_dir)

    base = _absolute(Path(project_base_path), working_dir)
    return _absolute(base / candidate, working_dir)


def resolve_many(
    paths: Iterable[str | Path],
    project_base_path: str | Path,
    *,
    cwd: Path | None = None,
    logger: Logger | None = None,
    field: str | None = None,
) -> list[Path]:
    """Resolve each entry of ``paths`` with :func:`resolve_one`, in order."""

    return [
        resolve_one(
            path,
            project_base_path,
            cwd=cwd,
            logger=logger,
            field=field,
        )
        for path in paths
    ]


def resolve_config_paths(
    config: KeysConfig,
    project_base_path: str | Path,
    *,
    cwd: Path | None = None,
    logger: Logger | None = None,
) -> dict[str, Any]:
    """Return absolute ``input``, ``output`` and ``translations_path`` values.

    Example:
        >>> from pathlib import Path
        >>> resolved = resolve_config_paths(
        ...     KeysConfig(input=["app"], output="out"),
        ...     "src",
        ...     cwd=Path("/work"),
        ... )
        >>> resolved["input"], resolved["output"]
        ([PosixPath('/work/src/app')], PosixPath('/work/src/out'))
    """

    return {
        "input": resolve_many(
            config.input,
            project_base_path,
            cwd=cwd,
            logger=logger,
            field="input",
        ),
        "output": resolve_one(
            config.output,
            project_base_path,
            cwd=cwd,
            logger=logger,
            field="output",
        ),
        "translations_path": resolve_one(
            config.translations_path,
            project_base_path,
            cwd=cwd,
            logger=logger,
            field="translations_path",
        ),
    }
