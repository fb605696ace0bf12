"""Loader for the Transloco global configuration file."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from keyforge.core.config import GlobalConfig
from keyforge.core.logging import get_logger
from keyforge.project.errors import GlobalConfigError

__all__ = ["TRANSLOCO_CONFIG_FILENAME", "find_global_config", "load_global_config"]

TRANSLOCO_CONFIG_FILENAME = "transloco.config.json"


def find_global_config(cwd: Path | None = None) -> Path | None:
    """Return the nearest ``transloco.config.json`` at or above ``cwd``."""

    start = (cwd if cwd is not None else Path.cwd()).resolve(strict=False)
    for directory in (start, *start.parents):
        candidate = directory / TRANSLOCO_CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_global_config(
    project_base_path: str | None = None,
    cwd: Path | None = None,
) -> GlobalConfig:
    """Read the Transloco global config, or return an empty one.

    Args:
        project_base_path: Project base path, recorded in the log context.
        cwd: Directory the search starts from.

    Raises:
        GlobalConfigError: If the file is not valid JSON or has the wrong
            shape.
    """

    path = find_global_config(cwd)
    if path is None:
        return GlobalConfig()

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise GlobalConfigError(f"Invalid JSON in {path}: {exc}") from exc

    try:
        config = GlobalConfig.model_validate(payload)
    except ValidationError as exc:
        raise GlobalConfigError(f"Invalid Transloco config {path}: {exc}") from exc

    get_logger(__name__).debug(
        "global-config-loaded",
        path=str(path),
        project_base_path=project_base_path,
    )
    return config
