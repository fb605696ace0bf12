"""Shared pytest fixtures for configuration resolution tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, Mapping

import pytest
import structlog

from keyforge.core.config import ResolvedConfig
from keyforge.core.resolve import resolve_config

PROJECT_BASE = "project"


@pytest.fixture(autouse=True)
def reset_logging_state() -> Iterator[None]:
    """Leave structlog and the root logger as each test found them."""

    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


@pytest.fixture
def project_root(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Path:
    """Create a small project tree and make it the working directory.

    Layout (relative to ``tmp_path``)::

        project/app/            default input
        project/assets/i18n/    default translations
        project/folder/
        project/1.html          regular file
    """

    base = tmp_path / PROJECT_BASE
    (base / "app").mkdir(parents=True)
    (base / "assets" / "i18n").mkdir(parents=True)
    (base / "folder").mkdir()
    (base / "1.html").write_text("<p>{{ 'title' | transloco }}</p>\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("KEYFORGE_PROJECT_BASE_PATH", raising=False)
    return tmp_path


@pytest.fixture
def expected_path(project_root: Path) -> Callable[[str], Path]:
    """Return the absolute form of a path relative to the project base."""

    def _expected(relative: str) -> Path:
        return (project_root / PROJECT_BASE / relative).resolve(strict=False)

    return _expected


@pytest.fixture
def global_config() -> dict[str, Any]:
    """Mutable Transloco config served by the injected provider."""

    return {}


@pytest.fixture
def resolve(
    project_root: Path,
    global_config: dict[str, Any],
) -> Callable[..., ResolvedConfig]:
    """Call :func:`resolve_config` with the test project collaborators."""

    def _resolve(inline: Mapping[str, Any] | None = None) -> ResolvedConfig:
        return resolve_config(
            inline,
            project_base_path_resolver=lambda: PROJECT_BASE,
            global_config_provider=lambda _base: global_config,
            cwd=project_root,
        )

    return _resolve
