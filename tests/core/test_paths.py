"""Tests for :mod:`keyforge.core.paths`."""

from __future__ import annotations

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from keyforge.core.config import KeysConfig
from keyforge.core.paths import (
    has_base_prefix,
    resolve_config_paths,
    resolve_many,
    resolve_one,
)


def _prefix_warnings(captured: list[dict]) -> list[dict]:
    return [e for e in captured if e["event"] == "path-already-prefixed"]


def test_resolve_one_anchors_relative_paths_at_base(tmp_path: Path) -> None:
    resolved = resolve_one("app", "src", cwd=tmp_path)

    assert resolved == (tmp_path / "src" / "app").resolve()
    assert resolved.is_absolute()


def test_resolve_one_defaults_to_process_cwd(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.chdir(tmp_path)

    assert resolve_one("app", "src") == (tmp_path / "src" / "app").resolve()


def test_resolve_one_supports_absolute_base(tmp_path: Path) -> None:
    base = tmp_path / "apps" / "web" / "src"

    assert resolve_one("app", base, cwd=Path("/unused")) == (base / "app").resolve()


def test_resolve_one_keeps_absolute_paths(tmp_path: Path) -> None:
    target = tmp_path / "elsewhere"

    with capture_logs() as captured:
        resolved = resolve_one(target, "src", cwd=tmp_path)

    assert resolved == target.resolve()
    assert _prefix_warnings(captured) == []


def test_resolve_one_warns_for_absolute_path_under_absolute_base(
    tmp_path: Path,
) -> None:
    base = tmp_path / "src"
    target = base / "app"

    with capture_logs() as captured:
        resolved = resolve_one(target, base, cwd=Path("/unused"), field="input")

    assert resolved == target.resolve()
    warnings = _prefix_warnings(captured)
    assert len(warnings) == 1
    assert warnings[0]["path"] == str(target)


def test_resolve_one_normalizes_dot_segments(tmp_path: Path) -> None:
    resolved = resolve_one("./app/../assets", "src", cwd=tmp_path)

    assert resolved == (tmp_path / "src" / "assets").resolve()


def test_resolve_one_does_not_double_prefix(tmp_path: Path) -> None:
    with capture_logs() as captured:
        resolved = resolve_one("src/app", "src", cwd=tmp_path, field="input")

    assert resolved == (tmp_path / "src" / "app").resolve()
    warnings = _prefix_warnings(captured)
    assert len(warnings) == 1
    assert warnings[0]["log_level"] == "warning"
    assert warnings[0]["path"] == "src/app"
    assert warnings[0]["project_base_path"] == "src"
    assert warnings[0]["field"] == "input"


def test_resolve_one_ignores_partial_component_matches(tmp_path: Path) -> None:
    with capture_logs() as captured:
        resolved = resolve_one("srcfoo/app", "src", cwd=tmp_path)

    assert resolved == (tmp_path / "src" / "srcfoo" / "app").resolve()
    assert _prefix_warnings(captured) == []


def test_resolve_many_preserves_order(tmp_path: Path) -> None:
    resolved = resolve_many(["b", "a", "c"], "src", cwd=tmp_path)

    assert [p.name for p in resolved] == ["b", "a", "c"]
    assert all(p.parent == (tmp_path / "src").resolve() for p in resolved)


def test_resolve_config_paths_warns_once_per_prefixed_field(
    tmp_path: Path,
) -> None:
    config = KeysConfig(
        input=["src/folder"],
        output="src/2",
        translations_path="assets/i18n",
    )

    with capture_logs() as captured:
        resolved = resolve_config_paths(config, "src", cwd=tmp_path)

    base = (tmp_path / "src").resolve()
    assert resolved == {
        "input": [base / "folder"],
        "output": base / "2",
        "translations_path": base / "assets" / "i18n",
    }
    assert [w["field"] for w in _prefix_warnings(captured)] == ["input", "output"]


@pytest.mark.parametrize(
    ("path", "base", "expected"),
    [
        ("src/app", "src", True),
        ("src", "src", True),
        ("apps/web/src/app", "apps/web/src", True),
        ("app", "src", False),
        ("srcfoo/app", "src", False),
        ("app", ".", False),
        ("/work/src/app", "/work/src", True),
    ],
)
def test_has_base_prefix(path: str, base: str, expected: bool) -> None:
    assert has_base_prefix(path, base) is expected
