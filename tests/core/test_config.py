"""Tests for :mod:`keyforge.core.config`."""

from __future__ import annotations

import tomllib

import pytest
from pydantic import ValidationError

from keyforge.core.config import (
    GlobalConfig,
    KeysCommand,
    KeysConfig,
    default_config,
    flatten_global_config,
    load_packaged_defaults,
    merge_config,
    render_config,
)


def test_default_config_matches_packaged_defaults() -> None:
    defaults = default_config()
    raw = load_packaged_defaults()

    assert defaults.input == raw["input"]
    assert defaults.output == raw["output"]
    assert defaults.translations_path == raw["translations_path"]
    assert defaults.langs == ["en"]
    assert defaults.default_value is None
    assert defaults.command is None
    assert default_config() is defaults


def test_default_config_is_immutable() -> None:
    with pytest.raises(ValidationError):
        default_config().output = "elsewhere"  # type: ignore[misc]


def test_merge_without_layers_returns_defaults() -> None:
    defaults = default_config()

    merged = merge_config(defaults)

    assert merged == defaults
    assert merged is not defaults


def test_merge_applies_inline_fields_only() -> None:
    defaults = default_config()

    merged = merge_config(defaults, inline_config={"defaultValue": "missing"})

    assert merged.default_value == "missing"
    assert merged.model_dump(exclude={"default_value"}) == defaults.model_dump(
        exclude={"default_value"}
    )


def test_merge_maps_transloco_fields() -> None:
    merged = merge_config(
        default_config(),
        {
            "rootTranslationsPath": "i18n",
            "langs": ["en", "es"],
            "keysManager": {
                "defaultValue": "TODO",
                "input": ["lib", "app"],
                "output": "assets/override",
            },
        },
    )

    assert merged.translations_path == "i18n"
    assert merged.langs == ["en", "es"]
    assert merged.default_value == "TODO"
    assert merged.input == ["lib", "app"]
    assert merged.output == "assets/override"


def test_merge_precedence_is_per_field() -> None:
    merged = merge_config(
        default_config(),
        {"keysManager": {"input": "test", "output": "assets/override"}},
        {"input": ["somePath"]},
    )

    assert merged.input == ["somePath"]
    assert merged.output == "assets/override"
    assert merged.translations_path == default_config().translations_path


@pytest.mark.parametrize(
    "layers",
    [
        ({"keysManager": {"input": "single"}}, None),
        (None, {"input": "single"}),
    ],
)
def test_merge_normalizes_single_input_to_list(layers) -> None:
    global_layer, inline_layer = layers

    merged = merge_config(default_config(), global_layer, inline_layer)

    assert merged.input == ["single"]


def test_merge_ignores_none_values() -> None:
    merged = merge_config(
        default_config(),
        {"rootTranslationsPath": None, "keysManager": {"output": None}},
        {"output": None, "defaultValue": None},
    )

    assert merged == default_config()


def test_merge_accepts_snake_case_and_enum_command() -> None:
    merged = merge_config(
        default_config(),
        inline_config={"translations_path": "i18n", "command": "find"},
    )

    assert merged.translations_path == "i18n"
    assert merged.command is KeysCommand.FIND


def test_merge_accepts_config_models() -> None:
    merged = merge_config(
        default_config(),
        GlobalConfig(root_translations_path="i18n"),
        KeysConfig(output="out"),
    )

    assert merged.translations_path == "i18n"
    assert merged.output == "out"
    assert merged.input == default_config().input


def test_merge_rejects_unknown_inline_keys() -> None:
    with pytest.raises(ValidationError):
        merge_config(default_config(), inline_config={"inputs": ["typo"]})


def test_global_config_ignores_unrelated_transloco_keys() -> None:
    config = GlobalConfig.model_validate(
        {
            "rootTranslationsPath": "i18n",
            "scopedLibs": ["./projects/lib"],
            "keysManager": {"addMissingKeys": True, "unknown": 1},
        }
    )

    assert flatten_global_config(config) == {
        "translations_path": "i18n",
        "add_missing_keys": True,
    }


def test_flatten_global_config_handles_absent_layer() -> None:
    assert flatten_global_config(None) == {}
    assert flatten_global_config({}) == {}


def test_flatten_global_config_rejects_unsupported_payload() -> None:
    with pytest.raises(TypeError):
        flatten_global_config(["not", "a", "mapping"])  # type: ignore[arg-type]


def test_render_config_uses_transloco_keys() -> None:
    merged = merge_config(
        default_config(),
        inline_config={"defaultValue": "TODO", "command": "extract"},
    )

    rendered = render_config(merged)
    parsed = tomllib.loads(rendered)

    assert rendered.startswith("# Resolved by keyforge")
    assert "# command: extract" in rendered
    assert parsed["translationsPath"] == "assets/i18n"
    assert parsed["defaultValue"] == "TODO"
    assert parsed["input"] == ["app"]
    assert "command" not in parsed


@pytest.mark.parametrize(
    ("key", "value", "field"),
    [
        ("defaultValue", " missing ", "default_value"),
        ("output", "out ", "output"),
        ("marker", "\tt\n", "marker"),
    ],
)
def test_merge_keeps_inline_strings_verbatim(key, value, field) -> None:
    merged = merge_config(default_config(), None, {key: value})

    assert getattr(merged, field) == value
