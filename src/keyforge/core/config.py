"""Configuration models and the layered merger for :mod:`keyforge`.

Three layers contribute to the effective configuration, from lowest to
highest precedence:

1. the packaged defaults (``keyforge.defaults.toml``),
2. the Transloco global config (``rootTranslationsPath``, ``langs`` and the
   nested ``keysManager`` table),
3. the inline overrides supplied by the caller (usually CLI flags).

Precedence is applied per field, so an inline ``default_value`` leaves every
other field to fall through to the lower layers.
"""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from enum import StrEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import tomllib
import tomlkit
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from keyforge.resources import get_resource

DEFAULTS_RESOURCE_NAME = "keyforge.defaults.toml"


class KeysCommand(StrEnum):
    """Commands that consume a resolved configuration."""

    EXTRACT = "extract"
    FIND = "find"


def _as_list(value: Any) -> Any:
    """Wrap a single path string into a one-item list."""

    if isinstance(value, (str, Path)):
        return [str(value)]
    return value


_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
)


class KeysConfig(BaseModel):
    """Flat keys-manager configuration produced by merging every layer."""

    input: list[str] = Field(
        default_factory=lambda: ["app"],
        description="Directories scanned for translation keys.",
    )
    output: str = Field(
        default="assets/i18n",
        description="Directory receiving generated translation files.",
    )
    translations_path: str = Field(
        default="assets/i18n",
        description="Directory holding the existing translation files.",
    )
    langs: list[str] = Field(default_factory=lambda: ["en"])
    default_value: str | None = Field(
        default=None,
        description="Value written for newly extracted keys.",
    )
    output_format: str = "json"
    file_format: str = "json"
    command: KeysCommand | None = None
    marker: str = "t"
    replace: bool = False
    remove_extra_keys: bool = False
    add_missing_keys: bool = False
    emit_error_on_extra_keys: bool = False
    sort: bool = False
    unflat: bool = False

    model_config = ConfigDict(
        **_MODEL_CONFIG,
        frozen=True,
        extra="forbid",
    )

    @field_validator("input", mode="before")
    @classmethod
    def _coerce_input(cls, value: Any) -> Any:
        return _as_list(value)


class KeysManagerConfig(BaseModel):
    """The ``keysManager`` table of a Transloco global config."""

    input: str | list[str] | None = None
    output: str | None = None
    default_value: str | None = None
    output_format: str | None = None
    file_format: str | None = None
    marker: str | None = None
    replace: bool | None = None
    remove_extra_keys: bool | None = None
    add_missing_keys: bool | None = None
    emit_error_on_extra_keys: bool | None = None
    sort: bool | None = None
    unflat: bool | None = None

    model_config = ConfigDict(**_MODEL_CONFIG, extra="ignore")


class GlobalConfig(BaseModel):
    """Subset of the Transloco global config relevant to keys management."""

    root_translations_path: str | None = None
    langs: list[str] | None = None
    keys_manager: KeysManagerConfig = Field(default_factory=KeysManagerConfig)

    model_config = ConfigDict(**_MODEL_CONFIG, extra="ignore")


def read_packaged_defaults_text() -> str:
    """Return the raw packaged defaults TOML content."""

    resource = get_resource(DEFAULTS_RESOURCE_NAME)
    return resource.read_text(encoding="utf-8")


def load_packaged_defaults() -> dict[str, Any]:
    """Load the packaged defaults as a plain dictionary.

    Example:
        >>> load_packaged_defaults()["translations_path"]
        'assets/i18n'
    """

    return tomllib.loads(read_packaged_defaults_text())


@lru_cache(maxsize=1)
def default_config() -> KeysConfig:
    """Return the built-in default configuration (built once per process)."""

    return KeysConfig.model_validate(load_packaged_defaults())


_FIELD_NAMES_BY_ALIAS: dict[str, str] = {
    field.alias or name: name for name, field in KeysConfig.model_fields.items()
}


def _canonical_key(key: str) -> str:
    """Map a camelCase option name onto its snake_case field name.

    Example:
        >>> _canonical_key("translationsPath")
        'translations_path'
        >>> _canonical_key("output")
        'output'
    """

    return _FIELD_NAMES_BY_ALIAS.get(key, key)


def _coerce_global(
    value: GlobalConfig | Mapping[str, Any] | None,
) -> GlobalConfig | None:
    if value is None or isinstance(value, GlobalConfig):
        return value
    if isinstance(value, MappingABC):
        return GlobalConfig.model_validate(dict(value))
    raise TypeError(f"Unsupported global configuration payload: {value!r}")


def flatten_global_config(
    global_config: GlobalConfig | Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Project a Transloco global config onto :class:`KeysConfig` fields.

    ``rootTranslationsPath`` becomes ``translations_path`` and the
    ``keysManager`` entries are lifted to the top level. Unset values are
    dropped so they cannot shadow the defaults.

    Example:
        >>> flatten_global_config(
        ...     {"rootTranslationsPath": "i18n", "keysManager": {"input": "lib"}}
        ... )
        {'translations_path': 'i18n', 'input': ['lib']}
    """

    config = _coerce_global(global_config)
    if config is None:
        return {}

    flat: dict[str, Any] = {}
    if config.root_translations_path is not None:
        flat["translations_path"] = config.root_translations_path
    if config.langs is not None:
        flat["langs"] = list(config.langs)

    for name, value in config.keys_manager.model_dump().items():
        if value is None:
            continue
        flat[name] = _as_list(value) if name == "input" else value
    return flat


def _normalize_inline(
    inline_config: KeysConfig | Mapping[str, Any] | None,
) -> dict[str, Any]:
    if inline_config is None:
        return {}
    if isinstance(inline_config, KeysConfig):
        return inline_config.model_dump(exclude_unset=True)
    if not isinstance(inline_config, MappingABC):
        raise TypeError(f"Unsupported inline configuration: {inline_config!r}")

    normalized: dict[str, Any] = {}
    for key, value in inline_config.items():
        if value is None:
            continue
        name = _canonical_key(key)
        normalized[name] = _as_list(value) if name == "input" else value
    return normalized


def merge_config(
    defaults: KeysConfig,
    global_config: GlobalConfig | Mapping[str, Any] | None = None,
    inline_config: KeysConfig | Mapping[str, Any] | None = None,
) -> KeysConfig:
    """Combine the configuration layers into one flat :class:`KeysConfig`.

    Args:
        defaults: Built-in default configuration.
        global_config: Transloco global config, if any.
        inline_config: Caller overrides keyed by field name or camelCase alias.

    Returns:
        A new configuration; ``defaults`` is left untouched. Paths are not
        resolved or validated here.

    Raises:
        pydantic.ValidationError: If an inline key or value is not a valid
            configuration field.

    Example:
        >>> merged = merge_config(
        ...     default_config(),
        ...     {"keysManager": {"output": "assets/override"}},
        ...     {"defaultValue": "missing"},
        ... )
        >>> merged.output, merged.default_value
        ('assets/override', 'missing')
    """

    stack = defaults.model_dump()
    for layer in (
        flatten_global_config(global_config),
        _normalize_inline(inline_config),
    ):
        stack.update(layer)
    return KeysConfig.model_validate(stack)


class ResolvedConfig(KeysConfig):
    """Merged configuration with absolute paths and the attached scopes."""

    input: list[Path]  # type: ignore[assignment]
    output: Path  # type: ignore[assignment]
    translations_path: Path  # type: ignore[assignment]
    scopes: Any = None


def render_config(config: KeysConfig) -> str:
    """Render a configuration as TOML, using the Transloco spelling of keys.

    Example:
        >>> text = render_config(default_config())
        >>> 'translationsPath = "assets/i18n"' in text
        True
    """

    document = tomlkit.document()
    document.add(tomlkit.comment("Resolved by keyforge"))
    if config.command is not None:
        document.add(tomlkit.comment(f"command: {config.command.value}"))
    document.add(tomlkit.nl())

    payload = config.model_dump(
        mode="json",
        by_alias=True,
        exclude={"command", "scopes"},
    )
    for key, value in payload.items():
        if value is None:
            continue
        document[key] = value
    return tomlkit.dumps(document)


__all__ = [
    "DEFAULTS_RESOURCE_NAME",
    "GlobalConfig",
    "KeysCommand",
    "KeysConfig",
    "KeysManagerConfig",
    "ResolvedConfig",
    "default_config",
    "flatten_global_config",
    "load_packaged_defaults",
    "merge_config",
    "read_packaged_defaults_text",
    "render_config",
]
