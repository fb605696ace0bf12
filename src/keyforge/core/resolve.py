"""Resolve the effective keys-manager configuration.

:func:`resolve_config` merges the configuration layers, anchors every path at
the project base path and checks that the required directories exist. The
collaborators that read project state are injectable so callers and tests can
substitute them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from keyforge.core.config import (
    GlobalConfig,
    KeysConfig,
    ResolvedConfig,
    default_config,
    merge_config,
)
from keyforge.core.errors import ConfigPathError
from keyforge.core.logging import Logger, get_logger
from keyforge.core.paths import resolve_config_paths
from keyforge.core.validation import validate_config_paths
from keyforge.project import (
    ProjectBasePath,
    collect_scopes,
    load_global_config,
    resolve_project_base_path,
)

__all__ = [
    "GlobalConfigProvider",
    "ProjectBasePathResolver",
    "ScopesProvider",
    "resolve_config",
]

ProjectBasePathResolver = Callable[[], ProjectBasePath | str | Path]
GlobalConfigProvider = Callable[[str], GlobalConfig | Mapping[str, Any] | None]
ScopesProvider = Callable[[Iterable[Path]], Any]


def _default_base_path_resolver(cwd: Path | None) -> ProjectBasePathResolver:
    return lambda: resolve_project_base_path(cwd)


def _default_global_config_provider(cwd: Path | None) -> GlobalConfigProvider:
    return lambda project_base_path: load_global_config(project_base_path, cwd=cwd)


def _base_path_value(value: ProjectBasePath | str | Path) -> str:
    if isinstance(value, ProjectBasePath):
        return value.path
    return str(value)


def resolve_config(
    inline_config: KeysConfig | Mapping[str, Any] | None = None,
    *,
    project_base_path_resolver: ProjectBasePathResolver | None = None,
    global_config_provider: GlobalConfigProvider | None = None,
    scopes_provider: ScopesProvider | None = None,
    defaults: KeysConfig | None = None,
    cwd: Path | None = None,
    logger: Logger | None = None,
) -> ResolvedConfig:
    """Build the resolved configuration for a single invocation.

    Args:
        inline_config: Caller overrides; highest precedence.
        project_base_path_resolver: Returns the project base path. Defaults to
            :func:`keyforge.project.resolve_project_base_path`.
        global_config_provider: Receives the base path and returns the
            Transloco global config. Defaults to
            :func:`keyforge.project.load_global_config`.
        scopes_provider: Receives the resolved input directories and returns
            the scopes value attached to the result. Defaults to
            :func:`keyforge.project.collect_scopes`.
        defaults: Default layer override; the packaged defaults otherwise.
        cwd: Working directory used to anchor relative paths. The default
            collaborators also read the project manifests and the Transloco
            config from here.
        logger: Logger for diagnostics.

    Returns:
        The merged configuration with absolute paths and scopes attached.

    Raises:
        ConfigPathError: If an input directory, or the translations directory
            outside ``extract``, is missing or not a directory.
    """

    log = logger or get_logger(__name__)
    resolve_base = project_base_path_resolver or _default_base_path_resolver(cwd)
    provide_global = global_config_provider or _default_global_config_provider(cwd)
    provide_scopes = scopes_provider or collect_scopes

    project_base_path = _base_path_value(resolve_base())
    global_config = provide_global(project_base_path)
    base_defaults = defaults if defaults is not None else default_config()

    merged = merge_config(base_defaults, global_config, inline_config)
    resolved_paths = resolve_config_paths(
        merged,
        project_base_path,
        cwd=cwd,
        logger=log,
    )
    resolved = ResolvedConfig.model_validate(
        {**merged.model_dump(), **resolved_paths}
    )

    log.debug(
        "config-resolved",
        project_base_path=project_base_path,
        command=merged.command.value if merged.command else None,
        input=[str(p) for p in resolved_paths["input"]],
        output=str(resolved_paths["output"]),
        translations_path=str(resolved_paths["translations_path"]),
    )

    issue = validate_config_paths(resolved)
    if issue is not None:
        log.error(
            "config-invalid",
            kind=issue.kind.value,
            subject=issue.subject,
            path=str(issue.path),
        )
        raise ConfigPathError(issue)

    return resolved.model_copy(
        update={"scopes": provide_scopes(resolved.input)}
    )
