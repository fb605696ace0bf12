"""Command-line interface for :mod:`keyforge`.

This module exposes the Typer application behind the ``keyforge`` console
script. Every command resolves the configuration first; an invalid input or
translations directory aborts the run with exit code 1.

Example:
    >>> import typer
    >>> from keyforge.cli import create_app
    >>> isinstance(create_app(), typer.Typer)
    True
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import typer

from keyforge.cli.report import (
    build_inline_overrides,
    emit_config_summary,
    report_failure,
    report_path_issue,
)
from keyforge.core.config import KeysCommand, ResolvedConfig, render_config
from keyforge.core.errors import ConfigPathError
from keyforge.core.logging import configure_logging, get_logger
from keyforge.core.resolve import resolve_config
from keyforge.project.errors import GlobalConfigError, ProjectConfigError

_app_help = (
    "Manage Transloco translation keys."
    "\n\n"
    "Options override `transloco.config.json` (keysManager), which overrides "
    "the built-in defaults. Paths are relative to the project source root."
)

_LOG_LEVEL_ENV = "KEYFORGE_LOG_LEVEL"


def _resolve_for_command(
    command: KeysCommand | None,
    overrides: dict[str, Any],
    *,
    log_level: str,
    log_dir: Path | None,
) -> ResolvedConfig:
    """Configure logging and resolve the configuration, exiting on failure."""

    try:
        configure_logging(level=log_level, log_dir=log_dir)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc

    logger = get_logger(
        __name__,
        command=command.value if command else "config",
    )
    if command is not None:
        overrides["command"] = command

    try:
        config = resolve_config(overrides)
    except ConfigPathError as exc:
        report_path_issue(exc.issue, logger=logger)
    except (ProjectConfigError, GlobalConfigError) as exc:
        report_failure("Failed to load project configuration", exc, logger=logger)

    logger.info(
        "config-ready",
        input=[str(path) for path in config.input],
        translations_path=str(config.translations_path),
    )
    return config


def _register_command(
    app: typer.Typer,
    name: str,
    *,
    help_text: str,
    command: KeysCommand | None,
    handler: Callable[[ResolvedConfig], None],
) -> None:
    """Attach a command sharing the configuration options to ``app``."""

    @app.command(name, help=help_text)
    def run(  # noqa: PLR0913 - CLI surface area intentionally explicit
        input: list[str] = typer.Option(
            None,
            "--input",
            "-i",
            help="Directory scanned for keys (repeatable).",
        ),
        output: str | None = typer.Option(
            None,
            "--output",
            "-o",
            help="Directory receiving the generated translation files.",
        ),
        translations_path: str | None = typer.Option(
            None,
            "--translations-path",
            "-p",
            help="Directory holding the existing translation files.",
        ),
        langs: list[str] = typer.Option(
            None,
            "--langs",
            help="Language code to manage (repeatable).",
        ),
        default_value: str | None = typer.Option(
            None,
            "--default-value",
            "-d",
            help="Value written for newly extracted keys.",
        ),
        output_format: str | None = typer.Option(
            None,
            "--output-format",
            help="Format of generated files (json or pot).",
        ),
        file_format: str | None = typer.Option(
            None,
            "--file-format",
            help="Format of existing translation files (json or pot).",
        ),
        marker: str | None = typer.Option(
            None,
            "--marker",
            help="Marker function name used to flag keys in code.",
        ),
        sort: bool | None = typer.Option(
            None,
            "--sort/--no-sort",
            help="Sort keys in the generated files.",
        ),
        unflat: bool | None = typer.Option(
            None,
            "--unflat/--no-unflat",
            help="Write nested objects instead of dotted keys.",
        ),
        replace: bool | None = typer.Option(
            None,
            "--replace/--no-replace",
            help="Replace existing translation files instead of merging.",
        ),
        remove_extra_keys: bool | None = typer.Option(
            None,
            "--remove-extra-keys/--keep-extra-keys",
            help="Drop keys that are no longer referenced.",
        ),
        add_missing_keys: bool | None = typer.Option(
            None,
            "--add-missing-keys/--no-add-missing-keys",
            help="Add keys found in code but missing from translations.",
        ),
        emit_error_on_extra_keys: bool | None = typer.Option(
            None,
            "--emit-error-on-extra-keys/--no-emit-error-on-extra-keys",
            help="Fail when translation files contain unused keys.",
        ),
        log_level: str = typer.Option(
            "WARNING",
            "--log-level",
            "-l",
            envvar=_LOG_LEVEL_ENV,
            help="Logging level (DEBUG/INFO/WARNING/ERROR).",
        ),
        log_dir: Path | None = typer.Option(
            None,
            "--log-dir",
            help="Also write JSON logs to this directory.",
        ),
    ) -> None:
        overrides = build_inline_overrides(
            input=input,
            output=output,
            translations_path=translations_path,
            langs=langs,
            default_value=default_value,
            output_format=output_format,
            file_format=file_format,
            marker=marker,
            sort=sort,
            unflat=unflat,
            replace=replace,
            remove_extra_keys=remove_extra_keys,
            add_missing_keys=add_missing_keys,
            emit_error_on_extra_keys=emit_error_on_extra_keys,
        )
        config = _resolve_for_command(
            command,
            overrides,
            log_level=log_level,
            log_dir=log_dir,
        )
        handler(config)


def _print_config(config: ResolvedConfig) -> None:
    typer.echo(render_config(config), nl=False)


def create_app() -> "typer.Typer":
    """Return the Typer application powering the ``keyforge`` CLI.

    Returns:
        A configured Typer application ready to be invoked by ``keyforge``.
    """

    app = typer.Typer(
        help=_app_help,
        no_args_is_help=True,
        rich_markup_mode="rich",
        invoke_without_command=False,
    )

    @app.callback()
    def main_callback() -> None:
        """Top-level CLI callback ensuring subcommands are dispatched."""

        return None

    _register_command(
        app,
        "extract",
        help_text="Resolve the configuration for extracting keys from code.",
        command=KeysCommand.EXTRACT,
        handler=emit_config_summary,
    )
    _register_command(
        app,
        "find",
        help_text="Resolve the configuration for finding missing or extra keys.",
        command=KeysCommand.FIND,
        handler=emit_config_summary,
    )
    _register_command(
        app,
        "config",
        help_text="Print the resolved configuration as TOML.",
        command=None,
        handler=_print_config,
    )
    return app


__all__ = ["create_app"]
