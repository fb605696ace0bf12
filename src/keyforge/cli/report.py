"""Console output helpers for the ``keyforge`` commands."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NoReturn

import typer

from keyforge.core.config import ResolvedConfig
from keyforge.core.errors import PathIssue
from keyforge.core.logging import Logger


def build_inline_overrides(**options: Any) -> dict[str, Any]:
    """Drop unset CLI options so lower configuration layers show through.

    Example:
        >>> build_inline_overrides(input=[], output="out", sort=None)
        {'output': 'out'}
    """

    overrides: dict[str, Any] = {}
    for name, value in options.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)) and not value:
            continue
        overrides[name] = list(value) if isinstance(value, tuple) else value
    return overrides


def report_path_issue(issue: PathIssue, *, logger: Logger) -> NoReturn:
    """Print the invalid-path alert and stop the command."""

    typer.secho(issue.message, fg=typer.colors.BLACK, bg=typer.colors.RED)
    logger.error(
        "command-aborted",
        kind=issue.kind.value,
        subject=issue.subject,
        path=str(issue.path),
    )
    raise typer.Exit(code=1)


def report_failure(message: str, error: Exception, *, logger: Logger) -> NoReturn:
    typer.secho(f"{message}: {error}", fg=typer.colors.RED)
    logger.error("command-failed", error=str(error))
    raise typer.Exit(code=1) from error


def _scopes_count(scopes: Any) -> int | None:
    mapping = getattr(scopes, "scope_to_alias", None)
    if isinstance(mapping, Mapping):
        return len(mapping)
    return None


def emit_config_summary(config: ResolvedConfig) -> None:
    """Print a human-friendly summary of the resolved configuration."""

    command = config.command.value if config.command else "none"
    typer.secho(f"Configuration resolved ({command})", fg=typer.colors.GREEN, bold=True)
    typer.echo("  input:")
    for path in config.input:
        typer.echo(f"    - {path}")
    typer.echo(f"  output: {config.output}")
    typer.echo(f"  translations: {config.translations_path}")
    typer.echo(f"  langs: {', '.join(config.langs)}")
    typer.echo(f"  format: {config.file_format} -> {config.output_format}")
    if config.default_value is not None:
        typer.echo(f"  default value: {config.default_value}")
    count = _scopes_count(config.scopes)
    if count is not None:
        typer.echo(f"  scopes: {count}")


__all__ = [
    "build_inline_overrides",
    "emit_config_summary",
    "report_failure",
    "report_path_issue",
]
