"""Transloco scope discovery.

Scopes are declared in TypeScript sources, either as
``provideTranslocoScope('todos')`` or as an object literal such as
``{ scope: 'todos-page', alias: 'todos' }``. The map collected here is handed
to the commands untouched.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, Field

from keyforge.core.logging import get_logger

__all__ = ["Scopes", "collect_scopes", "scope_alias"]

_PROVIDE_SCOPE = re.compile(r"provideTranslocoScope\(\s*['\"]([^'\"]+)['\"]")
_OBJECT_LITERAL = re.compile(r"\{[^{}]*\}")
_SCOPE_KEY = re.compile(r"\bscope['\"]?\s*:\s*['\"]([^'\"]+)['\"]")
_ALIAS_KEY = re.compile(r"\balias['\"]?\s*:\s*['\"]([^'\"]+)['\"]")
_SOURCE_SUFFIXES: tuple[str, ...] = (".ts",)


class Scopes(BaseModel):
    """Bidirectional scope/alias map."""

    alias_to_scope: dict[str, str] = Field(default_factory=dict)
    scope_to_alias: dict[str, str] = Field(default_factory=dict)

    def add(self, scope: str, alias: str | None = None) -> None:
        resolved = alias or scope_alias(scope)
        self.scope_to_alias[scope] = resolved
        self.alias_to_scope[resolved] = scope


def scope_alias(scope: str) -> str:
    """Return the default alias Transloco derives for ``scope``.

    Example:
        >>> scope_alias("todos-page")
        'todosPage'
        >>> scope_alias("admin/users")
        'adminUsers'
    """

    head, *rest = re.split(r"[-_/\s]+", scope.strip())
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _iter_sources(roots: Iterable[Path]) -> Iterable[Path]:
    for root in roots:
        if not root.is_dir():
            continue
        for path in sorted(root.rglob("*")):
            if path.suffix in _SOURCE_SUFFIXES and path.is_file():
                yield path


def collect_scopes(input_paths: Iterable[str | Path]) -> Scopes:
    """Scan the input directories for scope declarations."""

    scopes = Scopes()
    logger = get_logger(__name__)
    for source in _iter_sources(Path(p) for p in input_paths):
        text = source.read_text(encoding="utf-8", errors="replace")
        for match in _PROVIDE_SCOPE.finditer(text):
            scopes.add(match.group(1))
        for literal in _OBJECT_LITERAL.finditer(text):
            body = literal.group(0)
            scope = _SCOPE_KEY.search(body)
            if scope is None:
                continue
            alias = _ALIAS_KEY.search(body)
            scopes.add(scope.group(1), alias.group(1) if alias else None)

    logger.debug("scopes-collected", count=len(scopes.scope_to_alias))
    return scopes
