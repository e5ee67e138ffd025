"""Render context value object.

Packages the ``(dialect, encapsulate)`` pair that every statement template
needs into one object, so identifier rendering is decided in one place.
"""
from __future__ import annotations

from dataclasses import dataclass

from entityql.compile.base import SQLDialect
from entityql.mapping.column_map import ColumnEntry


@dataclass(frozen=True)
class RenderContext:
    """Immutable context for rendering one plan.

    Attributes:
        dialect: Dialect-specific rendering strategy.
        encapsulate: Quote table and column identifiers.
    """

    dialect: SQLDialect
    encapsulate: bool

    def ident(self, name: str) -> str:
        return self.dialect.identifier(name, self.encapsulate)

    def param(self, entry: ColumnEntry) -> str:
        return self.dialect.param_placeholder(entry.parameter)

    def select_item(self, entry: ColumnEntry) -> str:
        """``col`` or ``col AS alias``; the alias itself is never quoted."""
        if entry.alias:
            return f"{self.ident(entry.name)} AS {entry.alias}"
        return self.ident(entry.name)

    def table(self, name: str, alias: str | None = None) -> str:
        """``table`` or ``table AS alias``; the alias itself is never quoted."""
        if alias:
            return f"{self.ident(name)} AS {alias}"
        return self.ident(name)
