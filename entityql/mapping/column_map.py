"""Ordered column → parameter map with first-writer-wins de-duplication.

A :class:`ColumnMap` is filled by the router and read by the renderer.  Its
single insertion operation, :meth:`ColumnMap.add`, refuses a column whose name
*or* parameter name is already present.  Two columns sharing only a parameter
name still collide, so at most one of them is ever bound.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from entityql.schema.columns import ColumnDescriptor


@dataclass(frozen=True)
class ColumnEntry:
    """A single routed column.

    Attributes:
        name: Column name.
        parameter: Declared parameter name bound to the column.
        alias: Result-set alias; only set for SELECT payload entries.
        column: The descriptor the entry was created from.
    """

    name: str
    parameter: str
    alias: str | None
    column: ColumnDescriptor


class ColumnMap:
    """Insertion-ordered map keyed by both column name and parameter name."""

    def __init__(self, columns: Iterable[ColumnDescriptor] = (), *, aliased: bool = False) -> None:
        self._entries: list[ColumnEntry] = []
        self._names: set[str] = set()
        self._parameters: set[str] = set()
        self.extend(columns, aliased=aliased)

    def add(self, column: ColumnDescriptor, *, aliased: bool = False) -> bool:
        """Insert ``column`` unless its name or parameter is already mapped.

        Args:
            column: The candidate column.
            aliased: Keep the column's alias on the entry (SELECT payload).

        Returns:
            ``True`` if the column was inserted, ``False`` if it was skipped.
        """
        if self.contains(column):
            return False
        self._entries.append(
            ColumnEntry(
                name=column.name,
                parameter=column.parameter_name,
                alias=column.alias if aliased else None,
                column=column,
            )
        )
        self._names.add(column.name)
        self._parameters.add(column.parameter_name)
        return True

    def extend(self, columns: Iterable[ColumnDescriptor], *, aliased: bool = False) -> int:
        """Add each column in order; returns how many were inserted."""
        return sum(1 for c in columns if self.add(c, aliased=aliased))

    def contains(self, column: ColumnDescriptor) -> bool:
        """True if the column's name or parameter name is already mapped."""
        return column.name in self._names or column.parameter_name in self._parameters

    def entries(self) -> tuple[ColumnEntry, ...]:
        """Returns an immutable snapshot of the entries in insertion order."""
        return tuple(self._entries)

    @property
    def names(self) -> list[str]:
        return [e.name for e in self._entries]

    @property
    def parameters(self) -> list[str]:
        return [e.parameter for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ColumnEntry]:
        return iter(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{e.name}={e.parameter}" for e in self._entries)
        return f"ColumnMap({pairs})"
