"""Column classification by semantic role.

Every function here is pure and order preserving: it filters, never sorts.
An empty match is an empty list, not an error.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum

from entityql.schema.columns import ColumnDescriptor


class ColumnRole(str, Enum):
    """The column subsets the router asks for."""

    PRIMARY_KEY = "primary_key"
    FOREIGN_KEY = "foreign_key"
    NON_DB_GENERATED = "non_db_generated"
    NON_KEY = "non_key"
    ALL = "all"


_PREDICATES: dict[ColumnRole, Callable[[ColumnDescriptor], bool]] = {
    ColumnRole.PRIMARY_KEY: lambda c: c.is_primary_key,
    ColumnRole.FOREIGN_KEY: lambda c: c.is_foreign_key,
    ColumnRole.NON_DB_GENERATED: lambda c: not c.is_db_generated,
    ColumnRole.NON_KEY: lambda c: not c.is_primary_key,
    ColumnRole.ALL: lambda c: True,
}


def classify(columns: Iterable[ColumnDescriptor], role: ColumnRole) -> list[ColumnDescriptor]:
    """Return the columns matching ``role`` in their original order.

    Args:
        columns: Column descriptors as supplied by the metadata source.
        role: The subset to select.

    Returns:
        A new list; the input is not modified.
    """
    matches = _PREDICATES[ColumnRole(role)]
    return [c for c in columns if matches(c)]


def primary_keys(columns: Iterable[ColumnDescriptor]) -> list[ColumnDescriptor]:
    return classify(columns, ColumnRole.PRIMARY_KEY)


def foreign_keys(columns: Iterable[ColumnDescriptor]) -> list[ColumnDescriptor]:
    return classify(columns, ColumnRole.FOREIGN_KEY)


def non_db_generated(columns: Iterable[ColumnDescriptor]) -> list[ColumnDescriptor]:
    return classify(columns, ColumnRole.NON_DB_GENERATED)


def non_key(columns: Iterable[ColumnDescriptor]) -> list[ColumnDescriptor]:
    """All columns that are not part of the primary key."""
    return classify(columns, ColumnRole.NON_KEY)
