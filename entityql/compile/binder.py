"""Parameter binding: column descriptor + runtime value → ProviderParameter."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from entityql.compile.base import ProviderParameter, SQLDialect
from entityql.errors import InvalidArgumentError
from entityql.schema.columns import ColumnDescriptor


class ParameterBinder:
    """Binds runtime values to column descriptors.

    Type, direction and nullability are copied from the descriptor (the type
    passes through the dialect's provider mapping).  The value is attached
    as is: mismatches between value and declared type surface at execution
    time, in the provider, not here.

    Args:
        dialect: Dialect supplying the provider type mapping.
    """

    def __init__(self, dialect: SQLDialect) -> None:
        self._dialect = dialect

    def bind(self, column: ColumnDescriptor, value: Any = None) -> ProviderParameter:
        """Bind ``value`` to ``column``; ``None`` stands for SQL NULL."""
        if column is None:
            raise InvalidArgumentError("column")
        return ProviderParameter(
            name=column.parameter_name,
            value=value,
            db_type=self._dialect.provider_type(column.db_type),
            direction=column.direction,
            nullable=column.nullable,
        )

    def bind_all(
        self,
        columns: Iterable[ColumnDescriptor],
        values: Mapping[str, Any] | None = None,
    ) -> tuple[ProviderParameter, ...]:
        """Bind each column in order.

        Values are looked up by column name, then by parameter name; columns
        found under neither are bound to ``None``.
        """
        values = values or {}
        return tuple(
            self.bind(c, values[c.name] if c.name in values else values.get(c.parameter_name))
            for c in columns
        )
