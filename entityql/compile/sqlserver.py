"""Microsoft SQL Server dialect."""
from __future__ import annotations

from entityql.compile.base import SQLDialect
from entityql.schema.columns import DbType

_UNSIGNED_TYPES: dict[DbType, DbType] = {
    DbType.UINT16: DbType.INT32,
    DbType.UINT32: DbType.INT32,
    DbType.UINT64: DbType.INT64,
}


class SQLServerDialect(SQLDialect):
    """Renders T-SQL with ``@name`` parameters.

    Parameter style: the declared name is used verbatim (``@Id``), which is
    what ``SqlClient``-style providers and ``pymssql``'s named style expect.

    Identifiers are encapsulated with square brackets, row limiting uses
    ``SELECT TOP n`` and dirty reads use the ``WITH(NOLOCK)`` table hint.
    SQL Server has no unsigned integer types; unsigned declarations are
    widened to the next signed type.
    """

    @property
    def dialect_name(self) -> str:
        return "sqlserver"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace("]", "]]")
        return f"[{escaped}]"

    def param_placeholder(self, name: str) -> str:
        return name

    def limit_prefix(self, limit: int) -> str:
        return f"TOP {limit}"

    def limit_suffix(self, limit: int) -> str:
        return ""

    def dirty_read_hint(self) -> str:
        return "WITH(NOLOCK)"

    def provider_type(self, db_type: DbType) -> DbType:
        return _UNSIGNED_TYPES.get(db_type, db_type)
