"""PostgreSQL dialect."""
from __future__ import annotations

from entityql.compile.base import SQLDialect


class PostgresDialect(SQLDialect):
    """Renders PostgreSQL-flavoured parameterized SQL.

    Parameter style: ``%(name)s`` – compatible with ``psycopg2`` and
    ``psycopg`` named-parameter execution.  The declared name loses its
    ``@`` / ``:`` / ``$`` prefix (``@Id`` becomes ``%(Id)s``).

    Note: PostgreSQL never reads uncommitted data; dirty reads are ignored.
    """

    @property
    def dialect_name(self) -> str:
        return "postgres"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace('"', '""')
        return f'"{escaped}"'

    def param_placeholder(self, name: str) -> str:
        return f"%({self.parameter_key(name)})s"

    def parameter_key(self, name: str) -> str:
        return self.strip_prefix(name)
