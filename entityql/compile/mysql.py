"""MySQL dialect."""
from __future__ import annotations

from entityql.compile.base import SQLDialect


class MySQLDialect(SQLDialect):
    """Renders MySQL-flavoured parameterized SQL.

    Parameter style: ``%(name)s`` – compatible with ``PyMySQL`` and
    ``mysql-connector-python`` named-parameter execution.

    Identifiers are quoted with backticks (`` ` ``) rather than double-quotes.
    MySQL has no per-table lock-free hint; dirty reads are left to the
    session isolation level.
    """

    @property
    def dialect_name(self) -> str:
        return "mysql"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace("`", "``")
        return f"`{escaped}`"

    def param_placeholder(self, name: str) -> str:
        return f"%({self.parameter_key(name)})s"

    def parameter_key(self, name: str) -> str:
        return self.strip_prefix(name)
