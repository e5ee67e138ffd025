"""SQLite dialect."""
from __future__ import annotations

from entityql.compile.base import SQLDialect

_NAMED_PREFIXES = ("@", ":", "$")


class SQLiteDialect(SQLDialect):
    """Renders SQLite-flavoured parameterized SQL.

    Parameter style: SQLite accepts ``:name``, ``@name`` and ``$name``
    placeholders, so a declared name that already carries one of those
    prefixes is used as is; anything else gets a ``:`` prefix.  Python's
    ``sqlite3`` looks values up by the bare name.

    Note: SQLite has no lock-free read hint; dirty reads are ignored.
    """

    @property
    def dialect_name(self) -> str:
        return "sqlite"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace('"', '""')
        return f'"{escaped}"'

    def param_placeholder(self, name: str) -> str:
        if name.startswith(_NAMED_PREFIXES):
            return name
        return f":{name}"

    def parameter_key(self, name: str) -> str:
        return self.strip_prefix(name)
