"""entityQL – entity-to-SQL query compilation.

Describe an entity's columns once; get a dialect-correct, parameterized
EXISTS / DELETE / INSERT / SELECT / UPDATE statement for it on demand.

Public API
----------
``compile_query``
    Route, plan, render and bind one statement from column metadata.

Re-exported types
-----------------
``ColumnDescriptor``, ``TableInfo``, ``DataSourceInfo``, ``RoutingOptions``,
``OperationType``, ``EntityShape``, ``RenderedQuery``, ``ProviderParameter``,
``EntityQueryCompiler``, ``AdapterSettings``, and all error classes.

Extensibility
-------------
New dialects can be registered via::

    from entityql.compile.registry import DialectFactory

    @DialectFactory.register("oracle")
    class OracleDialect(SQLDialect):
        ...

After registration, ``compile_query(..., dialect="oracle")`` picks it up.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from entityql.compile.base import ProviderParameter, RenderedQuery, SQLDialect
from entityql.compile.builder import EntityQueryCompiler
from entityql.compile.mysql import MySQLDialect
from entityql.compile.postgres import PostgresDialect
from entityql.compile.registry import DialectFactory
from entityql.compile.sqlite import SQLiteDialect
from entityql.compile.sqlserver import SQLServerDialect
from entityql.errors import (
    CompileError,
    EntityQLError,
    InvalidArgumentError,
    InvalidOperationError,
    MissingPredicateError,
    ParameterCollisionError,
    UnsupportedDialectError,
)
from entityql.logging_config import configure_logging, get_logger
from entityql.mapping.classifier import ColumnRole, classify
from entityql.mapping.column_map import ColumnMap
from entityql.schema.columns import (
    ColumnDescriptor,
    DataSourceInfo,
    DbType,
    EntityMetadata,
    ParameterDirection,
    TableInfo,
)
from entityql.schema.options import EntityShape, OperationType, RoutingOptions
from entityql.settings import AdapterSettings, get_settings

# ---------------------------------------------------------------------------
# Register built-in dialects with DialectFactory
# ---------------------------------------------------------------------------

DialectFactory.register_class("sqlserver", SQLServerDialect)
DialectFactory.register_class("sqlite", SQLiteDialect)
DialectFactory.register_class("postgres", PostgresDialect)
DialectFactory.register_class("mysql", MySQLDialect)

__all__ = [
    # Core pipeline
    "compile_query",
    "EntityQueryCompiler",
    # Metadata
    "ColumnDescriptor",
    "TableInfo",
    "DataSourceInfo",
    "EntityMetadata",
    "DbType",
    "ParameterDirection",
    "ColumnRole",
    "classify",
    "ColumnMap",
    # Options
    "OperationType",
    "EntityShape",
    "RoutingOptions",
    "AdapterSettings",
    "get_settings",
    # Output
    "RenderedQuery",
    "ProviderParameter",
    # Dialects
    "SQLDialect",
    "DialectFactory",
    "SQLServerDialect",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
    # Logging
    "configure_logging",
    "get_logger",
    # Errors
    "EntityQLError",
    "CompileError",
    "InvalidArgumentError",
    "InvalidOperationError",
    "MissingPredicateError",
    "ParameterCollisionError",
    "UnsupportedDialectError",
]


def compile_query(
    operation: OperationType | str,
    shape: EntityShape | str,
    columns: Iterable[ColumnDescriptor | Mapping[str, Any]] | None,
    table: TableInfo | str | None,
    options: RoutingOptions | None = None,
    *,
    values: Mapping[str, Any] | None = None,
    dialect: SQLDialect | str | None = None,
    settings: AdapterSettings | None = None,
) -> RenderedQuery:
    """Compile one statement from an entity's column metadata.

    This is the main entry point for the entityQL pipeline::

        query = entityql.compile_query(
            OperationType.UPDATE,
            EntityShape.SINGLE_ENTITY,
            columns=[
                ColumnDescriptor(name="Id", is_primary_key=True, db_type=DbType.INT32),
                ColumnDescriptor(name="Name"),
            ],
            table=TableInfo(name="Customers"),
            values={"Id": 7, "Name": "Ada"},
        )
        cursor.execute(query.sql_text, query.as_params())

    Args:
        operation: Statement kind (``OperationType`` or its value).
        shape: ``EntityShape`` of the caller.
        columns: Column descriptors in declaration order.
        table: Table metadata or a bare table name.
        options: Routing knobs; defaults to the adapter settings.
        values: Runtime values keyed by column or parameter name.
        dialect: Dialect instance or registered name; defaults to
            ``settings.dialect``.
        settings: Adapter settings; defaults to :func:`get_settings`.

    Returns:
        ``RenderedQuery`` with ``sql_text``, ``parameters`` and
        ``command_timeout``.

    Raises:
        InvalidArgumentError: If ``columns`` or ``table`` is missing.
        InvalidOperationError: If ``operation`` is not one of the five kinds.
        MissingPredicateError: If a row-scoped statement has no predicates.
        ParameterCollisionError: If two columns bind to one driver parameter.
        UnsupportedDialectError: If ``dialect`` is not registered.
    """
    compiler = EntityQueryCompiler(dialect=dialect, settings=settings)
    return compiler.compile(operation, shape, columns, table, options, values)
