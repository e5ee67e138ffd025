"""Utilities for building entity metadata from external sources.

SQLAlchemy converter
--------------------
:func:`metadata_from_table` turns an existing SQLAlchemy
:class:`~sqlalchemy.schema.Table` into :class:`EntityMetadata`;
:func:`metadata_from_engine` reflects one table from a live engine first.

Install the optional dependency before using this module::

    pip install "entityql[sqlalchemy]"

Example::

    from sqlalchemy import create_engine
    from entityql.schema.converters import metadata_from_engine

    engine = create_engine("sqlite:///shop.db")
    meta = metadata_from_engine(engine, "orders", entity_type="Order")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from entityql.schema.columns import (
    ColumnDescriptor,
    DataSourceInfo,
    DbType,
    EntityMetadata,
    TableInfo,
)

if TYPE_CHECKING:
    from sqlalchemy import Column, Engine, Table


def metadata_from_engine(
    engine: Engine,
    table_name: str,
    *,
    schema: str | None = None,
    entity_type: str | None = None,
    data_source: DataSourceInfo | None = None,
) -> EntityMetadata:
    """Reflect ``table_name`` from ``engine`` and convert it.

    Args:
        engine: A connected :class:`sqlalchemy.engine.Engine` instance.
        table_name: The table to reflect.
        schema: Optional database schema name (e.g. ``"dbo"``).
        entity_type: Declared entity type recorded on the :class:`TableInfo`.
        data_source: Data-source defaults; defaults to ``DataSourceInfo()``.

    Returns:
        A fully populated :class:`EntityMetadata`.

    Raises:
        ImportError: If ``sqlalchemy`` is not installed.
    """
    try:
        from sqlalchemy import MetaData as _MetaData
        from sqlalchemy import Table as _Table
    except ImportError as exc:
        raise ImportError(
            "SQLAlchemy is required for metadata_from_engine(). "
            'Install it with: pip install "entityql[sqlalchemy]"'
        ) from exc

    metadata = _MetaData()
    table = _Table(table_name, metadata, schema=schema, autoload_with=engine)
    return metadata_from_table(table, entity_type=entity_type, data_source=data_source)


def metadata_from_table(
    table: Table,
    *,
    entity_type: str | None = None,
    alias: str | None = None,
    data_source: DataSourceInfo | None = None,
) -> EntityMetadata:
    """Convert a SQLAlchemy ``Table`` into :class:`EntityMetadata`.

    Role mapping:

    * primary key columns → ``is_primary_key``;
    * columns carrying a ``ForeignKey`` → ``is_foreign_key``;
    * the table's autoincrement column, identity and computed columns →
      ``is_db_generated``.

    Columns keep the table's declaration order.
    """
    generated = table.autoincrement_column
    columns = [
        ColumnDescriptor(
            name=col.name,
            db_type=db_type_for(col),
            # col.nullable is None for some reflected columns; treat unset as
            # nullable, matching the database default.
            nullable=col.nullable is not False,
            is_primary_key=bool(col.primary_key),
            is_foreign_key=bool(col.foreign_keys),
            is_db_generated=(
                col is generated or col.identity is not None or col.computed is not None
            ),
        )
        for col in table.columns
    ]
    return EntityMetadata(
        table=TableInfo(name=table.name, alias=alias, entity_type=entity_type),
        columns=columns,
        data_source=data_source or DataSourceInfo(),
    )


def db_type_for(column: Column) -> DbType:
    """Map a SQLAlchemy column type onto :class:`DbType`.

    Checks run most-specific first because SQLAlchemy's type classes form a
    hierarchy (``Float`` is a ``Numeric``, ``BigInteger`` an ``Integer``).
    """
    from sqlalchemy import types as sa

    type_ = column.type
    checks: list[tuple[type, DbType]] = [
        (sa.Boolean, DbType.BOOLEAN),
        (sa.SmallInteger, DbType.INT16),
        (sa.BigInteger, DbType.INT64),
        (sa.Integer, DbType.INT32),
        (sa.Float, DbType.DOUBLE),
        (sa.Numeric, DbType.DECIMAL),
        (sa.DateTime, DbType.DATETIME),
        (sa.Date, DbType.DATE),
        (sa.Time, DbType.TIME),
        (sa.Uuid, DbType.GUID),
        (sa.LargeBinary, DbType.BINARY),
        (sa.String, DbType.STRING),
    ]
    for sa_type, db_type in checks:
        if isinstance(type_, sa_type):
            return db_type
    return DbType.OBJECT
