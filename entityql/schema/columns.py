"""Pydantic models describing an entity's mapping metadata.

The metadata is produced by the caller (hand-written, loaded from JSON, or
converted from SQLAlchemy via :mod:`entityql.schema.converters`) and is treated
as a read-only snapshot for the duration of one compilation.
"""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DbType(str, Enum):
    """Provider-neutral data type of a bound parameter."""

    ANSI_STRING = "ansi_string"
    STRING = "string"
    BOOLEAN = "boolean"
    BYTE = "byte"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    DECIMAL = "decimal"
    DOUBLE = "double"
    SINGLE = "single"
    CURRENCY = "currency"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    DATETIME2 = "datetime2"
    DATETIME_OFFSET = "datetime_offset"
    GUID = "guid"
    BINARY = "binary"
    XML = "xml"
    OBJECT = "object"


class ParameterDirection(str, Enum):
    """Direction of a bound parameter relative to the statement."""

    INPUT = "input"
    OUTPUT = "output"
    INPUT_OUTPUT = "input_output"
    RETURN_VALUE = "return_value"


class ColumnDescriptor(BaseModel):
    """Mapping metadata for a single column.

    Attributes:
        name: Column name in the data source.
        alias: Optional result-set alias (used by SELECT only).
        parameter_name: Declared parameter name.  Defaults to ``@`` followed by
            the column name with any dots removed.
        db_type: Provider data type of the bound parameter.
        nullable: Whether the column accepts NULL.
        direction: Parameter direction.
        is_primary_key: Column is (part of) the primary key.
        is_foreign_key: Column references a parent entity.
        is_db_generated: Value is produced by the database (identity, default).
        composite_key_order: Position within a composite key; informational.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    alias: str | None = None
    parameter_name: str = ""
    db_type: DbType = DbType.STRING
    nullable: bool = False
    direction: ParameterDirection = ParameterDirection.INPUT
    is_primary_key: bool = False
    is_foreign_key: bool = False
    is_db_generated: bool = False
    composite_key_order: int = 0

    @model_validator(mode="before")
    @classmethod
    def _default_parameter_name(cls, data: object) -> object:
        if isinstance(data, dict) and not data.get("parameter_name") and data.get("name"):
            data = {**data, "parameter_name": "@" + str(data["name"]).replace(".", "")}
        return data


class TableInfo(BaseModel):
    """The table an entity is mapped to.

    Attributes:
        name: Table name.
        alias: Optional table alias, applied to SELECT statements.
        entity_type: Declared source type name of the entity, reported in
            diagnostics only.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    alias: str | None = None
    entity_type: str | None = None


class DataSourceInfo(BaseModel):
    """Data-source level defaults shared by every entity mapped to it.

    Attributes:
        enable_dirty_reads: Read without taking shared locks where the
            dialect supports it.
        enable_encapsulation: Quote table and column identifiers.
        database_name: Optional database name; informational.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    enable_dirty_reads: bool = False
    enable_encapsulation: bool = False
    database_name: str | None = None


class EntityMetadata(BaseModel):
    """Everything the metadata source supplies for one entity type.

    Convenience bundle used by fixtures and callers that keep the mapping in
    one document; :func:`entityql.compile_query` takes the parts separately.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    table: TableInfo
    columns: list[ColumnDescriptor]
    data_source: DataSourceInfo = Field(default_factory=DataSourceInfo)

    def get_column(self, name: str) -> ColumnDescriptor | None:
        """Returns the descriptor for ``name``, or ``None``."""
        for column in self.columns:
            if column.name == name:
                return column
        return None

    @property
    def column_names(self) -> list[str]:
        """Returns all column names in declaration order."""
        return [c.name for c in self.columns]
