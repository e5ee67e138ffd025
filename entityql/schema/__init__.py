"""entityQL schema models: column metadata, options and the QueryPlan."""
from entityql.schema.columns import (
    ColumnDescriptor,
    DataSourceInfo,
    DbType,
    EntityMetadata,
    ParameterDirection,
    TableInfo,
)
from entityql.schema.options import EntityShape, OperationType, RoutingOptions
from entityql.schema.query_plan import QueryPlan

__all__ = [
    "ColumnDescriptor",
    "DataSourceInfo",
    "DbType",
    "EntityMetadata",
    "ParameterDirection",
    "TableInfo",
    "EntityShape",
    "OperationType",
    "RoutingOptions",
    "QueryPlan",
]
