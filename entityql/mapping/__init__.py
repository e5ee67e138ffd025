"""entityQL mapping layer: column classification, de-duplication and routing."""
from entityql.mapping.classifier import ColumnRole, classify
from entityql.mapping.column_map import ColumnEntry, ColumnMap
from entityql.mapping.router import ColumnRouter, RoutedColumns

__all__ = [
    "ColumnRole",
    "classify",
    "ColumnEntry",
    "ColumnMap",
    "ColumnRouter",
    "RoutedColumns",
]
