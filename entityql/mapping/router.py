"""Routing of classified columns into predicate and payload maps.

``ColumnRouter`` decides, per ``(operation, shape, options)``, which column
subsets locate rows (*predicates*) and which are selected or assigned
(*payload*):

=============================================  ============  ===============================
Operation                                      Predicates    Payload
=============================================  ============  ===============================
EXISTS / DELETE                                primary keys  –
INSERT                                         –             non database-generated columns
UPDATE                                         primary keys  non-key columns
SELECT, single entity                          primary keys  non-key columns
SELECT, collection                             foreign keys  primary keys
SELECT, collection, bulk load                  foreign keys  primary keys, then non-key
=============================================  ============  ===============================

Both maps drop later duplicates by column name or parameter name, and the
payload also skips anything the predicate map has already claimed, so no
column or parameter is routed twice.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from entityql.errors import InvalidArgumentError, InvalidOperationError
from entityql.logging_config import get_logger
from entityql.mapping.classifier import foreign_keys, non_db_generated, non_key, primary_keys
from entityql.mapping.column_map import ColumnMap
from entityql.schema.columns import ColumnDescriptor
from entityql.schema.options import EntityShape, OperationType, RoutingOptions

logger = get_logger(__name__)


@dataclass(frozen=True)
class RoutedColumns:
    """The router's output for one call."""

    predicates: ColumnMap
    payload: ColumnMap


def resolve_operation(operation: object, entity_type: str | None = None) -> OperationType:
    """Coerce ``operation`` to :class:`OperationType` or raise.

    Raises:
        InvalidOperationError: If the value is not one of the five operations.
    """
    if isinstance(operation, OperationType):
        return operation
    try:
        return OperationType(operation)
    except ValueError:
        logger.warning("invalid_operation", operation=repr(operation), entity_type=entity_type)
        raise InvalidOperationError(operation, entity_type) from None


def resolve_shape(shape: object) -> EntityShape:
    """Coerce ``shape`` to :class:`EntityShape` or raise InvalidArgumentError."""
    if isinstance(shape, EntityShape):
        return shape
    try:
        return EntityShape(shape)
    except ValueError:
        raise InvalidArgumentError(
            "shape", f"Unknown entity shape: {shape!r}."
        ) from None


class ColumnRouter:
    """Routes column descriptors into predicate and payload maps."""

    def route(
        self,
        operation: OperationType | str,
        shape: EntityShape | str,
        columns: Sequence[ColumnDescriptor],
        options: RoutingOptions,
        *,
        entity_type: str | None = None,
    ) -> RoutedColumns:
        """Route ``columns`` for one statement.

        Args:
            operation: Statement kind.
            shape: Single entity or collection; only SELECT depends on it.
            columns: Column descriptors in declaration order.
            options: Routing knobs (only ``bulk_load_enabled`` is read here).
            entity_type: Declared entity type, for diagnostics.

        Returns:
            :class:`RoutedColumns` with freshly built maps.

        Raises:
            InvalidArgumentError: If ``columns`` or ``options`` is ``None``, or
                ``columns`` holds a ``None`` entry.
            InvalidOperationError: If ``operation`` is not recognised.
        """
        columns = list(columns) if columns is not None else [None]
        if any(c is None for c in columns):
            logger.warning("invalid_argument", argument="columns", entity_type=entity_type)
            raise InvalidArgumentError("columns")
        if options is None:
            logger.warning("invalid_argument", argument="options", entity_type=entity_type)
            raise InvalidArgumentError("options")
        operation = resolve_operation(operation, entity_type)
        shape = resolve_shape(shape)

        predicates = ColumnMap()
        payload = ColumnMap()

        if operation in (OperationType.EXISTS, OperationType.DELETE):
            predicates.extend(primary_keys(columns))
        elif operation is OperationType.INSERT:
            self._fill_payload(payload, non_db_generated(columns), predicates)
        elif operation is OperationType.UPDATE:
            predicates.extend(primary_keys(columns))
            self._fill_payload(payload, non_key(columns), predicates)
        elif shape is EntityShape.SINGLE_ENTITY:
            predicates.extend(primary_keys(columns))
            self._fill_payload(payload, non_key(columns), predicates, aliased=True)
        elif options.bulk_load_enabled:
            predicates.extend(foreign_keys(columns))
            self._fill_payload(payload, primary_keys(columns), predicates, aliased=True)
            self._fill_payload(payload, non_key(columns), predicates, aliased=True)
        else:
            predicates.extend(foreign_keys(columns))
            self._fill_payload(payload, primary_keys(columns), predicates, aliased=True)

        return RoutedColumns(predicates=predicates, payload=payload)

    @staticmethod
    def _fill_payload(
        payload: ColumnMap,
        columns: Iterable[ColumnDescriptor],
        predicates: ColumnMap,
        *,
        aliased: bool = False,
    ) -> None:
        for column in columns:
            if predicates.contains(column):
                continue
            payload.add(column, aliased=aliased)
