"""Query plan assembly.

``QueryPlanner`` turns the router's predicate / payload maps plus the caller's
knobs into an immutable :class:`~entityql.schema.query_plan.QueryPlan`:

* the table alias is applied to SELECT only, and only when one is declared;
* EXISTS always reads dirty, whatever the caller asked for;
* SELECT copies the dirty-read flag; collection SELECTs also copy the read
  limit (single-entity SELECTs are key scoped and never limited);
* write statements never carry read knobs.

A row-scoped statement whose predicate map came out empty is rejected here,
before any SQL exists.
"""
from __future__ import annotations

from entityql.errors import InvalidArgumentError, MissingPredicateError
from entityql.logging_config import get_logger
from entityql.mapping.router import RoutedColumns
from entityql.schema.columns import TableInfo
from entityql.schema.options import EntityShape, OperationType, RoutingOptions
from entityql.schema.query_plan import QueryPlan

logger = get_logger(__name__)


class QueryPlanner:
    """Builds a :class:`QueryPlan` from routed columns and routing options."""

    def plan(
        self,
        operation: OperationType,
        shape: EntityShape,
        routed: RoutedColumns,
        table: TableInfo,
        options: RoutingOptions,
    ) -> QueryPlan:
        """Assemble the plan for one statement.

        Raises:
            InvalidArgumentError: If ``routed``, ``table`` or ``options`` is
                ``None``.
            MissingPredicateError: If ``operation`` is row scoped and no
                predicate column was routed.
        """
        for argument, value in (("routed", routed), ("table", table), ("options", options)):
            if value is None:
                logger.warning("invalid_argument", argument=argument)
                raise InvalidArgumentError(argument)

        is_select = operation is OperationType.SELECT
        is_collection_select = is_select and shape is EntityShape.ENTITY_COLLECTION

        if operation is OperationType.EXISTS:
            dirty_reads = True
        else:
            dirty_reads = is_select and options.dirty_reads_enabled

        read_limit_enabled = is_collection_select and options.read_limit_enabled

        plan = QueryPlan(
            operation=operation,
            shape=shape,
            table_name=table.name,
            table_alias=(options.table_alias or table.alias) if is_select else None,
            predicates=routed.predicates.entries(),
            payload=routed.payload.entries(),
            dirty_reads=dirty_reads,
            read_limit_enabled=read_limit_enabled,
            read_limit=options.read_limit,
            encapsulate_identifiers=options.encapsulate_identifiers,
            entity_type=table.entity_type,
        )

        if plan.requires_predicate and not plan.predicates:
            logger.warning(
                "missing_predicate",
                operation=operation.value,
                table=table.name,
                entity_type=table.entity_type,
            )
            raise MissingPredicateError(operation.value, table.name, table.entity_type)
        return plan
