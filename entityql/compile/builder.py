"""Core entity → SQL compilation pipeline.

``EntityQueryCompiler`` is the top-level orchestrator.  It wires together the
focused stages and drives one compilation per call:

EntityQueryCompiler
  ├── ColumnRouter      (mapping/router.py)    predicate / payload routing
  ├── QueryPlanner      (compile/planner.py)   plan assembly + knobs
  ├── QueryRenderer     (compile/renderer.py)  SQL text, via the SQLDialect
  └── ParameterBinder   (compile/binder.py)    provider parameters

Every stage works on call-local data, so one compiler instance can be shared
freely between threads.  The same inputs always produce the same
:class:`~entityql.compile.base.RenderedQuery`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from entityql.compile.base import RenderedQuery, SQLDialect
from entityql.compile.binder import ParameterBinder
from entityql.compile.planner import QueryPlanner
from entityql.compile.registry import DialectFactory
from entityql.compile.renderer import QueryRenderer
from entityql.errors import InvalidArgumentError
from entityql.logging_config import get_logger
from entityql.mapping.column_map import ColumnEntry
from entityql.mapping.router import ColumnRouter, resolve_operation, resolve_shape
from entityql.schema.columns import ColumnDescriptor, EntityMetadata, TableInfo
from entityql.schema.options import EntityShape, OperationType, RoutingOptions
from entityql.schema.query_plan import QueryPlan
from entityql.settings import AdapterSettings, get_settings

logger = get_logger(__name__)


class EntityQueryCompiler:
    """Compiles entity mapping metadata into one parameterized statement.

    Args:
        dialect: Dialect instance or registered dialect name.  Defaults to
            ``settings.dialect``.
        settings: Adapter settings; defaults to :func:`get_settings`.
        router: Optional router override (testing / specialisation).
        planner: Optional planner override (testing / specialisation).
    """

    def __init__(
        self,
        dialect: SQLDialect | str | None = None,
        settings: AdapterSettings | None = None,
        router: ColumnRouter | None = None,
        planner: QueryPlanner | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._dialect = DialectFactory.resolve(dialect or self._settings.dialect)
        self._router = router or ColumnRouter()
        self._planner = planner or QueryPlanner()
        self._renderer = QueryRenderer(self._dialect)
        self._binder = ParameterBinder(self._dialect)

    @property
    def dialect(self) -> SQLDialect:
        return self._dialect

    @property
    def settings(self) -> AdapterSettings:
        return self._settings

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compile(
        self,
        operation: OperationType | str,
        shape: EntityShape | str,
        columns: Iterable[ColumnDescriptor | Mapping[str, Any]] | None,
        table: TableInfo | str | None,
        options: RoutingOptions | None = None,
        values: Mapping[str, Any] | None = None,
    ) -> RenderedQuery:
        """Compile one statement.

        Args:
            operation: Statement kind.
            shape: Single entity or entity collection.
            columns: Column descriptors (or dicts accepted by
                :class:`ColumnDescriptor`) in declaration order.
            table: Table metadata, or a bare table name.
            options: Routing knobs; defaults to the adapter settings merged
                with the table alias.
            values: Runtime values keyed by column (or parameter) name.

        Returns:
            :class:`RenderedQuery` with SQL text and bound parameters.

        Raises:
            InvalidArgumentError: If ``columns`` or ``table`` is missing.
            InvalidOperationError: If ``operation`` is not recognised.
            MissingPredicateError: If a row-scoped statement has no predicates.
        """
        plan = self.plan(operation, shape, columns, table, options)
        sql_text = self._renderer.render(plan)
        bound_columns = [e.column for e in self._binding_order(plan)]
        parameters = self._binder.bind_all(bound_columns, values)

        logger.debug(
            "query_compiled",
            operation=plan.operation.value,
            shape=plan.shape.value,
            dialect=self._dialect.dialect_name,
            table=plan.table_name,
            parameter_count=len(parameters),
        )
        return RenderedQuery(
            sql_text=sql_text,
            parameters=parameters,
            command_timeout=self._settings.command_timeout,
            dialect=self._dialect.dialect_name,
            parameter_keys=tuple(self._dialect.parameter_key(p.name) for p in parameters),
        )

    def compile_entity(
        self,
        operation: OperationType | str,
        shape: EntityShape | str,
        entity: EntityMetadata,
        values: Mapping[str, Any] | None = None,
    ) -> RenderedQuery:
        """Compile one statement for a bundled :class:`EntityMetadata`.

        Routing options come from the entity's data source, the adapter
        settings and the table alias.
        """
        options = RoutingOptions.from_sources(
            data_source=entity.data_source, settings=self._settings, table=entity.table
        )
        return self.compile(operation, shape, entity.columns, entity.table, options, values)

    def plan(
        self,
        operation: OperationType | str,
        shape: EntityShape | str,
        columns: Iterable[ColumnDescriptor | Mapping[str, Any]] | None,
        table: TableInfo | str | None,
        options: RoutingOptions | None = None,
    ) -> QueryPlan:
        """Route and plan without rendering; see :meth:`compile`."""
        table = self._coerce_table(table)
        descriptors = self._coerce_columns(columns)
        operation = resolve_operation(operation, table.entity_type)
        shape = resolve_shape(shape)
        if options is None:
            options = RoutingOptions.from_sources(settings=self._settings, table=table)

        routed = self._router.route(
            operation, shape, descriptors, options, entity_type=table.entity_type
        )
        return self._planner.plan(operation, shape, routed, table, options)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _binding_order(plan: QueryPlan) -> tuple[ColumnEntry, ...]:
        if plan.operation is OperationType.INSERT:
            return plan.payload
        if plan.operation is OperationType.UPDATE:
            return plan.payload + plan.predicates
        return plan.predicates

    @staticmethod
    def _coerce_table(table: TableInfo | str | None) -> TableInfo:
        if table is None or table == "":
            logger.warning("invalid_argument", argument="table")
            raise InvalidArgumentError("table")
        if isinstance(table, str):
            return TableInfo(name=table)
        return table

    @staticmethod
    def _coerce_columns(
        columns: Iterable[ColumnDescriptor | Mapping[str, Any]] | None,
    ) -> list[ColumnDescriptor]:
        if columns is None:
            logger.warning("invalid_argument", argument="columns")
            raise InvalidArgumentError("columns")
        descriptors: list[ColumnDescriptor] = []
        for column in columns:
            if column is None:
                raise InvalidArgumentError("columns", "Column metadata contains a null entry.")
            if not isinstance(column, ColumnDescriptor):
                column = ColumnDescriptor.model_validate(column)
            descriptors.append(column)
        return descriptors
