"""Statement rendering: QueryPlan → SQL text.

``QueryRenderer`` owns one template per operation and delegates every
dialect-specific fragment to the injected
:class:`~entityql.compile.base.SQLDialect` through a
:class:`~entityql.compile.context.RenderContext`.

Templates
---------
EXISTS  ``SELECT 1 FROM t [hint] WHERE k = @k``
DELETE  ``DELETE FROM t WHERE k = @k``
INSERT  ``INSERT INTO t (a, b) VALUES (@a, @b)`` or ``INSERT INTO t DEFAULT VALUES``
UPDATE  ``UPDATE t SET a = @a, b = @b WHERE k = @k``
SELECT  ``SELECT [prefix] k, a AS x FROM t [AS alias] [hint] [WHERE k = @k] [suffix]``

Values are never inlined; every comparison and assignment references a
placeholder.
"""
from __future__ import annotations

from collections.abc import Callable, Sequence

from entityql.compile.base import SQLDialect
from entityql.compile.context import RenderContext
from entityql.errors import (
    InvalidArgumentError,
    InvalidOperationError,
    MissingPredicateError,
    ParameterCollisionError,
)
from entityql.mapping.column_map import ColumnEntry
from entityql.schema.options import OperationType
from entityql.schema.query_plan import QueryPlan, requires_predicate


class QueryRenderer:
    """Renders a :class:`QueryPlan` with a given dialect.

    Args:
        dialect: Dialect-specific rendering strategy.
    """

    def __init__(self, dialect: SQLDialect) -> None:
        self._dialect = dialect
        self._templates: dict[OperationType, Callable[[QueryPlan, RenderContext], str]] = {
            OperationType.EXISTS: self._render_exists,
            OperationType.DELETE: self._render_delete,
            OperationType.INSERT: self._render_insert,
            OperationType.SELECT: self._render_select,
            OperationType.UPDATE: self._render_update,
        }

    @property
    def dialect(self) -> SQLDialect:
        return self._dialect

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, plan: QueryPlan, operation: OperationType | None = None) -> str:
        """Render ``plan`` to SQL text.

        Only the statement text is produced here; parameter binding and the
        :class:`~entityql.compile.base.RenderedQuery` are assembled by
        :class:`~entityql.compile.builder.EntityQueryCompiler`.

        Args:
            plan: The plan to render.
            operation: Statement kind; defaults to ``plan.operation``.  The
                predicate requirement follows this operation, not the plan's.

        Returns:
            The SQL statement.

        Raises:
            InvalidOperationError: If ``operation`` is not a known statement.
            MissingPredicateError: If the statement is row scoped and the plan
                has no predicates.
            ParameterCollisionError: If two entries resolve to the same
                driver parameter key under this dialect.
            InvalidArgumentError: If the plan has nothing to select or assign.
        """
        if operation is None:
            operation = plan.operation
        elif not isinstance(operation, OperationType):
            try:
                operation = OperationType(operation)
            except ValueError:
                raise InvalidOperationError(operation, plan.entity_type) from None
        template = self._templates[operation]
        if requires_predicate(operation, plan.shape) and not plan.predicates:
            raise MissingPredicateError(operation.value, plan.table_name, plan.entity_type)
        self._check_parameter_keys(plan)
        ctx = RenderContext(dialect=self._dialect, encapsulate=plan.encapsulate_identifiers)
        return template(plan, ctx)

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def _render_exists(self, plan: QueryPlan, ctx: RenderContext) -> str:
        parts = ["SELECT 1 FROM", ctx.table(plan.table_name)]
        if plan.dirty_reads:
            parts.append(self._dialect.dirty_read_hint())
        parts.append(self._where(plan.predicates, ctx))
        return _join(parts)

    def _render_delete(self, plan: QueryPlan, ctx: RenderContext) -> str:
        return _join(["DELETE FROM", ctx.table(plan.table_name), self._where(plan.predicates, ctx)])

    def _render_insert(self, plan: QueryPlan, ctx: RenderContext) -> str:
        table = ctx.table(plan.table_name)
        if not plan.payload:
            return f"INSERT INTO {table} DEFAULT VALUES"
        columns = ", ".join(ctx.ident(e.name) for e in plan.payload)
        values = ", ".join(ctx.param(e) for e in plan.payload)
        return f"INSERT INTO {table} ({columns}) VALUES ({values})"

    def _render_update(self, plan: QueryPlan, ctx: RenderContext) -> str:
        if not plan.payload:
            raise InvalidArgumentError(
                "columns",
                f"UPDATE on table '{plan.table_name}' has no non-key columns to assign.",
            )
        assignments = ", ".join(f"{ctx.ident(e.name)} = {ctx.param(e)}" for e in plan.payload)
        return _join(
            ["UPDATE", ctx.table(plan.table_name), "SET", assignments, self._where(plan.predicates, ctx)]
        )

    def _render_select(self, plan: QueryPlan, ctx: RenderContext) -> str:
        items = [ctx.ident(e.name) for e in plan.predicates]
        items += [ctx.select_item(e) for e in plan.payload]
        if not items:
            raise InvalidArgumentError(
                "columns", f"SELECT on table '{plan.table_name}' resolved to no columns."
            )

        parts = ["SELECT"]
        if plan.read_limit_enabled:
            parts.append(self._dialect.limit_prefix(plan.read_limit))
        parts.append(", ".join(items))
        parts.append("FROM")
        parts.append(ctx.table(plan.table_name, plan.table_alias))
        if plan.dirty_reads:
            parts.append(self._dialect.dirty_read_hint())
        parts.append(self._where(plan.predicates, ctx))
        if plan.read_limit_enabled:
            parts.append(self._dialect.limit_suffix(plan.read_limit))
        return _join(parts)

    def _check_parameter_keys(self, plan: QueryPlan) -> None:
        seen: dict[str, str] = {}
        for entry in plan.predicates + plan.payload:
            key = self._dialect.parameter_key(entry.parameter)
            if key in seen:
                raise ParameterCollisionError(
                    key, [seen[key], entry.name], self._dialect.dialect_name
                )
            seen[key] = entry.name

    # ------------------------------------------------------------------
    # Fragments
    # ------------------------------------------------------------------

    @staticmethod
    def _where(predicates: Sequence[ColumnEntry], ctx: RenderContext) -> str:
        if not predicates:
            return ""
        conditions = " AND ".join(f"{ctx.ident(e.name)} = {ctx.param(e)}" for e in predicates)
        return f"WHERE {conditions}"


def _join(parts: list[str]) -> str:
    """Join non-empty fragments with single spaces."""
    return " ".join(p for p in parts if p)
