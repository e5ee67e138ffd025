"""The dialect-neutral query plan handed from the planner to the renderer."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from entityql.schema.options import EntityShape, OperationType

if TYPE_CHECKING:
    from entityql.mapping.column_map import ColumnEntry


def requires_predicate(operation: OperationType, shape: EntityShape) -> bool:
    """True for statements that must never run unconditionally.

    EXISTS, DELETE, UPDATE and single-entity SELECT are row scoped; INSERT and
    collection SELECT are not.
    """
    if operation in (OperationType.EXISTS, OperationType.DELETE, OperationType.UPDATE):
        return True
    return operation is OperationType.SELECT and shape is EntityShape.SINGLE_ENTITY


@dataclass(frozen=True)
class QueryPlan:
    """Everything the renderer needs to emit one statement.

    Attributes:
        operation: Statement kind.
        shape: Entity shape the plan was routed for.
        table_name: Base table name, unquoted.
        table_alias: Alias applied in SELECT statements, or ``None``.
        predicates: Ordered entries rendered as ``col = param`` in WHERE.
        payload: Ordered entries selected, inserted or assigned.
        dirty_reads: Render the dialect's no-lock read hint.
        read_limit_enabled: Render the dialect's row-limiting clause.
        read_limit: Row cap; ignored unless ``read_limit_enabled``.
        encapsulate_identifiers: Quote table and column identifiers.
        entity_type: Declared entity type, for diagnostics.
    """

    operation: OperationType
    shape: EntityShape
    table_name: str
    table_alias: str | None
    predicates: tuple[ColumnEntry, ...]
    payload: tuple[ColumnEntry, ...]
    dirty_reads: bool = False
    read_limit_enabled: bool = False
    read_limit: int = 1000
    encapsulate_identifiers: bool = False
    entity_type: str | None = None

    @property
    def requires_predicate(self) -> bool:
        """True for statements that must never run unconditionally."""
        return requires_predicate(self.operation, self.shape)

    @property
    def column_names(self) -> list[str]:
        """Predicate then payload column names."""
        return [e.name for e in self.predicates] + [e.name for e in self.payload]

    @property
    def parameter_names(self) -> list[str]:
        """Predicate then payload parameter names."""
        return [e.parameter for e in self.predicates] + [e.parameter for e in self.payload]
