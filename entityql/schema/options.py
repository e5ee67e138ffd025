"""Operation, entity shape and per-call routing options."""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from entityql.schema.columns import DataSourceInfo, TableInfo

if TYPE_CHECKING:
    from entityql.settings import AdapterSettings


class OperationType(str, Enum):
    """The statement kinds the compiler can produce."""

    EXISTS = "exists"
    DELETE = "delete"
    INSERT = "insert"
    SELECT = "select"
    UPDATE = "update"


class EntityShape(str, Enum):
    """Whether the caller represents one record or a collection of records.

    A collection is located through its foreign keys (its parent), a single
    entity through its primary key.
    """

    SINGLE_ENTITY = "single_entity"
    ENTITY_COLLECTION = "entity_collection"


class RoutingOptions(BaseModel):
    """Per-call knobs controlling routing and rendering.

    Attributes:
        bulk_load_enabled: Collection SELECTs fetch every column instead of
            only the primary keys.
        dirty_reads_enabled: Read without shared locks where supported.
        read_limit_enabled: Restrict collection SELECTs to ``read_limit`` rows.
        read_limit: Row cap; only meaningful when ``read_limit_enabled``.
        encapsulate_identifiers: Quote table and column identifiers.
        table_alias: Alias applied to the table in SELECT statements.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    bulk_load_enabled: bool = False
    dirty_reads_enabled: bool = False
    read_limit_enabled: bool = False
    read_limit: int = Field(default=1000, gt=0)
    encapsulate_identifiers: bool = False
    table_alias: str | None = None

    @classmethod
    def from_sources(
        cls,
        data_source: DataSourceInfo | None = None,
        settings: AdapterSettings | None = None,
        table: TableInfo | None = None,
    ) -> RoutingOptions:
        """Merge data-source defaults, adapter settings and the table alias.

        Args:
            data_source: Data-source level dirty-read / encapsulation flags.
            settings: Adapter level bulk-load and read-limit settings.
            table: Table metadata; its ``alias`` becomes ``table_alias``.

        Returns:
            A new :class:`RoutingOptions`.  Inputs are never mutated.
        """
        data_source = data_source or DataSourceInfo()
        values: dict = {
            "dirty_reads_enabled": data_source.enable_dirty_reads,
            "encapsulate_identifiers": data_source.enable_encapsulation,
            "table_alias": table.alias if table is not None else None,
        }
        if settings is not None:
            values.update(
                bulk_load_enabled=settings.bulk_load_enabled,
                read_limit_enabled=settings.read_limit_enabled,
                read_limit=settings.read_limit,
            )
        return cls(**values)
