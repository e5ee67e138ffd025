"""Shared pytest fixtures for entityQL unit tests."""
from __future__ import annotations

import pytest

from entityql.compile.builder import EntityQueryCompiler
from entityql.schema.columns import ColumnDescriptor, DbType, EntityMetadata
from entityql.settings import AdapterSettings, get_settings
from tests.fixtures import load_entities


@pytest.fixture(scope="session")
def entities() -> dict[str, EntityMetadata]:
    """Sample entity metadata shared across all tests."""
    return load_entities()


@pytest.fixture(scope="session")
def customer(entities: dict[str, EntityMetadata]) -> EntityMetadata:
    """Customer: db-generated identity key, aliased Email column."""
    return entities["customer"]


@pytest.fixture(scope="session")
def order(entities: dict[str, EntityMetadata]) -> EntityMetadata:
    """Order: single key plus a foreign key to Customer."""
    return entities["order"]


@pytest.fixture(scope="session")
def order_line(entities: dict[str, EntityMetadata]) -> EntityMetadata:
    """OrderLine: composite key whose first part is also the foreign key."""
    return entities["order_line"]


@pytest.fixture(scope="session")
def audit_entry(entities: dict[str, EntityMetadata]) -> EntityMetadata:
    """AuditEntry: no key columns at all."""
    return entities["audit_entry"]


@pytest.fixture()
def id_name_columns() -> list[ColumnDescriptor]:
    """The two-column ``T(Id, Name)`` entity used by the worked examples."""
    return [
        ColumnDescriptor(name="Id", db_type=DbType.INT32, is_primary_key=True),
        ColumnDescriptor(name="Name"),
    ]


@pytest.fixture()
def settings() -> AdapterSettings:
    """Adapter settings pinned to the defaults, independent of the environment."""
    return AdapterSettings(
        bulk_load_enabled=False,
        read_limit_enabled=False,
        read_limit=1000,
        command_timeout=30.0,
        dialect="sqlserver",
        _env_file=None,
    )


@pytest.fixture()
def compiler(settings: AdapterSettings) -> EntityQueryCompiler:
    """SQL Server compiler with pinned settings."""
    return EntityQueryCompiler(dialect="sqlserver", settings=settings)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
