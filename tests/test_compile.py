"""End-to-end tests for compile_query / EntityQueryCompiler."""

from __future__ import annotations

import re

import pytest

import entityql
from entityql import (
    ColumnDescriptor,
    DbType,
    EntityQueryCompiler,
    EntityShape,
    InvalidArgumentError,
    InvalidOperationError,
    MissingPredicateError,
    OperationType,
    RoutingOptions,
    TableInfo,
    UnsupportedDialectError,
    compile_query,
)
from entityql.compile.registry import DialectFactory
from entityql.compile.sqlserver import SQLServerDialect
from entityql.settings import AdapterSettings

SINGLE = EntityShape.SINGLE_ENTITY
COLLECTION = EntityShape.ENTITY_COLLECTION
T = TableInfo(name="T", entity_type="Tests.T")


def _params_in_text(sql: str) -> set[str]:
    return set(re.findall(r"@\w+", sql))


# ---------------------------------------------------------------------------
# Worked examples
# ---------------------------------------------------------------------------


def test_update_single_entity(id_name_columns, settings):
    q = compile_query(
        OperationType.UPDATE, SINGLE, id_name_columns, T,
        values={"Id": 1, "Name": "Ada"}, settings=settings,
    )
    assert q.sql_text == "UPDATE T SET Name = @Name WHERE Id = @Id"
    assert q.parameter_names == ["@Name", "@Id"]
    assert [p.value for p in q.parameters] == ["Ada", 1]
    assert q.command_timeout == 30.0
    assert q.dialect == "sqlserver"


def test_insert_single_entity(id_name_columns, settings):
    q = compile_query(OperationType.INSERT, SINGLE, id_name_columns, T, settings=settings)
    assert q.sql_text == "INSERT INTO T (Id, Name) VALUES (@Id, @Name)"
    assert q.parameter_names == ["@Id", "@Name"]


def test_insert_excludes_db_generated_key(settings):
    columns = [
        ColumnDescriptor(name="Id", is_primary_key=True, is_db_generated=True),
        ColumnDescriptor(name="Name"),
    ]
    q = compile_query(OperationType.INSERT, SINGLE, columns, T, settings=settings)
    assert q.sql_text == "INSERT INTO T (Name) VALUES (@Name)"
    assert q.parameter_names == ["@Name"]


def test_exists_forces_dirty_reads(id_name_columns, settings):
    q = compile_query(
        OperationType.EXISTS, SINGLE, id_name_columns, T,
        RoutingOptions(dirty_reads_enabled=False), settings=settings,
    )
    assert q.sql_text == "SELECT 1 FROM T WITH(NOLOCK) WHERE Id = @Id"
    assert q.parameter_names == ["@Id"]


def test_delete_binds_predicates(id_name_columns, settings):
    q = compile_query(
        "delete", "single_entity", id_name_columns, "T", values={"Id": 3}, settings=settings
    )
    assert q.sql_text == "DELETE FROM T WHERE Id = @Id"
    assert [(p.name, p.value) for p in q.parameters] == [("@Id", 3)]


def test_bulk_collection_select(order, settings):
    options = RoutingOptions(bulk_load_enabled=True)
    q = compile_query(
        OperationType.SELECT, COLLECTION, order.columns, order.table, options,
        values={"CustomerId": 12}, settings=settings,
    )
    assert q.sql_text == (
        "SELECT CustomerId, OrderId, Total, Notes FROM Orders WHERE CustomerId = @CustomerId"
    )
    assert q.parameter_names == ["@CustomerId"]


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("operation", list(OperationType))
def test_text_and_parameters_reference_same_names(order, settings, operation):
    q = compile_query(operation, SINGLE, order.columns, order.table, settings=settings)
    assert _params_in_text(q.sql_text) == set(q.parameter_names)
    assert len(q.parameter_names) == len(set(q.parameter_names))


@pytest.mark.parametrize("operation", list(OperationType))
def test_deterministic(customer, settings, operation):
    compiler = EntityQueryCompiler(settings=settings)
    first = compiler.compile(operation, SINGLE, customer.columns, customer.table, values={"Id": 1})
    second = compiler.compile(operation, SINGLE, customer.columns, customer.table, values={"Id": 1})
    assert first == second


def test_first_duplicate_parameter_wins(settings):
    columns = [
        ColumnDescriptor(name="Id", is_primary_key=True),
        ColumnDescriptor(name="A", parameter_name="@p"),
        ColumnDescriptor(name="B", parameter_name="@p"),
    ]
    q = compile_query(OperationType.UPDATE, SINGLE, columns, T, settings=settings)
    assert q.sql_text == "UPDATE T SET A = @p WHERE Id = @Id"
    assert q.parameter_names == ["@p", "@Id"]


def test_settings_supply_bulk_and_read_limit(order):
    settings = AdapterSettings(
        bulk_load_enabled=True, read_limit_enabled=True, read_limit=5, _env_file=None
    )
    q = compile_query(OperationType.SELECT, COLLECTION, order.columns, order.table,
                      settings=settings)
    assert q.sql_text == (
        "SELECT TOP 5 CustomerId, OrderId, Total, Notes FROM Orders "
        "WHERE CustomerId = @CustomerId"
    )


def test_compile_entity_uses_data_source_defaults(order_line, compiler):
    q = compiler.compile_entity(OperationType.SELECT, SINGLE, order_line,
                                values={"OrderId": 1, "LineNo": 2})
    assert q.sql_text == (
        "SELECT [OrderId], [LineNo], [Sku], [Quantity] FROM [OrderLines] WITH(NOLOCK) "
        "WHERE [OrderId] = @OrderId AND [LineNo] = @LineNo"
    )
    assert [p.value for p in q.parameters] == [1, 2]


def test_columns_accept_plain_dicts(settings):
    q = compile_query(
        OperationType.DELETE, SINGLE,
        [{"name": "Id", "is_primary_key": True, "db_type": "int32"}], T,
        settings=settings,
    )
    assert q.parameters[0].db_type == DbType.INT32


def test_inputs_not_mutated(order, settings):
    before = [c.model_dump() for c in order.columns]
    compile_query(OperationType.SELECT, COLLECTION, order.columns, order.table,
                  RoutingOptions(bulk_load_enabled=True), settings=settings)
    assert [c.model_dump() for c in order.columns] == before


# ---------------------------------------------------------------------------
# Dialects
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "dialect, expected, params",
    [
        ("sqlserver", "UPDATE T SET Name = @Name WHERE Id = @Id", {"@Name": "Ada", "@Id": 1}),
        ("sqlite", "UPDATE T SET Name = @Name WHERE Id = @Id", {"Name": "Ada", "Id": 1}),
        ("postgres", "UPDATE T SET Name = %(Name)s WHERE Id = %(Id)s", {"Name": "Ada", "Id": 1}),
        ("mysql", "UPDATE T SET Name = %(Name)s WHERE Id = %(Id)s", {"Name": "Ada", "Id": 1}),
    ],
)
def test_update_per_dialect(id_name_columns, settings, dialect, expected, params):
    q = compile_query(
        OperationType.UPDATE, SINGLE, id_name_columns, T,
        values={"Id": 1, "Name": "Ada"}, dialect=dialect, settings=settings,
    )
    assert q.sql_text == expected
    assert q.as_params() == params
    assert q.dialect == dialect


def test_dialect_instance_accepted(id_name_columns, settings):
    q = compile_query(OperationType.DELETE, SINGLE, id_name_columns, T,
                      dialect=SQLServerDialect(), settings=settings)
    assert q.dialect == "sqlserver"


def test_dialect_default_comes_from_settings(id_name_columns):
    settings = AdapterSettings(dialect="postgres", _env_file=None)
    q = compile_query(OperationType.DELETE, SINGLE, id_name_columns, T, settings=settings)
    assert q.sql_text == "DELETE FROM T WHERE Id = %(Id)s"


def test_unknown_dialect(id_name_columns, settings):
    with pytest.raises(UnsupportedDialectError) as exc_info:
        compile_query(OperationType.DELETE, SINGLE, id_name_columns, T,
                      dialect="oracle", settings=settings)
    assert "sqlserver" in exc_info.value.details["registered"]


def test_registered_dialects():
    assert DialectFactory.registered_dialects() == ["mysql", "postgres", "sqlite", "sqlserver"]


def test_custom_dialect_registration(id_name_columns, settings):
    @DialectFactory.register("shouting")
    class ShoutingDialect(SQLServerDialect):
        @property
        def dialect_name(self) -> str:
            return "shouting"

        def quote_identifier(self, name: str) -> str:
            return name.upper()

    try:
        q = compile_query(OperationType.DELETE, SINGLE, id_name_columns, T,
                          RoutingOptions(encapsulate_identifiers=True),
                          dialect="SHOUTING", settings=settings)
        assert q.sql_text == "DELETE FROM T WHERE ID = @Id"
    finally:
        DialectFactory._dialects.pop("shouting", None)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("operation", ["exists", "delete", "update", "select"])
def test_missing_primary_key(settings, operation):
    columns = [ColumnDescriptor(name="Name")]
    with pytest.raises(MissingPredicateError) as exc_info:
        compile_query(operation, SINGLE, columns, T, settings=settings)
    assert exc_info.value.to_error_response()["error"] == "MISSING_PREDICATE"


def test_invalid_operation_names_value_and_entity(id_name_columns, settings):
    with pytest.raises(InvalidOperationError) as exc_info:
        compile_query("upsert", SINGLE, id_name_columns, T, settings=settings)
    assert exc_info.value.entity_type == "Tests.T"
    assert "upsert" in str(exc_info.value)


@pytest.mark.parametrize("table", [None, ""])
def test_missing_table(id_name_columns, settings, table):
    with pytest.raises(InvalidArgumentError) as exc_info:
        compile_query(OperationType.DELETE, SINGLE, id_name_columns, table, settings=settings)
    assert exc_info.value.argument == "table"


def test_missing_columns(settings):
    with pytest.raises(InvalidArgumentError) as exc_info:
        compile_query(OperationType.DELETE, SINGLE, None, T, settings=settings)
    assert exc_info.value.argument == "columns"


def test_null_column_entry(settings):
    with pytest.raises(InvalidArgumentError):
        compile_query(OperationType.DELETE, SINGLE, [None], T, settings=settings)


def test_errors_share_base_class():
    assert issubclass(MissingPredicateError, entityql.EntityQLError)
    assert issubclass(UnsupportedDialectError, entityql.CompileError)


def test_colliding_driver_keys_never_drop_a_value(settings):
    columns = [
        ColumnDescriptor(name="Id", is_primary_key=True),
        ColumnDescriptor(name="Name", parameter_name="Id"),
    ]
    with pytest.raises(entityql.ParameterCollisionError):
        compile_query(OperationType.UPDATE, SINGLE, columns, T,
                      values={"Id": 1, "Name": "Ada"}, dialect="postgres", settings=settings)
