"""entityQL compilation layer: QueryPlan → parameterized SQL."""
from entityql.compile.base import ProviderParameter, RenderedQuery, SQLDialect
from entityql.compile.binder import ParameterBinder
from entityql.compile.builder import EntityQueryCompiler
from entityql.compile.mysql import MySQLDialect
from entityql.compile.planner import QueryPlanner
from entityql.compile.postgres import PostgresDialect
from entityql.compile.registry import DialectFactory
from entityql.compile.renderer import QueryRenderer
from entityql.compile.sqlite import SQLiteDialect
from entityql.compile.sqlserver import SQLServerDialect

__all__ = [
    "ProviderParameter",
    "RenderedQuery",
    "SQLDialect",
    "ParameterBinder",
    "EntityQueryCompiler",
    "DialectFactory",
    "QueryPlanner",
    "QueryRenderer",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "SQLServerDialect",
]
