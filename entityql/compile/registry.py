"""Dialect registry (Open/Closed Principle).

Adding a SQL dialect means subclassing
:class:`~entityql.compile.base.SQLDialect` and registering it here; the
router, planner and renderer are untouched.

Usage::

    from entityql.compile.registry import DialectFactory

    @DialectFactory.register("oracle")
    class OracleDialect(SQLDialect):
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from entityql.compile.base import SQLDialect
from entityql.errors import UnsupportedDialectError


class DialectFactory:
    """Registry mapping dialect names to :class:`SQLDialect` classes.

    Callers register a dialect class once; the compiler creates instances
    on demand via :meth:`create`.  Names are case-insensitive.

    Example::

        @DialectFactory.register("oracle")
        class OracleDialect(SQLDialect):
            ...

        dialect = DialectFactory.create("oracle")
    """

    _dialects: ClassVar[dict[str, type[SQLDialect]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[SQLDialect]], type[SQLDialect]]:
        """Decorator that registers a dialect class under ``name``.

        Args:
            name: The dialect name (e.g. ``"postgres"``).

        Returns:
            A decorator that registers and returns the dialect class.
        """

        def decorator(dialect_cls: type[SQLDialect]) -> type[SQLDialect]:
            cls._dialects[name.lower()] = dialect_cls
            return dialect_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, dialect_cls: type[SQLDialect]) -> None:
        """Register a dialect class without using the decorator form."""
        cls._dialects[name.lower()] = dialect_cls

    @classmethod
    def create(cls, name: str) -> SQLDialect:
        """Instantiate the dialect registered for ``name``.

        Raises:
            UnsupportedDialectError: If no dialect is registered for ``name``.
        """
        dialect_cls = cls._dialects.get(name.lower())
        if dialect_cls is None:
            raise UnsupportedDialectError(name, cls.registered_dialects())
        return dialect_cls()

    @classmethod
    def resolve(cls, dialect: SQLDialect | str) -> SQLDialect:
        """Return ``dialect`` unchanged if it is an instance, else :meth:`create` it."""
        if isinstance(dialect, SQLDialect):
            return dialect
        return cls.create(dialect)

    @classmethod
    def registered_dialects(cls) -> list[str]:
        """Return the sorted list of registered dialect names."""
        return sorted(cls._dialects)
