"""Compiler abstractions: RenderedQuery, ProviderParameter and the SQLDialect ABC.

The Strategy pattern is used: ``QueryRenderer`` owns the statement templates
and asks the injected ``SQLDialect`` for every dialect-specific fragment
(identifier quoting, placeholder style, row limiting, lock hints, provider
types).  Adding a dialect never touches the router or the planner.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from entityql.schema.columns import DbType, ParameterDirection


@dataclass(frozen=True)
class ProviderParameter:
    """A parameter bound to a value, ready for the provider.

    Attributes:
        name: Declared parameter name (e.g. ``'@Id'``).
        value: Runtime value; ``None`` is the null sentinel.
        db_type: Provider data type.
        direction: Parameter direction.
        nullable: Whether the column accepts NULL.
    """

    name: str
    value: Any
    db_type: DbType
    direction: ParameterDirection
    nullable: bool


@dataclass(frozen=True)
class RenderedQuery:
    """The output of a successful compilation.

    Attributes:
        sql_text: The SQL statement with placeholders.
        parameters: Bound parameters, in binding order.
        command_timeout: Timeout in seconds the execution layer should apply.
        dialect: Name of the dialect the text was rendered for.
        parameter_keys: Driver-side key of each parameter, aligned with
            ``parameters``.
    """

    sql_text: str
    parameters: tuple[ProviderParameter, ...]
    command_timeout: float
    dialect: str
    parameter_keys: tuple[str, ...] = ()

    @property
    def parameter_names(self) -> list[str]:
        return [p.name for p in self.parameters]

    def as_params(self) -> dict[str, Any]:
        """Return the ``{placeholder key: value}`` dict for DB-API execution.

        Keys follow the dialect's placeholder convention, so the dict can be
        passed straight to ``cursor.execute(query.sql_text, params)``.
        """
        keys = self.parameter_keys or tuple(p.name for p in self.parameters)
        return {key: p.value for key, p in zip(keys, self.parameters)}


class SQLDialect(ABC):
    """Abstract base for dialect-specific rendering strategies.

    Subclasses implement identifier quoting, placeholder style and the
    dialect name; row limiting, lock hints and provider type mapping have
    ANSI-ish defaults that subclasses override where the dialect differs.
    """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name (e.g. ``'sqlserver'``)."""

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Return a properly-quoted SQL identifier.

        Args:
            name: Unquoted identifier (table or column name).

        Returns:
            Quoted identifier.
        """

    @abstractmethod
    def param_placeholder(self, name: str) -> str:
        """Return the SQL placeholder for a declared parameter name.

        Args:
            name: Declared parameter name (e.g. ``'@Id'``).

        Returns:
            Dialect-specific placeholder string.
        """

    def parameter_key(self, name: str) -> str:
        """Return the key under which ``name``'s value is passed to the driver."""
        return name

    def identifier(self, name: str, encapsulate: bool) -> str:
        """Quote ``name`` only when encapsulation is requested."""
        return self.quote_identifier(name) if encapsulate else name

    def limit_prefix(self, limit: int) -> str:
        """Fragment placed right after ``SELECT`` (e.g. ``TOP 10``)."""
        return ""

    def limit_suffix(self, limit: int) -> str:
        """Fragment appended to the end of a SELECT (e.g. ``LIMIT 10``)."""
        return f"LIMIT {limit}"

    def dirty_read_hint(self) -> str:
        """Table hint requesting a lock-free read; empty if unsupported."""
        return ""

    def provider_type(self, db_type: DbType) -> DbType:
        """Map a declared type onto one the provider accepts."""
        return db_type

    @staticmethod
    def strip_prefix(name: str) -> str:
        """Drop a leading ``@``, ``:`` or ``$`` from a declared parameter name."""
        return name.lstrip("@:$")
