"""Custom exception hierarchy for entityQL.

All public errors inherit from :class:`EntityQLError` so callers can catch the
base class for any entityQL-specific failure.  Every compile-time failure is a
:class:`CompileError` carrying a machine-readable ``code`` and a ``details``
dict; the compiler never downgrades one of these to a fallback statement.
"""
from __future__ import annotations

from typing import Any


class EntityQLError(Exception):
    """Base exception for all entityQL errors."""


class CompileError(EntityQLError):
    """Raised when a statement cannot be compiled from the supplied metadata.

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. ``MISSING_PREDICATE``).
        details: Extra diagnostic context.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response suitable for logging or APIs."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class InvalidArgumentError(CompileError):
    """Raised when a required input (columns, table info) is absent."""

    def __init__(self, argument: str, message: str | None = None) -> None:
        super().__init__(
            message or f"Argument '{argument}' is required.",
            code="INVALID_ARGUMENT",
            details={"argument": argument},
        )
        self.argument = argument


class InvalidOperationError(CompileError):
    """Raised when the operation type is not one of the five supported values.

    Args:
        operation: The offending operation value, as supplied.
        entity_type: Declared source type of the entity being compiled.
    """

    def __init__(self, operation: Any, entity_type: str | None = None) -> None:
        super().__init__(
            f"The supplied value ({operation!r}, from {entity_type or '<unknown>'}) "
            "of the operation type is not valid.",
            code="INVALID_OPERATION",
            details={"operation": repr(operation), "entity_type": entity_type},
        )
        self.operation = operation
        self.entity_type = entity_type


class MissingPredicateError(CompileError):
    """Raised when a row-scoped statement resolved to no predicate columns.

    Emitting such a statement would touch every row of the table, so the
    compiler refuses instead.
    """

    def __init__(self, operation: str, table: str, entity_type: str | None = None) -> None:
        super().__init__(
            f"{operation} on table '{table}' requires at least one predicate column; "
            "refusing to emit an unconditional statement.",
            code="MISSING_PREDICATE",
            details={"operation": operation, "table": table, "entity_type": entity_type},
        )
        self.operation = operation
        self.table = table


class UnsupportedDialectError(CompileError):
    """Raised when no SQL dialect is registered under the requested name."""

    def __init__(self, name: str, registered: list[str]) -> None:
        super().__init__(
            f"Unsupported dialect: '{name}'. Registered dialects: {registered}.",
            code="UNSUPPORTED_DIALECT",
            details={"dialect": name, "registered": registered},
        )


class ParameterCollisionError(CompileError):
    """Raised when two routed columns resolve to the same driver parameter key.

    Dialects that strip the ``@`` / ``:`` / ``$`` prefix map ``@Id`` and ``Id``
    onto one placeholder; binding both would hand one column the other's
    value.
    """

    def __init__(self, key: str, columns: list[str], dialect: str) -> None:
        super().__init__(
            f"Columns {columns} all bind to parameter '{key}' under the "
            f"'{dialect}' dialect; declare distinct parameter names.",
            code="PARAMETER_COLLISION",
            details={"parameter": key, "columns": columns, "dialect": dialect},
        )
        self.key = key
        self.columns = columns
