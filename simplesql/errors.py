"""Custom exception hierarchy for simplesql.

All public errors inherit from SimpleSQLError so callers can catch the base
class for any simplesql-specific failure.
"""
from __future__ import annotations

from typing import Any


class SimpleSQLError(Exception):
    """Base exception for all simplesql errors."""

    code: str = "SIMPLESQL_ERROR"

    @property
    def details(self) -> dict[str, Any]:
        return {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response for API callers."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class ParseError(SimpleSQLError):
    """Raised when a JSON payload cannot be parsed into a query description.

    Args:
        message: Human-readable description.
        raw: The raw payload that failed to parse.
    """

    code = "PARSE_ERROR"

    def __init__(self, message: str, raw: Any = None) -> None:
        super().__init__(message)
        self.raw = raw


class ConfigurationError(SimpleSQLError):
    """Raised when a clause is declared without one of its required fields.

    Detected when the clause is declared on the builder, before any SQL is
    generated.

    Args:
        message: Human-readable description.
        clause: The clause being declared (``"select"``, ``"joins"``, ...).
        field: The missing or invalid field.
    """

    code = "CONFIGURATION_ERROR"

    def __init__(
        self,
        message: str,
        clause: str | None = None,
        field: str | None = None,
    ) -> None:
        super().__init__(message)
        self.clause = clause
        self.field = field

    @property
    def details(self) -> dict[str, Any]:
        return {"clause": self.clause, "field": self.field}

    @classmethod
    def missing(cls, clause: str, field: str) -> ConfigurationError:
        """Build the error for a required ``field`` absent from ``clause``."""
        return cls(f"{clause.capitalize()}: Missing {field}", clause=clause, field=field)


class CompilationError(SimpleSQLError):
    """Raised when SQL compilation fails.

    Args:
        message: Human-readable description.
        clause: The clause being compiled when the error occurred.
    """

    code = "COMPILATION_ERROR"

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause

    @property
    def details(self) -> dict[str, Any]:
        return {"clause": self.clause}


class UnknownOperatorError(CompilationError):
    """Raised when a condition uses an operator with no registered handler."""

    code = "UNKNOWN_OPERATOR"

    def __init__(self, operator: Any, clause: str | None = None) -> None:
        super().__init__(f"Condition: Unknown operator {operator!r}", clause=clause)
        self.operator = operator

    @property
    def details(self) -> dict[str, Any]:
        return {"clause": self.clause, "operator": self.operator}


class MalformedConditionError(CompilationError):
    """Raised in strict mode for condition shapes that would otherwise degrade.

    Args:
        message: Human-readable description.
        condition: The offending condition item.
    """

    code = "MALFORMED_CONDITION"

    def __init__(self, message: str, condition: Any = None) -> None:
        super().__init__(message)
        self.condition = condition

    @property
    def details(self) -> dict[str, Any]:
        return {"condition": repr(self.condition)}


class MissingParamError(CompilationError):
    """Raised in strict mode when a placeholder has no supplied value."""

    code = "MISSING_PARAM"

    def __init__(self, placeholder: str, position: int | None = None) -> None:
        if position is None:
            message = f"No parameter supplied for placeholder '{placeholder}'."
        else:
            message = (
                f"No parameter supplied for placeholder '{placeholder}' "
                f"at position {position}."
            )
        super().__init__(message)
        self.placeholder = placeholder
        self.position = position

    @property
    def details(self) -> dict[str, Any]:
        return {"placeholder": self.placeholder, "position": self.position}
