"""Custom exception hierarchy for stencilQL.

Template failures derive from ExpansionError and carry a machine-readable
code; configuration and result-shape failures derive from StencilQLError
directly.
"""
from __future__ import annotations

from typing import Any


class StencilQLError(Exception):
    """Base exception for all stencilQL errors."""


class ExpansionError(StencilQLError):
    """A template and its parameters could not be turned into SQL.

    The whole ``expand()`` call is abandoned: no SQL text comes back and
    nothing is executed.  ``code`` names the failure kind; ``details``
    carries where it happened (template offset or parameter ordinal).

    Args:
        message: Text of the failure, suitable for logs.
        code: One of ``MALFORMED_TEMPLATE``, ``INVALID_PLACEHOLDER_TYPE``,
            ``PARAMETER_UNDERFLOW``.
        details: Location data for the failure.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details: dict[str, Any] = dict(details) if details else {}

    def to_error_response(self) -> dict[str, Any]:
        """The failure as a JSON-ready mapping: ``error``, ``message``, ``details``."""
        return {"error": self.code, "message": str(self), "details": self.details}


class MalformedTemplateError(ExpansionError):
    """Raised for unbalanced braces or an unterminated literal region.

    Args:
        message: Human-readable description.
        offset: Character offset in the template where the problem starts.
    """

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(
            message,
            code="MALFORMED_TEMPLATE",
            details={"offset": offset},
        )
        self.offset = offset


class InvalidPlaceholderTypeError(ExpansionError):
    """Raised when a value does not fit the structure its placeholder requires.

    Args:
        message: Human-readable description.
        tag: The placeholder type tag (``""`` for an untagged placeholder).
        position: 1-based ordinal of the offending parameter.
        value: The offending value (only its type name is kept).
    """

    def __init__(self, message: str, tag: str, position: int, value: Any) -> None:
        value_type = type(value).__name__
        super().__init__(
            f"{message} - param {position}",
            code="INVALID_PLACEHOLDER_TYPE",
            details={"tag": tag, "position": position, "value_type": value_type},
        )
        self.tag = tag
        self.position = position
        self.value_type = value_type


class ParameterUnderflowError(ExpansionError):
    """Raised when the template reaches more slots than parameters supplied."""

    def __init__(self, position: int, supplied: int) -> None:
        super().__init__(
            f"Template needs parameter {position} but only {supplied} supplied.",
            code="PARAMETER_UNDERFLOW",
            details={"position": position, "supplied": supplied},
        )
        self.position = position
        self.supplied = supplied


class ConfigurationError(StencilQLError):
    """Raised when the engine is configured with an unknown quoter target."""


class ResultShapeError(StencilQLError):
    """Raised when fetched rows do not have the shape a caller asked for.

    Args:
        message: Human-readable description.
        key: The column name that was expected, if any.
    """

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key
