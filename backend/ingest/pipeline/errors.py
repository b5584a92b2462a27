"""
Domain-specific exception hierarchy for the parsing engine.

All engine exceptions inherit from ParserError so callers can
catch broadly or narrowly as needed.  Each exception carries structured
context (call ID, schema name, etc.) for logging/debugging.

Only structural failures are raised.  Per-record field violations are
never exceptions; they travel as strings inside a ParsingResult.
"""

from __future__ import annotations


class ParserError(Exception):
    """Base exception for all engine errors."""

    # Prefix used when the error is rendered into a ParsingResult
    kind: str = "ParserError"

    def __init__(
        self,
        message: str,
        *,
        call_id: int | None = None,
        schema_name: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.call_id = call_id
        self.schema_name = schema_name
        self.details = details or {}
        super().__init__(message)

    def to_error_string(self) -> str:
        """Render as the error line stored in a ParsingResult."""
        return f"{self.kind}: {self}"


class SchemaNotFoundError(ParserError):
    """No schema is registered under the requested name."""

    kind = "SchemaNotFound"


class InvalidSchemaError(ParserError):
    """A schema definition breaks a registry invariant."""

    kind = "InvalidSchema"


class ReadSyntaxError(ParserError):
    """The payload could not be read as the chosen format."""

    kind = "ReadSyntaxError"

    def __init__(
        self,
        message: str,
        *,
        source_format: str | None = None,
        **kwargs,
    ) -> None:
        self.source_format = source_format
        super().__init__(message, **kwargs)


class ParseTimeoutError(ParserError):
    """The parse call exceeded its configured timeout."""

    kind = "Timeout"

    def __init__(
        self,
        message: str,
        *,
        timeout: float | None = None,
        **kwargs,
    ) -> None:
        self.timeout = timeout
        super().__init__(message, **kwargs)
