"""
Failure taxonomy for record processing.

Every failure raised by the processing facade derives from ProcessingError,
so callers can catch the family or a single kind.
"""

from collections.abc import Sequence


class ProcessingError(Exception):
    """Base class for all record processing failures."""


class NotFoundError(ProcessingError):
    """Raised when a named resource cannot be located."""

    def __init__(self, resource: str) -> None:
        super().__init__(f"File not found: {resource}")
        self.resource = resource


class MalformedInputError(ProcessingError):
    """
    Raised when content violates the structural rules of its format.

    The line (1-based) and position are attached where the parser can
    determine it.
    """

    def __init__(
        self,
        format_name: str,
        message: str,
        *,
        line: int | None = None,
        position: str | None = None,
    ) -> None:
        parts = []
        if line is not None:
            parts.append(f"line {line}")
        if position is not None:
            parts.append(position)
        location = f" ({', '.join(parts)})" if parts else ""
        super().__init__(f"Malformed {format_name} input{location}: {message}")
        self.format_name = format_name
        self.detail = message
        self.line = line
        self.position = position


class ValidationFailedError(ProcessingError):
    """Raised when a document fails its requested validation step."""

    def __init__(self, format_name: str, message: str) -> None:
        super().__init__(f"{format_name} validation failed: {message}")
        self.format_name = format_name
        self.detail = message


class InvalidSchemaError(ValidationFailedError):
    """
    Raised when a schema document cannot be parsed or is not a valid schema.

    This is an operator configuration error rather than a data error.
    """

    def __init__(self, schema_name: str, message: str) -> None:
        super().__init__("schema", f"schema document {schema_name!r} is unusable: {message}")
        self.schema_name = schema_name


class UnsupportedAggregationError(ProcessingError):
    """Raised when the requested aggregation kind is not recognized."""

    def __init__(self, kind: object, supported: Sequence[str]) -> None:
        super().__init__(
            f"Unsupported aggregation type: {kind}. "
            f"Supported types are: {', '.join(supported)}"
        )
        self.kind = kind
        self.supported = tuple(supported)


class UnsupportedFormatError(ProcessingError):
    """Raised when the requested data format is not recognized."""

    def __init__(self, data_format: object, supported: Sequence[str]) -> None:
        super().__init__(
            f"Unsupported data format: {data_format}. "
            f"Supported formats are: {', '.join(supported)}"
        )
        self.data_format = data_format
        self.supported = tuple(supported)
