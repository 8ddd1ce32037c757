"""
Validation outcome reporting.

A ValidationResult records the outcome of checking one document without
aggregating it, so callers can inspect failures as values.
"""

from dataclasses import dataclass


@dataclass
class ValidationResult:
    """Result of validating a single document."""

    resource: str
    format_name: str
    schema_name: str | None
    exists: bool
    schema_valid: bool | None
    record_count: int | None
    error_message: str | None

    @property
    def ok(self) -> bool:
        """Whether the document exists, validates and parses."""
        return self.exists and self.schema_valid is True and self.error_message is None
