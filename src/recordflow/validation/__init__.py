"""Document validation: delimited layout checks, JSON Schema and XSD."""

from recordflow.validation.core import ValidationResult
from recordflow.validation.layout import (
    check_required_columns,
    check_row_consistency,
    validate_layout,
)
from recordflow.validation.markup import validate_markup
from recordflow.validation.reporter import ConsoleReporter
from recordflow.validation.structured import validate_structured

__all__ = [
    "ConsoleReporter",
    "ValidationResult",
    "check_required_columns",
    "check_row_consistency",
    "validate_layout",
    "validate_markup",
    "validate_structured",
]
