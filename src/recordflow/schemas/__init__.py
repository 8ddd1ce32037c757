"""Record model and schema definitions."""

from recordflow.schemas.record import (
    REQUIRED_COLUMNS,
    Dataset,
    Record,
    RecordFrameSchema,
    missing_columns,
)

__all__ = [
    "REQUIRED_COLUMNS",
    "Dataset",
    "Record",
    "RecordFrameSchema",
    "missing_columns",
]
