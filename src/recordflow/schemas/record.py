"""
Record model and the Pandera schema for delimited record frames.

A Record is one logical entry of a dataset. The frame schema declares the
columns every delimited-text dataset must provide.
"""

from collections.abc import Iterable
from dataclasses import dataclass

import pandera.pandas as pa
from pandera.typing import Series


@dataclass(frozen=True)
class Record:
    """
    One logical row or element of a dataset.

    ``value`` is an int when the source encoding is typed (structured
    objects) and raw text otherwise; it is converted when aggregated.
    ``category`` is None when the source entry carries no category.
    """

    id: str | int | None
    value: int | str
    category: str | None
    region: str | None = None


Dataset = tuple[Record, ...]


class RecordFrameSchema(pa.DataFrameModel):
    """
    Schema for delimited record frames.

    All columns are kept as text; numeric interpretation of ``value``
    happens at aggregation time.
    """

    id: Series[str] = pa.Field(description="Record identifier")
    value: Series[str] = pa.Field(description="Numeric value as text")
    category: Series[str] = pa.Field(description="Category used for filtering")
    region: Series[str] = pa.Field(description="Region the record belongs to")

    class Config:
        """Schema configuration."""

        name = "RecordFrameSchema"
        strict = False  # Allow extra columns
        coerce = True


REQUIRED_COLUMNS: tuple[str, ...] = tuple(RecordFrameSchema.to_schema().columns)


def missing_columns(columns: Iterable[str]) -> list[str]:
    """
    Return the required record columns absent from ``columns``.

    Args:
        columns: Header names, matched case-sensitively.

    Returns:
        Missing column names in declaration order (empty when complete).
    """
    present = set(columns)
    return [column for column in REQUIRED_COLUMNS if column not in present]
