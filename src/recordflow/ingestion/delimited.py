"""
Delimited-text (CSV) parsing.

The first line is a header naming the columns; every following non-blank
line is one record. Fields are mapped to columns by header name.
"""

import pandas as pd
from pandera.errors import SchemaError

from recordflow.errors import MalformedInputError
from recordflow.ingestion.base import FormatHandler
from recordflow.schemas.record import REQUIRED_COLUMNS, Dataset, Record, RecordFrameSchema
from recordflow.utils.logging import get_logger
from recordflow.validation.layout import (
    FORMAT_NAME,
    check_required_columns,
    iter_rows,
    validate_layout,
)

log = get_logger(__name__)


def _fit_row(fields: list[str], width: int) -> list[str]:
    """Pad a short row with empty fields and cut a long one to ``width``."""
    if len(fields) >= width:
        return fields[:width]
    return fields + [""] * (width - len(fields))


def parse_delimited(text: str) -> Dataset:
    """
    Parse delimited text into records.

    All fields are read as text. Row width consistency is not enforced
    here; it is part of the layout validation step. Short rows get empty
    trailing fields and fields beyond the header are ignored, so every
    row still yields a record.

    Args:
        text: Document with a header line.

    Returns:
        Records in document order.

    Raises:
        MalformedInputError: If the text cannot be tokenized or a required
            column is missing from the header.
    """
    rows = iter_rows(text)
    first = next(rows, None)
    if first is None:
        raise MalformedInputError(FORMAT_NAME, "document has no header row")
    header_line, header = first
    check_required_columns(header, line=header_line)

    width = len(header)
    body = [_fit_row(fields, width) for _, fields in rows]

    df = pd.DataFrame(body, columns=header, dtype=str)
    # Repeated header names resolve to their first column
    df = df.loc[:, ~df.columns.duplicated()]
    try:
        df = RecordFrameSchema.validate(df)
    except SchemaError as e:
        raise MalformedInputError(FORMAT_NAME, str(e).split("\n")[0]) from e

    log.debug("Parsed delimited rows", rows=len(df), columns=list(df.columns))

    return tuple(
        Record(id=record_id, value=value, category=category, region=region)
        for record_id, value, category, region in df[list(REQUIRED_COLUMNS)].itertuples(
            index=False, name=None
        )
    )


class DelimitedHandler(FormatHandler):
    """Handler for delimited text; validation is structural."""

    format_name = FORMAT_NAME

    def parse(self, text: str) -> Dataset:
        """Parse delimited text."""
        return parse_delimited(text)

    def validate(self, text: str, schema_document: str | None) -> bool:
        """
        Check layout consistency.

        Raises:
            MalformedInputError: On any layout violation.
        """
        return validate_layout(text)
