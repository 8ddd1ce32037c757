"""
Structural layout checks for delimited text.

Delimited datasets carry no external schema. Their layout is validated by
two independent checks: every row has as many fields as the header, and the
header names all required record columns. The delimited parser reuses the
column check, so both stages enforce one definition of a valid header.
"""

import csv
import io
from collections.abc import Iterable, Iterator

from recordflow.errors import MalformedInputError
from recordflow.schemas.record import REQUIRED_COLUMNS, missing_columns
from recordflow.utils.logging import get_logger

log = get_logger(__name__)

FORMAT_NAME = "CSV"


def iter_rows(text: str) -> Iterator[tuple[int, list[str]]]:
    """
    Yield ``(line, fields)`` for every non-blank row of a delimited document.

    ``line`` is the 1-based line on which the row ends. Quoting is strict,
    so an unterminated quoted field is an error rather than a long field.

    Raises:
        MalformedInputError: If the text cannot be tokenized.
    """
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    try:
        for row in reader:
            if not row:
                continue
            yield reader.line_num, row
    except csv.Error as e:
        raise MalformedInputError(FORMAT_NAME, str(e), line=reader.line_num) from e


def check_required_columns(header: Iterable[str], *, line: int | None = 1) -> None:
    """
    Ensure the header names every required record column.

    Raises:
        MalformedInputError: If any required column is absent.
    """
    missing = missing_columns(header)
    if missing:
        msg = (
            f"missing required columns {missing} "
            f"(expected {', '.join(REQUIRED_COLUMNS)})"
        )
        raise MalformedInputError(FORMAT_NAME, msg, line=line)


def check_row_consistency(rows: Iterable[tuple[int, list[str]]], width: int) -> int:
    """
    Ensure every row has exactly ``width`` fields.

    Args:
        rows: ``(line, fields)`` pairs, header excluded.
        width: Number of header columns.

    Returns:
        Number of rows checked.

    Raises:
        MalformedInputError: At the first row with a different field count.
    """
    checked = 0
    for line, fields in rows:
        if len(fields) != width:
            msg = f"record inconsistency: expected {width} fields, found {len(fields)}"
            raise MalformedInputError(FORMAT_NAME, msg, line=line)
        checked += 1
    return checked


def validate_layout(text: str) -> bool:
    """
    Validate the structure of a delimited document.

    Unlike the schema-driven validators this check raises instead of
    returning False, because the parse step depends on its guarantees.

    Returns:
        True when the layout is consistent.

    Raises:
        MalformedInputError: On an empty document, an inconsistent row or
            a missing required column.
    """
    rows = iter_rows(text)
    first = next(rows, None)
    if first is None:
        raise MalformedInputError(FORMAT_NAME, "document has no header row")
    header_line, header = first

    n_rows = check_row_consistency(rows, len(header))
    check_required_columns(header, line=header_line)

    log.debug("Delimited layout valid", rows=n_rows, columns=header)
    return True
