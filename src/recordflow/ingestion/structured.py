"""
Structured-object (JSON) parsing.

Documents are objects with a ``data`` array of record objects.
"""

import json
import math
from typing import Any

from recordflow.errors import MalformedInputError
from recordflow.ingestion.base import FormatHandler
from recordflow.processing.aggregation import parse_int
from recordflow.schemas.record import Dataset, Record
from recordflow.validation.structured import validate_structured

FORMAT_NAME = "JSON"


def _coerce_value(raw: Any, index: int) -> int:
    """
    Read a record value as an integer.

    JSON numbers are truncated toward zero and strings of digits are
    accepted; booleans, other text and non-finite numbers are not.
    """
    if isinstance(raw, float) and math.isfinite(raw):
        return int(raw)
    value = parse_int(raw)
    if value is not None:
        return value
    msg = f"value is not a number: {raw!r}"
    raise MalformedInputError(FORMAT_NAME, msg, position=f"data[{index}].value")


def parse_structured(text: str) -> Dataset:
    """
    Parse a structured-object document into records.

    Args:
        text: JSON document.

    Returns:
        Records in array order.

    Raises:
        MalformedInputError: If the text is not JSON, the ``data`` array is
            missing, or an element lacks a numeric value or string category.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInputError(
            FORMAT_NAME, e.msg, line=e.lineno, position=f"column {e.colno}"
        ) from e

    if not isinstance(document, dict):
        raise MalformedInputError(FORMAT_NAME, "top level must be an object")
    data = document.get("data")
    if not isinstance(data, list):
        raise MalformedInputError(FORMAT_NAME, "missing 'data' array", position="data")

    records: list[Record] = []
    for index, element in enumerate(data):
        if not isinstance(element, dict):
            msg = "record must be an object"
            raise MalformedInputError(FORMAT_NAME, msg, position=f"data[{index}]")

        value = _coerce_value(element.get("value"), index)

        category = element.get("category")
        if not isinstance(category, str):
            msg = f"category is not a string: {category!r}"
            raise MalformedInputError(FORMAT_NAME, msg, position=f"data[{index}].category")

        region = element.get("region")
        records.append(
            Record(
                id=element.get("id"),
                value=value,
                category=category,
                region=region if region is None else str(region),
            )
        )
    return tuple(records)


class StructuredHandler(FormatHandler):
    """Handler for structured objects, validated with JSON Schema."""

    format_name = FORMAT_NAME

    @property
    def schema_name(self) -> str:
        """Configured JSON Schema resource."""
        return self.config.schemas.structured

    def parse(self, text: str) -> Dataset:
        """Parse a JSON document."""
        return parse_structured(text)

    def validate(self, text: str, schema_document: str | None) -> bool:
        """Validate against the JSON Schema document."""
        if schema_document is None:
            msg = "structured validation requires a schema document"
            raise ValueError(msg)
        return validate_structured(text, schema_document, self.schema_name)
