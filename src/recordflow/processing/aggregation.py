"""
Aggregation of filtered datasets to a single integer.

Two kinds are supported: SUM over the record values and COUNT of records.
"""

import re
from collections.abc import Callable
from enum import Enum

from recordflow.errors import UnsupportedAggregationError
from recordflow.schemas.record import Dataset, Record

ValueExtractor = Callable[[Record], int | None]

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class AggregationKind(str, Enum):
    """Supported aggregation strategies."""

    SUM = "SUM"
    COUNT = "COUNT"

    @classmethod
    def supported(cls) -> list[str]:
        """Names of all supported kinds, in declaration order."""
        return [kind.value for kind in cls]

    @classmethod
    def parse(cls, kind: "str | AggregationKind | None") -> "AggregationKind":
        """
        Resolve a requested aggregation kind.

        Matching is exact: "sum" is not SUM.

        Raises:
            UnsupportedAggregationError: For any unrecognized kind,
                including None and "".
        """
        if isinstance(kind, cls):
            return kind
        try:
            return cls(kind)
        except ValueError as e:
            raise UnsupportedAggregationError(kind, cls.supported()) from e


def parse_int(value: object) -> int | None:
    """
    Interpret a record value as an integer.

    Returns:
        The integer, or None when the value is not an optionally signed
        run of decimal digits.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str) or not _INTEGER_PATTERN.fullmatch(value):
        return None
    return int(value)


def record_value(record: Record) -> int | None:
    """Default value extractor."""
    return parse_int(record.value)


def aggregate(
    dataset: Dataset,
    kind: "str | AggregationKind | None",
    value_of: ValueExtractor = record_value,
) -> int:
    """
    Reduce a dataset to one integer.

    SUM skips records whose value cannot be read as an integer.

    Args:
        dataset: Records to aggregate.
        kind: Aggregation kind.
        value_of: Extracts the integer value of a record, None to skip it.

    Returns:
        The aggregate, 0 for an empty dataset.

    Raises:
        UnsupportedAggregationError: If ``kind`` is not SUM or COUNT.
    """
    resolved = AggregationKind.parse(kind)
    if resolved is AggregationKind.COUNT:
        return len(dataset)

    total = 0
    for record in dataset:
        value = value_of(record)
        if value is not None:
            total += value
    return total
