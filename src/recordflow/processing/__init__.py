"""Filtering and aggregation stages, and the processing facade."""

from recordflow.processing.aggregation import AggregationKind, aggregate, parse_int
from recordflow.processing.filtering import (
    category_contains,
    category_equals,
    filter_records,
)

__all__ = [
    "AggregationKind",
    "aggregate",
    "category_contains",
    "category_equals",
    "filter_records",
    "parse_int",
]
