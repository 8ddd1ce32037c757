"""
Category filtering over parsed datasets.

Filtering is a total function: it never fails, and an empty or missing
filter returns the dataset unchanged.
"""

from collections.abc import Callable

from recordflow.schemas.record import Dataset

CategoryMatcher = Callable[[str | None, str], bool]


def category_contains(category: str | None, category_filter: str) -> bool:
    """Case-insensitive substring match."""
    if category is None:
        return False
    return category_filter.lower() in category.lower()


def category_equals(category: str | None, category_filter: str) -> bool:
    """Case-sensitive exact match."""
    return category is not None and category == category_filter


def filter_records(
    dataset: Dataset,
    category_filter: str | None,
    matcher: CategoryMatcher = category_contains,
) -> Dataset:
    """
    Keep the records whose category satisfies ``matcher``.

    Args:
        dataset: Parsed records.
        category_filter: Filter string; None or "" disables filtering.
        matcher: Predicate over ``(category, category_filter)``.

    Returns:
        The input dataset itself when no filter is given, otherwise the
        matching records in their original order.
    """
    if not category_filter:
        return dataset
    return tuple(
        record for record in dataset if matcher(record.category, category_filter)
    )
