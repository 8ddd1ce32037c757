"""
Base class for format handlers.

A format handler bundles everything the processing facade needs to know
about one encoding: how to parse it, how to validate it, how to read a
record's numeric value and how to match its category.
"""

from abc import ABC, abstractmethod
from typing import ClassVar

from recordflow.config.settings import ProcessingConfig
from recordflow.processing.aggregation import parse_int
from recordflow.processing.filtering import category_contains
from recordflow.schemas.record import Dataset, Record
from recordflow.utils.logging import get_logger

log = get_logger(__name__)


class FormatHandler(ABC):
    """
    Abstract base class for format handlers.

    Subclasses implement parsing and validation; value extraction and
    category matching default to the behavior shared by most encodings.
    """

    format_name: ClassVar[str]

    def __init__(self, config: ProcessingConfig) -> None:
        """
        Initialize format handler.

        Args:
            config: Processing configuration.
        """
        self.config = config

    @property
    def schema_name(self) -> str | None:
        """Name of the schema resource used for validation, if any."""
        return None

    @abstractmethod
    def parse(self, text: str) -> Dataset:
        """
        Parse a document into records.

        Raises:
            MalformedInputError: If the text cannot be interpreted.
        """
        ...

    @abstractmethod
    def validate(self, text: str, schema_document: str | None) -> bool:
        """
        Validate a raw document.

        Args:
            text: Raw document.
            schema_document: Schema text, None for schema-less encodings.

        Returns:
            True if the document is valid.
        """
        ...

    def value_of(self, record: Record) -> int | None:
        """Integer value of a record, None when it cannot be read."""
        return parse_int(record.value)

    def matches_category(self, category: str | None, category_filter: str) -> bool:
        """Whether a record category satisfies a non-empty filter."""
        return category_contains(category, category_filter)
