"""
Format registry for handler discovery.

Maps each supported data format to its handler class. Formats are
accepted by name (DELIMITED, STRUCTURED, MARKUP) or by encoding alias
(CSV, JSON, XML), case-insensitively.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from recordflow.config.settings import ProcessingConfig
from recordflow.errors import UnsupportedFormatError
from recordflow.ingestion.base import FormatHandler
from recordflow.ingestion.delimited import DelimitedHandler
from recordflow.ingestion.markup import MarkupHandler
from recordflow.ingestion.structured import StructuredHandler


class DataFormat(str, Enum):
    """Supported input encodings; values are the encoding aliases."""

    DELIMITED = "CSV"
    STRUCTURED = "JSON"
    MARKUP = "XML"


@dataclass(frozen=True)
class FormatInfo:
    """Metadata about a registered format."""

    data_format: DataFormat
    handler: type[FormatHandler]
    description: str


class FormatRegistry:
    """Centralized registry of format handlers."""

    _formats: ClassVar[dict[DataFormat, FormatInfo]] = {
        DataFormat.DELIMITED: FormatInfo(
            data_format=DataFormat.DELIMITED,
            handler=DelimitedHandler,
            description="Delimited text with a header line, layout-checked",
        ),
        DataFormat.STRUCTURED: FormatInfo(
            data_format=DataFormat.STRUCTURED,
            handler=StructuredHandler,
            description="Object with a 'data' array, validated with JSON Schema",
        ),
        DataFormat.MARKUP: FormatInfo(
            data_format=DataFormat.MARKUP,
            handler=MarkupHandler,
            description="Namespaced 'record' elements, validated with XSD",
        ),
    }

    @classmethod
    def supported(cls) -> list[str]:
        """Names of all registered formats."""
        return [fmt.name for fmt in cls._formats]

    @classmethod
    def resolve(cls, data_format: "str | DataFormat | None") -> DataFormat:
        """
        Resolve a requested format.

        Args:
            data_format: Member, name or alias.

        Returns:
            The matching DataFormat.

        Raises:
            UnsupportedFormatError: If the format is not recognized.
        """
        if isinstance(data_format, DataFormat):
            return data_format
        if isinstance(data_format, str):
            key = data_format.strip().upper()
            for fmt in cls._formats:
                if key in (fmt.name, fmt.value):
                    return fmt
        raise UnsupportedFormatError(data_format, cls.supported())

    @classmethod
    def get_info(cls, data_format: "str | DataFormat | None") -> FormatInfo:
        """Get full format info."""
        return cls._formats[cls.resolve(data_format)]

    @classmethod
    def create(
        cls, data_format: "str | DataFormat | None", config: ProcessingConfig
    ) -> FormatHandler:
        """
        Instantiate the handler for a format.

        Raises:
            UnsupportedFormatError: If the format is not recognized.
        """
        return cls.get_info(data_format).handler(config)
