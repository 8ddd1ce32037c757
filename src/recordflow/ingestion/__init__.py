"""
Data ingestion layer: resource loading and per-format parsing.

All raw documents enter through a resource loader and are turned into
records by the format handler registered for their encoding.
"""

from recordflow.ingestion.base import FormatHandler
from recordflow.ingestion.registry import DataFormat, FormatRegistry
from recordflow.ingestion.resources import (
    DirectoryResourceLoader,
    MappingResourceLoader,
    PackageResourceLoader,
    ResourceLoader,
    build_loader,
)

__all__ = [
    "DataFormat",
    "DirectoryResourceLoader",
    "FormatHandler",
    "FormatRegistry",
    "MappingResourceLoader",
    "PackageResourceLoader",
    "ResourceLoader",
    "build_loader",
]
