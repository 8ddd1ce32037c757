"""
Configuration management with typed Pydantic models.

Provides resource, schema, markup and logging settings with
environment-aware YAML loading.
"""

from recordflow.config.loader import load_config
from recordflow.config.settings import (
    LoggingConfig,
    MarkupConfig,
    ProcessingConfig,
    ResourceConfig,
    SchemaConfig,
)

__all__ = [
    "LoggingConfig",
    "MarkupConfig",
    "ProcessingConfig",
    "ResourceConfig",
    "SchemaConfig",
    "load_config",
]
