"""
Typed configuration models using Pydantic.

All configuration is defined here with explicit typing and validation.
Every field has a default, so an empty configuration is a valid one.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_NAMESPACE = "http://buildozers.org/dojo/data"


class ResourceConfig(BaseModel):
    """Where named resources (datasets and schema documents) are read from."""

    model_config = ConfigDict(frozen=True)

    root: Path | None = Field(
        default=None,
        description="Directory holding resources; packaged resources are used when unset",
    )
    package: str = Field(
        default="recordflow.data",
        description="Importable package holding bundled resources",
    )
    encoding: str = Field(default="utf-8", description="Text encoding of resources")


class SchemaConfig(BaseModel):
    """Names of the schema documents, one per schema-validated encoding."""

    model_config = ConfigDict(frozen=True)

    structured: str = Field(
        default="data-schema.json",
        description="JSON Schema resource for the structured-object encoding",
    )
    markup: str = Field(
        default="data-schema.xsd",
        description="XSD resource for the markup encoding",
    )


class MarkupConfig(BaseModel):
    """Markup encoding settings."""

    model_config = ConfigDict(frozen=True)

    namespace: str = Field(
        default=DEFAULT_NAMESPACE,
        description="Namespace qualifying record elements",
    )

    @field_validator("namespace")
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        """Ensure the namespace is not blank."""
        if not v.strip():
            msg = "Markup namespace must not be empty"
            raise ValueError(msg)
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO", description="Log level name")
    json_output: bool = Field(default=False, description="Emit JSON log lines")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure level is a standard logging level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"Unknown log level: {v!r}"
            raise ValueError(msg)
        return level


class ProcessingConfig(BaseModel):
    """Complete record processing configuration."""

    model_config = ConfigDict(frozen=True)

    resources: ResourceConfig = Field(default_factory=ResourceConfig)
    schemas: SchemaConfig = Field(default_factory=SchemaConfig)
    markup: MarkupConfig = Field(default_factory=MarkupConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def namespace(self) -> str:
        """Convenience accessor for the markup namespace."""
        return self.markup.namespace
