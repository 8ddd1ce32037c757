"""
Processing facade.

Orchestrates one invocation: load, optionally validate, parse, filter and
aggregate. The format handler is selected once, before loading, and every
later step dispatches through it.

State machine:
    LOADING -> VALIDATING (optional) -> PARSING -> FILTERING
    -> AGGREGATING -> DONE, with FAILED reachable from any stage.
"""

from enum import Enum

from recordflow.config.settings import ProcessingConfig
from recordflow.errors import (
    InvalidSchemaError,
    MalformedInputError,
    NotFoundError,
    ProcessingError,
    ValidationFailedError,
)
from recordflow.ingestion.base import FormatHandler
from recordflow.ingestion.registry import DataFormat, FormatRegistry
from recordflow.ingestion.resources import ResourceLoader, build_loader
from recordflow.processing.aggregation import AggregationKind, aggregate
from recordflow.processing.filtering import filter_records
from recordflow.schemas.record import Dataset
from recordflow.utils.logging import get_logger, log_context
from recordflow.validation.core import ValidationResult

log = get_logger(__name__)


class ProcessingStage(str, Enum):
    """Stages of a single processing invocation."""

    LOADING = "loading"
    VALIDATING = "validating"
    PARSING = "parsing"
    FILTERING = "filtering"
    AGGREGATING = "aggregating"
    DONE = "done"
    FAILED = "failed"


class DataProcessor:
    """
    Processes named documents in any supported format.

    Holds only immutable configuration and a read-only loader, so one
    instance may serve concurrent invocations.
    """

    def __init__(
        self,
        loader: ResourceLoader | None = None,
        config: ProcessingConfig | None = None,
    ) -> None:
        """
        Initialize processor.

        Args:
            loader: Source of documents and schema documents. Defaults to
                the loader described by ``config``.
            config: Processing configuration. Defaults to built-in settings.
        """
        self.config = config if config is not None else ProcessingConfig()
        self.loader = loader if loader is not None else build_loader(self.config)

    def handler_for(self, data_format: "str | DataFormat | None") -> FormatHandler:
        """
        Select the handler for a format.

        Raises:
            UnsupportedFormatError: If the format is not recognized.
        """
        return FormatRegistry.create(data_format, self.config)

    def process(
        self,
        name: str,
        data_format: "str | DataFormat | None",
        validate: bool = False,
        category_filter: str | None = None,
        aggregation: "str | AggregationKind | None" = AggregationKind.SUM,
    ) -> int:
        """
        Load, validate, parse, filter and aggregate one document.

        The aggregation kind is resolved last, so an unsupported kind is
        only reported once every earlier stage has succeeded.

        Args:
            name: Resource name of the document.
            data_format: Encoding of the document.
            validate: Whether to validate before parsing.
            category_filter: Category filter; None or "" keeps all records.
            aggregation: SUM or COUNT.

        Returns:
            The aggregated integer.

        Raises:
            UnsupportedFormatError: If the format is not recognized.
            NotFoundError: If the document is missing.
            InvalidSchemaError: If the schema resource is missing or unusable.
            ValidationFailedError: If requested validation fails.
            MalformedInputError: If the document cannot be parsed.
            UnsupportedAggregationError: If the aggregation kind is unknown.
        """
        handler = self.handler_for(data_format)

        with log_context(resource=name, format=handler.format_name):
            stage = ProcessingStage.LOADING
            try:
                text = self.loader.load(name)

                if validate:
                    stage = self._enter(ProcessingStage.VALIDATING)
                    self._validate(handler, text)

                stage = self._enter(ProcessingStage.PARSING)
                dataset = handler.parse(text)

                stage = self._enter(ProcessingStage.FILTERING)
                filtered = filter_records(
                    dataset, category_filter, handler.matches_category
                )

                stage = self._enter(ProcessingStage.AGGREGATING)
                result = aggregate(filtered, aggregation, handler.value_of)
                self._enter(ProcessingStage.DONE)
            except ProcessingError as e:
                log.error(
                    "Processing failed",
                    stage=ProcessingStage.FAILED.value,
                    failed_stage=stage.value,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise

            log.info(
                "Processing done",
                records=len(dataset),
                matched=len(filtered),
                aggregation=AggregationKind.parse(aggregation).value,
                result=result,
            )
        return result

    def check(self, name: str, data_format: "str | DataFormat | None") -> ValidationResult:
        """
        Validate and parse a document without aggregating it.

        Failures are reported in the result rather than raised, except for
        an unrecognized format.

        Args:
            name: Resource name of the document.
            data_format: Encoding of the document.

        Returns:
            ValidationResult describing the outcome.
        """
        handler = self.handler_for(data_format)
        result = ValidationResult(
            resource=name,
            format_name=handler.format_name,
            schema_name=handler.schema_name,
            exists=False,
            schema_valid=None,
            record_count=None,
            error_message=None,
        )

        with log_context(resource=name, format=handler.format_name):
            try:
                text = self.loader.load(name)
            except NotFoundError as e:
                log.warning("Document not found")
                result.error_message = str(e)
                return result
            result.exists = True

            try:
                self._validate(handler, text)
                result.schema_valid = True
                dataset: Dataset = handler.parse(text)
            except ProcessingError as e:
                log.warning("Check failed", error_type=type(e).__name__, error=str(e))
                if result.schema_valid is None:
                    result.schema_valid = False
                result.error_message = str(e)
                return result

            result.record_count = len(dataset)
            log.info("Check passed", records=len(dataset))
        return result

    def _enter(self, stage: ProcessingStage) -> ProcessingStage:
        log.debug("Entering stage", stage=stage.value)
        return stage

    def _validate(self, handler: FormatHandler, text: str) -> None:
        """
        Run the handler's validator, raising on any failure.

        Raises:
            InvalidSchemaError: If the schema resource is missing or unusable.
            ValidationFailedError: If the document does not validate.
        """
        schema_name = handler.schema_name
        schema_document = None
        if schema_name:
            try:
                schema_document = self.loader.load(schema_name)
            except NotFoundError as e:
                raise InvalidSchemaError(schema_name, "schema resource not found") from e

        try:
            valid = handler.validate(text, schema_document)
        except MalformedInputError as e:
            raise ValidationFailedError(handler.format_name, str(e)) from e

        if not valid:
            msg = f"document does not conform to schema {schema_name!r}"
            raise ValidationFailedError(handler.format_name, msg)
        log.info("Validation passed", schema=schema_name or "layout")


def process(
    name: str,
    data_format: "str | DataFormat | None",
    validate: bool = False,
    category_filter: str | None = None,
    aggregation: "str | AggregationKind | None" = AggregationKind.SUM,
    *,
    loader: ResourceLoader | None = None,
    config: ProcessingConfig | None = None,
) -> int:
    """Process one document with a throwaway DataProcessor."""
    processor = DataProcessor(loader=loader, config=config)
    return processor.process(name, data_format, validate, category_filter, aggregation)
