"""
JSON Schema validation for structured-object documents.

Constraint violations yield False; an unusable schema document raises
InvalidSchemaError.
"""

import json

from jsonschema.exceptions import SchemaError
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for

from recordflow.errors import InvalidSchemaError
from recordflow.utils.logging import get_logger

log = get_logger(__name__)


def load_json_schema(schema_document: str, schema_name: str = "structured schema") -> Validator:
    """
    Parse and check a JSON Schema document.

    Args:
        schema_document: Schema text.
        schema_name: Resource name used in error messages.

    Returns:
        A validator instance for the schema's declared draft.

    Raises:
        InvalidSchemaError: If the text is not JSON or not a valid schema.
    """
    try:
        schema = json.loads(schema_document)
    except json.JSONDecodeError as e:
        raise InvalidSchemaError(schema_name, f"invalid JSON: {e}") from e
    if not isinstance(schema, dict | bool):
        raise InvalidSchemaError(schema_name, "schema must be an object or a boolean")

    validator_cls = validator_for(schema)
    try:
        validator_cls.check_schema(schema)
    except SchemaError as e:
        raise InvalidSchemaError(schema_name, e.message) from e
    return validator_cls(schema)


def validate_structured(
    raw_document: str,
    schema_document: str,
    schema_name: str = "structured schema",
) -> bool:
    """
    Validate a structured-object document against a JSON Schema.

    Args:
        raw_document: Document text.
        schema_document: JSON Schema text.
        schema_name: Resource name used in error messages.

    Returns:
        True if the document conforms, False on any violation or when the
        document is not valid JSON.

    Raises:
        InvalidSchemaError: If the schema document is unusable.
    """
    validator = load_json_schema(schema_document, schema_name)

    try:
        instance = json.loads(raw_document)
    except json.JSONDecodeError as e:
        log.warning("Document is not valid JSON", error=str(e))
        return False

    errors = sorted(validator.iter_errors(instance), key=lambda err: list(err.absolute_path))
    if errors:
        first = errors[0]
        log.warning(
            "JSON Schema validation failed",
            n_errors=len(errors),
            path="/".join(str(p) for p in first.absolute_path),
            error=first.message,
        )
        return False
    return True
