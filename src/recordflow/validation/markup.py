"""
XSD validation for markup documents.

Both the schema and the document are parsed with entity resolution, DTD
loading and network access disabled, so untrusted input cannot trigger
external fetches while being validated.
"""

from lxml import etree

from recordflow.errors import InvalidSchemaError
from recordflow.utils.logging import get_logger

log = get_logger(__name__)


def hardened_parser() -> etree.XMLParser:
    """Create an XML parser that never resolves external resources."""
    return etree.XMLParser(
        resolve_entities=False,
        load_dtd=False,
        dtd_validation=False,
        no_network=True,
        huge_tree=False,
    )


def _to_bytes(text: str) -> bytes:
    # lxml rejects str input that carries an encoding declaration
    return text.encode("utf-8")


def load_xml_schema(schema_document: str, schema_name: str = "markup schema") -> etree.XMLSchema:
    """
    Parse an XSD document.

    Raises:
        InvalidSchemaError: If the text is not XML or not a valid XSD.
    """
    try:
        schema_root = etree.fromstring(_to_bytes(schema_document), hardened_parser())
        return etree.XMLSchema(schema_root)
    except (etree.XMLSyntaxError, etree.XMLSchemaParseError) as e:
        raise InvalidSchemaError(schema_name, str(e)) from e


def validate_markup(
    raw_document: str,
    schema_document: str,
    schema_name: str = "markup schema",
) -> bool:
    """
    Validate a markup document against an XSD schema.

    Checks element structure, data types and enumerated values.

    Returns:
        True if the document conforms, False on any violation or when the
        document is not well-formed.

    Raises:
        InvalidSchemaError: If the schema document is unusable.
    """
    schema = load_xml_schema(schema_document, schema_name)

    try:
        document = etree.fromstring(_to_bytes(raw_document), hardened_parser())
    except etree.XMLSyntaxError as e:
        log.warning("Document is not well-formed XML", error=str(e), line=e.lineno)
        return False

    try:
        valid = schema.validate(document)
    except etree.XMLSchemaValidateError as e:
        # Raised for trees that still hold unresolved entity references
        log.warning("XSD validation aborted", error=str(e))
        return False

    if valid:
        return True

    error = schema.error_log.last_error
    log.warning(
        "XSD validation failed",
        n_errors=len(schema.error_log),
        line=error.line if error is not None else None,
        error=error.message if error is not None else None,
    )
    return False
