"""
Markup (XML) parsing.

Records are ``record`` elements qualified by the configured namespace.
Parsing goes through defusedxml, so entity declarations and external
references are rejected.
"""

from xml.etree.ElementTree import Element, ParseError

from defusedxml import ElementTree as SafeElementTree
from defusedxml.common import DefusedXmlException

from recordflow.config.settings import DEFAULT_NAMESPACE
from recordflow.errors import MalformedInputError
from recordflow.ingestion.base import FormatHandler
from recordflow.processing.filtering import category_equals
from recordflow.schemas.record import Dataset, Record
from recordflow.validation.markup import validate_markup

FORMAT_NAME = "XML"


def _child_text(element: Element, namespace: str, tag: str) -> str | None:
    """Full text content of the first descendant ``tag``, None if absent."""
    child = element.find(f".//{{{namespace}}}{tag}")
    if child is None:
        return None
    return "".join(child.itertext())


def parse_markup(text: str, namespace: str = DEFAULT_NAMESPACE) -> Dataset:
    """
    Parse a markup document into records.

    Only ``category`` and ``value`` are read for every record; ``id`` and
    ``region`` are optional here and enforced by the schema check.

    Args:
        text: XML document.
        namespace: Namespace qualifying record elements.

    Returns:
        Records in document order. A record without a category element
        has ``category=None``; one without a value element has value "".

    Raises:
        MalformedInputError: If the text is not well-formed or uses
            forbidden constructs such as entity declarations.
    """
    try:
        root = SafeElementTree.fromstring(text)
    except ParseError as e:
        line, column = e.position
        raise MalformedInputError(
            FORMAT_NAME, str(e), line=line, position=f"column {column}"
        ) from e
    except DefusedXmlException as e:
        raise MalformedInputError(FORMAT_NAME, f"forbidden construct: {e}") from e

    return tuple(
        Record(
            id=_child_text(element, namespace, "id"),
            value=_child_text(element, namespace, "value") or "",
            category=_child_text(element, namespace, "category"),
            region=_child_text(element, namespace, "region"),
        )
        for element in root.iter(f"{{{namespace}}}record")
    )


class MarkupHandler(FormatHandler):
    """
    Handler for markup documents, validated with XSD.

    Category matching is case-sensitive exact equality, unlike the
    substring match of the other encodings.
    """

    format_name = FORMAT_NAME

    @property
    def schema_name(self) -> str:
        """Configured XSD resource."""
        return self.config.schemas.markup

    def parse(self, text: str) -> Dataset:
        """Parse an XML document."""
        return parse_markup(text, self.config.namespace)

    def validate(self, text: str, schema_document: str | None) -> bool:
        """Validate against the XSD document."""
        if schema_document is None:
            msg = "markup validation requires a schema document"
            raise ValueError(msg)
        return validate_markup(text, schema_document, self.schema_name)

    def matches_category(self, category: str | None, category_filter: str) -> bool:
        """Case-sensitive exact match."""
        return category_equals(category, category_filter)
