"""Tests for the delimited, structured and markup parsers."""

import json
from pathlib import Path

import pytest

from recordflow.errors import MalformedInputError
from recordflow.ingestion.delimited import parse_delimited
from recordflow.ingestion.markup import parse_markup
from recordflow.ingestion.structured import parse_structured
from recordflow.schemas.record import Record

NAMESPACE = "http://buildozers.org/dojo/data"


def xml_document(*records: str, namespace: str = NAMESPACE) -> str:
    """Wrap record element bodies into a namespaced markup document."""
    body = "".join(f"<record>{record}</record>" for record in records)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<dataset xmlns="{namespace}">{body}</dataset>'
    )


def as_text(record: Record) -> tuple[str, str, str | None, str | None]:
    """Render a record with text fields for cross-format comparison."""
    return (str(record.id), str(record.value), record.category, record.region)


class TestParseDelimited:
    """Tests for the delimited-text parser."""

    def test_sample_dataset(self, sample_documents: dict[str, str]) -> None:
        """Test that the sample CSV yields six records in order."""
        records = parse_delimited(sample_documents["data.csv"])
        assert len(records) == 6
        assert records[0] == Record(id="1", value="250", category="Electronics", region="North")
        assert [r.id for r in records] == ["1", "2", "3", "4", "5", "6"]

    def test_values_are_kept_as_text(self) -> None:
        """Test that non-numeric values parse without error."""
        records = parse_delimited("id,value,category,region\n1,abc,Books,North\n")
        assert records[0].value == "abc"

    def test_extra_columns_and_order(self) -> None:
        """Test that columns are matched by name, not position."""
        text = "region,note,category,id,value\nWest,x,Books,7,12\n"
        records = parse_delimited(text)
        assert records == (Record(id="7", value="12", category="Books", region="West"),)

    def test_blank_lines_are_ignored(self) -> None:
        """Test that blank lines do not produce records."""
        text = "id,value,category,region\n\n1,5,Books,North\n\n2,6,Books,South\n"
        assert len(parse_delimited(text)) == 2

    def test_quoted_fields(self) -> None:
        """Test that quoted fields may contain the delimiter."""
        text = 'id,value,category,region\n1,5,"Books, used",North\n'
        assert parse_delimited(text)[0].category == "Books, used"

    def test_header_only(self) -> None:
        """Test that a header without rows yields an empty dataset."""
        assert parse_delimited("id,value,category,region\n") == ()

    def test_missing_required_column(self) -> None:
        """Test that a missing column is malformed input."""
        with pytest.raises(MalformedInputError, match="region"):
            parse_delimited("id,value,category\n1,5,Books\n")

    def test_header_match_is_case_sensitive(self) -> None:
        """Test that header names must match exactly."""
        with pytest.raises(MalformedInputError, match="category"):
            parse_delimited("id,value,Category,region\n1,5,Books,North\n")

    def test_empty_document(self) -> None:
        """Test that an empty document is malformed input."""
        with pytest.raises(MalformedInputError):
            parse_delimited("")

    def test_short_rows_are_tolerated(self) -> None:
        """Test that short rows parse with empty trailing fields."""
        records = parse_delimited("id,value,category,region\n1,5,Books\n")
        assert records[0].region == ""

    def test_long_row_is_kept(self) -> None:
        """Test that a row with extra fields still yields its record."""
        text = (
            "id,value,category,region\n"
            "1,250,Electronics,North\n"
            "2,100,Electronics,South,extra\n"
        )
        records = parse_delimited(text)
        assert records[1] == Record(id="2", value="100", category="Electronics", region="South")

    def test_extra_field_on_every_row(self) -> None:
        """Test that a trailing field on every row does not shift columns."""
        text = (
            "id,value,category,region\n"
            "1,250,Electronics,North,x\n"
            "2,100,Electronics,South,y\n"
        )
        records = parse_delimited(text)
        assert records == (
            Record(id="1", value="250", category="Electronics", region="North"),
            Record(id="2", value="100", category="Electronics", region="South"),
        )

    def test_repeated_header_uses_first_column(self) -> None:
        """Test that a repeated column name maps to its first occurrence."""
        records = parse_delimited("id,value,category,region,value\n1,5,Books,North,9\n")
        assert records[0].value == "5"

    def test_corrupt_file(self, test_data_dir: Path) -> None:
        """Test that an unterminated quote is malformed input."""
        text = (test_data_dir / "corrupt.csv").read_text(encoding="utf-8")
        with pytest.raises(MalformedInputError) as exc_info:
            parse_delimited(text)
        assert exc_info.value.format_name == "CSV"


class TestParseStructured:
    """Tests for the structured-object parser."""

    def test_sample_dataset(self, sample_documents: dict[str, str]) -> None:
        """Test that the sample JSON yields six typed records."""
        records = parse_structured(sample_documents["data.json"])
        assert len(records) == 6
        assert records[0] == Record(id=1, value=250, category="Electronics", region="North")

    def test_numeric_string_value(self) -> None:
        """Test that a string of digits is accepted as an integer value."""
        text = json.dumps({"data": [{"id": 1, "value": "42", "category": "Books"}]})
        assert parse_structured(text)[0].value == 42

    def test_region_is_optional(self) -> None:
        """Test that records without region parse."""
        text = json.dumps({"data": [{"id": 1, "value": 3, "category": "Books"}]})
        assert parse_structured(text)[0].region is None

    def test_missing_data_array(self) -> None:
        """Test that a document without 'data' is malformed input."""
        with pytest.raises(MalformedInputError, match="data"):
            parse_structured(json.dumps({"records": []}))

    def test_data_not_array(self) -> None:
        """Test that a non-array 'data' is malformed input."""
        with pytest.raises(MalformedInputError):
            parse_structured(json.dumps({"data": {"id": 1}}))

    def test_top_level_array(self) -> None:
        """Test that the top level must be an object."""
        with pytest.raises(MalformedInputError, match="object"):
            parse_structured("[]")

    @pytest.mark.parametrize(("value", "expected"), [(12.0, 12), (12.7, 12), (-3.5, -3)])
    def test_fractional_number_is_truncated(self, value: float, expected: int) -> None:
        """Test that JSON numbers with a fraction are read as integers."""
        text = json.dumps({"data": [{"id": 1, "value": value, "category": "Electronics"}]})
        assert parse_structured(text)[0].value == expected

    @pytest.mark.parametrize("value", ["abc", None, True, "1.5", [], float("nan")])
    def test_non_numeric_value(self, value: object) -> None:
        """Test that non-integer values are malformed input."""
        text = json.dumps({"data": [{"id": 1, "value": value, "category": "Books"}]})
        with pytest.raises(MalformedInputError) as exc_info:
            parse_structured(text)
        assert exc_info.value.position == "data[0].value"

    def test_missing_category(self) -> None:
        """Test that a record without category is malformed input."""
        text = json.dumps({"data": [{"id": 1, "value": 3}]})
        with pytest.raises(MalformedInputError, match="category"):
            parse_structured(text)

    def test_invalid_json_reports_line(self, test_data_dir: Path) -> None:
        """Test that decode errors carry a line number."""
        text = (test_data_dir / "corrupt.json").read_text(encoding="utf-8")
        with pytest.raises(MalformedInputError) as exc_info:
            parse_structured(text)
        assert exc_info.value.line is not None
        assert exc_info.value.format_name == "JSON"


class TestParseMarkup:
    """Tests for the markup parser."""

    def test_sample_dataset(self, sample_documents: dict[str, str]) -> None:
        """Test that the sample XML yields six records."""
        records = parse_markup(sample_documents["data.xml"])
        assert len(records) == 6
        assert records[0] == Record(id="1", value="250", category="Electronics", region="North")

    def test_missing_category_is_none(self) -> None:
        """Test that a record without category element has no category."""
        records = parse_markup(xml_document("<value>5</value>"))
        assert records[0].category is None
        assert records[0].id is None

    def test_missing_value_is_empty(self) -> None:
        """Test that a record without value element has empty value text."""
        records = parse_markup(xml_document("<category>Books</category>"))
        assert records[0].value == ""

    def test_value_text_is_not_stripped(self) -> None:
        """Test that value text is kept verbatim."""
        records = parse_markup(xml_document("<value> 5 </value><category>Books</category>"))
        assert records[0].value == " 5 "

    def test_other_namespace_is_ignored(self) -> None:
        """Test that records outside the namespace are not parsed."""
        text = xml_document(
            "<value>5</value><category>Books</category>", namespace="urn:other"
        )
        assert parse_markup(text) == ()

    def test_custom_namespace(self) -> None:
        """Test that the namespace is configurable."""
        text = xml_document("<value>5</value><category>Books</category>", namespace="urn:x")
        assert len(parse_markup(text, namespace="urn:x")) == 1

    def test_malformed_document(self, test_data_dir: Path) -> None:
        """Test that a mismatched tag is malformed input with a line."""
        text = (test_data_dir / "corrupt.xml").read_text(encoding="utf-8")
        with pytest.raises(MalformedInputError) as exc_info:
            parse_markup(text)
        assert exc_info.value.line is not None

    def test_entity_declarations_are_rejected(self) -> None:
        """Test that entity declarations are refused."""
        text = (
            '<?xml version="1.0"?>'
            '<!DOCTYPE dataset [<!ENTITY cat "Books">]>'
            f'<dataset xmlns="{NAMESPACE}"><record><value>1</value>'
            "<category>&cat;</category></record></dataset>"
        )
        with pytest.raises(MalformedInputError, match="forbidden"):
            parse_markup(text)


class TestCrossFormatEquivalence:
    """Tests that all encodings of the sample dataset agree."""

    def test_same_records(self, sample_documents: dict[str, str]) -> None:
        """Test that the three parsed datasets hold the same records."""
        delimited = sorted(map(as_text, parse_delimited(sample_documents["data.csv"])))
        structured = sorted(map(as_text, parse_structured(sample_documents["data.json"])))
        markup = sorted(map(as_text, parse_markup(sample_documents["data.xml"])))
        assert delimited == structured == markup
