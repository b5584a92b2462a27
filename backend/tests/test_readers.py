"""Tests for format detection and the CSV / JSON / XML readers."""

import pytest

from ingest.core.constants import DetectionHeuristic, SourceFormat
from ingest.pipeline.context import ParseOptions
from ingest.pipeline.errors import ReadSyntaxError
from ingest.processing.format_detector import detect_format, format_from_source
from ingest.processing.readers import CsvReader, JsonReader, XmlReader, get_reader
from ingest.processing.readers.csv_reader import normalize_header

OPTIONS = ParseOptions()


class TestFormatDetector:

    @pytest.mark.parametrize("raw, expected, heuristic", [
        ('{"a": 1}', SourceFormat.JSON, DetectionHeuristic.JSON_MARKER),
        ("  [1, 2]", SourceFormat.JSON, DetectionHeuristic.JSON_MARKER),
        ("\n<root/>", SourceFormat.XML, DetectionHeuristic.XML_MARKER),
        ("name,age\nAlice,30", SourceFormat.CSV, DetectionHeuristic.CSV_FALLBACK),
    ])
    def test_detects(self, raw, expected, heuristic):
        detection = detect_format(raw)
        assert detection.format == expected
        assert detection.heuristic == heuristic

    def test_marker_beats_fallback_certainty(self):
        assert detect_format("{}").certainty > detect_format("a,b").certainty

    @pytest.mark.parametrize("raw", ['{"a": 1}', "<root/>"])
    def test_marker_detection_is_certain(self, raw):
        assert detect_format(raw).certainty == 1.0

    def test_fallback_certainty_below_one(self):
        assert detect_format("a,b").certainty == pytest.approx(0.7)

    @pytest.mark.parametrize("raw", ["", "   \n\t"])
    def test_empty_input_is_read_error(self, raw):
        with pytest.raises(ReadSyntaxError):
            detect_format(raw)

    @pytest.mark.parametrize("source, expected", [
        ("events.CSV", SourceFormat.CSV),
        ("drivers.txt", None),
        ("fleet.json", SourceFormat.JSON),
        ("manifest.xml", SourceFormat.XML),
        ("notes.docx", None),
        (None, None),
    ])
    def test_format_from_source(self, source, expected):
        assert format_from_source(source) == expected


class TestCsvReader:

    def test_header_rows(self, person_schema):
        output = CsvReader().read("name,age\nAlice,30\nBob,41\n", person_schema, OPTIONS)
        assert output.multi_record
        assert [r.fields for r in output.records] == [
            {"name": "Alice", "age": "30"},
            {"name": "Bob", "age": "41"},
        ]
        assert output.records[1].raw == "Bob,41"
        assert output.records[1].index == 1

    def test_header_normalisation(self, person_schema):
        output = CsvReader().read(" Name , AGE \nAlice,30", person_schema, OPTIONS)
        assert output.records[0].fields == {"name": "Alice", "age": "30"}

    def test_normalize_header(self):
        assert normalize_header("Start_Date") == normalize_header("start date") == "startdate"

    def test_unknown_column_warns(self, person_schema):
        output = CsvReader().read("name,age,city\nAlice,30,Dubai", person_schema, OPTIONS)
        assert "city: unknown column ignored" in output.warnings
        assert output.records[0].fields == {"name": "Alice", "age": "30"}

    def test_duplicate_column_warns(self, person_schema):
        output = CsvReader().read("name,age,Name\nAlice,30,Ally", person_schema, OPTIONS)
        assert output.records[0].fields["name"] == "Alice"
        assert any("duplicate column" in w for w in output.warnings)

    def test_header_matching_nothing_is_read_error(self, person_schema):
        with pytest.raises(ReadSyntaxError):
            CsvReader().read("foo,bar\n1,2", person_schema, OPTIONS)

    def test_headerless_maps_positionally(self, person_schema):
        output = CsvReader().read("Alice,30", person_schema, ParseOptions(has_header=False))
        assert output.records[0].fields == {"name": "Alice", "age": "30"}

    def test_short_row_leaves_fields_absent(self, person_schema):
        output = CsvReader().read("name,age\nAlice", person_schema, OPTIONS)
        assert output.records[0].fields == {"name": "Alice"}

    def test_extra_values_warn_on_record(self, person_schema):
        output = CsvReader().read("name,age\nAlice,30,x,y", person_schema, OPTIONS)
        assert output.records[0].warnings == ["line 2: 2 extra value(s) ignored"]

    def test_blank_lines_skipped(self, person_schema):
        output = CsvReader().read("name,age\n\nAlice,30\n   \nBob,2", person_schema, OPTIONS)
        assert [r.index for r in output.records] == [0, 1]

    def test_header_only_warns(self, person_schema):
        output = CsvReader().read("name,age", person_schema, OPTIONS)
        assert output.records == []
        assert "CSV input contains no data rows" in output.warnings

    def test_custom_delimiter(self, person_schema):
        output = CsvReader().read("name;age\nAlice;30", person_schema, ParseOptions(delimiter=";"))
        assert output.records[0].fields == {"name": "Alice", "age": "30"}


class TestJsonReader:

    def test_object_is_single_record(self, person_schema):
        raw = '{"name": "Alice", "age": 30}'
        output = JsonReader().read(raw, person_schema, OPTIONS)
        assert not output.multi_record
        assert output.records[0].fields == {"name": "Alice", "age": 30}
        assert output.records[0].raw == raw

    def test_array_is_batch(self, person_schema):
        output = JsonReader().read('[{"name": "A"}, {"name": "B"}]', person_schema, OPTIONS)
        assert output.multi_record
        assert [r.fields["name"] for r in output.records] == ["A", "B"]
        assert output.records[1].raw == '{"name": "B"}'

    def test_empty_array_warns(self, person_schema):
        output = JsonReader().read("[]", person_schema, OPTIONS)
        assert output.multi_record
        assert output.records == []
        assert output.warnings == ["JSON array is empty"]

    @pytest.mark.parametrize("raw", ["42", '"text"', "true", "null"])
    def test_scalar_is_read_error(self, person_schema, raw):
        with pytest.raises(ReadSyntaxError):
            JsonReader().read(raw, person_schema, OPTIONS)

    def test_non_object_element_is_read_error(self, person_schema):
        with pytest.raises(ReadSyntaxError, match="array element 1"):
            JsonReader().read('[{"name": "A"}, 3]', person_schema, OPTIONS)

    def test_malformed_json(self, person_schema):
        with pytest.raises(ReadSyntaxError) as exc_info:
            JsonReader().read('{"name": ', person_schema, OPTIONS)
        assert exc_info.value.to_error_string().startswith("ReadSyntaxError: Invalid JSON")

    def test_oversized_integer_literal(self, person_schema):
        raw = '{"name": "A", "age": ' + "1" * 5000 + "}"
        with pytest.raises(ReadSyntaxError, match="Invalid JSON"):
            JsonReader().read(raw, person_schema, OPTIONS)

    def test_excessive_nesting(self, person_schema):
        raw = "[" * 100_000 + "]" * 100_000
        with pytest.raises(ReadSyntaxError, match="nesting too deep"):
            JsonReader().read(raw, person_schema, OPTIONS)


class TestXmlReader:

    def test_single_record_root(self, person_schema):
        raw = "<person><name>Alice</name><age>30</age></person>"
        output = XmlReader().read(raw, person_schema, OPTIONS)
        assert not output.multi_record
        assert output.records[0].fields == {"name": "Alice", "age": "30"}

    def test_collection(self, person_schema):
        raw = (
            "<people>"
            "<person><name>Alice</name><age>30</age></person>"
            "<person name=\"Bob\"><age>41</age></person>"
            "</people>"
        )
        output = XmlReader().read(raw, person_schema, OPTIONS)
        assert output.multi_record
        assert [r.fields for r in output.records] == [
            {"name": "Alice", "age": "30"},
            {"name": "Bob", "age": "41"},
        ]
        assert output.records[1].raw.startswith("<person")

    def test_namespaces_stripped(self, person_schema):
        raw = '<p:person xmlns:p="urn:x"><p:name>Alice</p:name></p:person>'
        output = XmlReader().read(raw, person_schema, OPTIONS)
        assert output.records[0].fields == {"name": "Alice"}

    def test_repeated_tag_becomes_list(self, person_schema):
        raw = "<driver><language>en</language><language>ar</language></driver>"
        output = XmlReader().read(raw, person_schema, OPTIONS)
        assert output.records[0].fields == {"language": ["en", "ar"]}

    def test_nested_element_warns(self, person_schema):
        raw = "<person><name>Alice</name><address><city>Dubai</city></address></person>"
        output = XmlReader().read(raw, person_schema, OPTIONS)
        assert output.records[0].fields == {"name": "Alice"}
        assert output.records[0].warnings == ["address: nested element ignored"]

    def test_malformed_xml(self, person_schema):
        with pytest.raises(ReadSyntaxError, match="XML parsing error"):
            XmlReader().read("<person><name>Alice</person>", person_schema, OPTIONS)


class TestReaderLookup:

    @pytest.mark.parametrize("fmt, reader_type", [
        (SourceFormat.CSV, CsvReader),
        (SourceFormat.JSON, JsonReader),
        (SourceFormat.XML, XmlReader),
    ])
    def test_get_reader(self, fmt, reader_type):
        assert isinstance(get_reader(fmt), reader_type)

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            get_reader("yaml")
