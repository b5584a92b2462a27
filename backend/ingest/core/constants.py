"""Shared constants and enums used across the engine."""

from enum import StrEnum


class SourceFormat(StrEnum):
    """Input formats the engine can read."""

    CSV = "csv"
    JSON = "json"
    XML = "xml"
    UNKNOWN = "unknown"


class FieldType(StrEnum):
    """Declared type of a schema field."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ENUM = "enum"
    STRING_ARRAY = "string-array"


class ViolationReason(StrEnum):
    """Why a single field failed validation."""

    MISSING = "missing"
    WRONG_TYPE = "wrong-type"
    UNPARSABLE = "unparsable"
    OUT_OF_RANGE = "out-of-range"


class ParseState(StrEnum):
    """Lifecycle of one parse call."""

    IDLE = "IDLE"
    READING = "READING"
    VALIDATING = "VALIDATING"
    AGGREGATING = "AGGREGATING"
    DONE = "DONE"


class DetectionHeuristic(StrEnum):
    """How the source format of a payload was decided."""

    DECLARED = "declared"
    JSON_MARKER = "json_marker"
    XML_MARKER = "xml_marker"
    CSV_FALLBACK = "csv_fallback"


# Extension → format mapping used when routing uploaded files
EXTENSION_MAP: dict[str, SourceFormat] = {
    ".csv": SourceFormat.CSV,
    ".json": SourceFormat.JSON,
    ".xml": SourceFormat.XML,
}
