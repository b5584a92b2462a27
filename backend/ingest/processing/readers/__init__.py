"""Format readers: raw text → loose records."""

from ingest.core.constants import SourceFormat
from ingest.processing.readers.base import BaseReader, LooseRecord, ReadOutput
from ingest.processing.readers.csv_reader import CsvReader
from ingest.processing.readers.json_reader import JsonReader
from ingest.processing.readers.xml_reader import XmlReader

_READERS: tuple[BaseReader, ...] = (CsvReader(), JsonReader(), XmlReader())


def get_reader(format_type: str) -> BaseReader:
    """Return the reader that handles `format_type`."""
    for reader in _READERS:
        if reader.supports_format(format_type):
            return reader
    raise ValueError(f"No reader for format '{format_type}'")


__all__ = [
    "BaseReader",
    "CsvReader",
    "JsonReader",
    "LooseRecord",
    "ReadOutput",
    "SourceFormat",
    "XmlReader",
    "get_reader",
]
