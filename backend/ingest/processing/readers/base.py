"""
Abstract base class for all format readers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ingest.core.constants import SourceFormat
from ingest.pipeline.context import ParseOptions
from ingest.schemas.models import RecordSchema


@dataclass
class LooseRecord:
    """
    One candidate record, untyped, as it came out of a reader.

    Args:
        fields: Field name → raw value (strings for CSV, JSON scalars, ...).
        raw: The slice of the payload the record came from.
        index: Zero-based position of the record in the input.
        warnings: Reader notes that only concern this record.
    """

    fields: dict[str, Any]
    raw: str
    index: int
    warnings: list[str] = field(default_factory=list)


@dataclass
class ReadOutput:
    """Everything a reader produced for one payload."""

    records: list[LooseRecord] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    # True for batch shapes (CSV rows, JSON arrays, repeated XML elements)
    multi_record: bool = False


class BaseReader(ABC):
    """Base interface for format readers."""

    format: SourceFormat = SourceFormat.UNKNOWN

    @abstractmethod
    def read(self, raw_text: str, schema: RecordSchema, options: ParseOptions) -> ReadOutput:
        """Turn raw text into loose records.  Raise ReadSyntaxError on structural failure."""
        ...

    def supports_format(self, format_type: str) -> bool:
        """Return True if this reader handles the given format type."""
        return format_type == self.format
