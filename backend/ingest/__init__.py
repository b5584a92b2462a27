"""
Event-ops ingestion engine.

Reads uploaded CSV / JSON / XML text, validates it against named record
schemas and returns uniform ParsingResult envelopes.
"""

from ingest.pipeline.batch import BatchFile, BatchItem, process_batch
from ingest.pipeline.context import ParseOptions, ParserConfig
from ingest.pipeline.engine import (
    DataParser,
    create_data_parser,
    quick_parse,
    quick_parse_csv,
    quick_parse_json,
    quick_parse_xml,
)
from ingest.pipeline.errors import (
    ParserError,
    ParseTimeoutError,
    ReadSyntaxError,
    SchemaNotFoundError,
)
from ingest.pipeline.result import ParsingMetadata, ParsingResult
from ingest.schemas import get_schema, get_schema_info, registry

__version__ = "1.0.0"

__all__ = [
    "BatchFile",
    "BatchItem",
    "DataParser",
    "ParseOptions",
    "ParseTimeoutError",
    "ParserConfig",
    "ParserError",
    "ParsingMetadata",
    "ParsingResult",
    "ReadSyntaxError",
    "SchemaNotFoundError",
    "create_data_parser",
    "get_schema",
    "get_schema_info",
    "process_batch",
    "quick_parse",
    "quick_parse_csv",
    "quick_parse_json",
    "quick_parse_xml",
    "registry",
]
