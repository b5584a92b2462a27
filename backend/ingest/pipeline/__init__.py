"""
Parsing pipeline — the orchestrator that turns uploaded text into
validated records, with per-call configuration, structured logging
and a uniform result envelope.
"""

from ingest.pipeline.batch import BatchFile, BatchItem, process_batch
from ingest.pipeline.context import ParseContext, ParseOptions, ParserConfig
from ingest.pipeline.engine import DataParser
from ingest.pipeline.result import ParsingMetadata, ParsingResult

__all__ = [
    "BatchFile",
    "BatchItem",
    "DataParser",
    "ParseContext",
    "ParseOptions",
    "ParserConfig",
    "ParsingMetadata",
    "ParsingResult",
    "process_batch",
]
