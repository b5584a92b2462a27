"""
Batch processing — several uploaded files parsed as independent calls.

Each file gets its own parse call; files run concurrently and share
nothing.  Results come back in submission order regardless of which
file finished first.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable

from ingest.core.config import settings
from ingest.core.constants import SourceFormat
from ingest.core.logging import get_logger
from ingest.pipeline.context import ParseOptions, ParserConfig
from ingest.pipeline.engine import DataParser
from ingest.pipeline.result import ParsingMetadata, ParsingResult
from ingest.processing.format_detector import format_from_source

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]
ErrorCallback = Callable[[Exception, int], None]


@dataclass
class BatchFile:
    """
    One file in a batch.

    Args:
        content: Decoded file text.
        schema_name: Registry key to validate against.
        format: Declared format; None routes by filename extension and
                falls back to auto-detection.
        source: Original filename, also used for extension routing.
        has_header: CSV header flag.
    """

    content: str
    schema_name: str
    format: SourceFormat | None = None
    source: str | None = None
    has_header: bool = True


@dataclass
class BatchItem:
    """Results for one file, tagged with its position in the batch."""

    file_index: int
    source: str | None
    results: list[ParsingResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return bool(self.results) and all(r.success for r in self.results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_index": self.file_index,
            "source": self.source,
            "success": self.success,
            "results": [r.model_dump(mode="json") for r in self.results],
        }


async def process_batch(
    files: list[BatchFile],
    parser: DataParser | None = None,
    config: ParserConfig | None = None,
    on_progress: ProgressCallback | None = None,
    on_error: ErrorCallback | None = None,
) -> list[BatchItem]:
    """
    Parse every file and return one BatchItem per file, in input order.

    An unexpected exception while parsing one file becomes a failure
    result for that file only; the rest of the batch is unaffected.
    """
    parser = parser or DataParser(config)
    total = len(files)
    completed = 0

    logger.info("Batch started", total_files=total)

    async def run_one(index: int, item: BatchFile) -> BatchItem:
        nonlocal completed
        fmt = item.format or format_from_source(item.source)
        options = ParseOptions(source=item.source, has_header=item.has_header)

        try:
            outcome = await parser.parse(item.content, item.schema_name, fmt, options, config)
            results = outcome if isinstance(outcome, list) else [outcome]
        except Exception as exc:
            logger.exception(
                "Unexpected error while parsing file",
                file_index=index,
                source=item.source,
                error=str(exc),
            )
            results = [_error_result(item, exc, fmt)]
            if on_error:
                on_error(exc, index)

        completed += 1
        if on_progress:
            on_progress(completed, total)
        return BatchItem(file_index=index, source=item.source, results=results)

    items = await asyncio.gather(*(run_one(i, f) for i, f in enumerate(files)))

    logger.info(
        "Batch finished",
        total_files=total,
        files_ok=sum(1 for item in items if item.success),
    )
    return list(items)


def _error_result(item: BatchFile, exc: Exception, fmt: SourceFormat | None) -> ParsingResult:
    return ParsingResult(
        success=False,
        errors=[str(exc) or type(exc).__name__],
        metadata=ParsingMetadata(
            parsing_time_ms=0,
            source_format=str(fmt or SourceFormat.UNKNOWN),
            confidence=0.0,
            parser_version=settings.PARSER_VERSION,
            raw_data=item.content,
            source=item.source,
        ),
    )
