"""
Format Detector — decides which reader handles a payload.

Priority order, applied to the trimmed text:
    1. starts with "{" or "["  → JSON
    2. starts with "<"         → XML
    3. anything else           → CSV (fallback, lower certainty)

Empty input is never guessed; it is a read error.
"""

from __future__ import annotations

import os

from ingest.core.config import settings
from ingest.core.constants import EXTENSION_MAP, DetectionHeuristic, SourceFormat
from ingest.pipeline.context import Detection
from ingest.pipeline.errors import ReadSyntaxError


def detect_format(raw_text: str) -> Detection:
    """Sniff the payload and return the chosen format with its certainty."""
    text = raw_text.strip()
    if not text:
        raise ReadSyntaxError("empty input: cannot detect format")

    if text[0] in "{[":
        return Detection(
            format=SourceFormat.JSON,
            certainty=settings.DETECTION_MARKER_CERTAINTY,
            heuristic=DetectionHeuristic.JSON_MARKER,
        )

    if text[0] == "<":
        return Detection(
            format=SourceFormat.XML,
            certainty=settings.DETECTION_MARKER_CERTAINTY,
            heuristic=DetectionHeuristic.XML_MARKER,
        )

    return Detection(
        format=SourceFormat.CSV,
        certainty=settings.DETECTION_FALLBACK_CERTAINTY,
        heuristic=DetectionHeuristic.CSV_FALLBACK,
    )


def format_from_source(source: str | None) -> SourceFormat | None:
    """Map a filename extension to a format, or None when it is unknown."""
    if not source:
        return None
    ext = os.path.splitext(source)[1].lower()
    return EXTENSION_MAP.get(ext)
