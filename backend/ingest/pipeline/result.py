"""
ParsingResult — the envelope handed back to the caller for every record.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ParsingMetadata(BaseModel):
    """Diagnostics attached to every result, win or lose."""

    parsing_time_ms: float = Field(ge=0)
    source_format: str
    confidence: float = Field(ge=0, le=1)
    parser_version: str
    raw_data: str
    source: str | None = None
    record_index: int | None = None     # None for call-level results
    call_id: int | None = None


class ParsingResult(BaseModel):
    """Outcome of parsing one candidate record (or of a failed call)."""

    success: bool
    data: dict[str, Any] | None = None
    partial: bool = False               # data present despite violations
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    metadata: ParsingMetadata

    @property
    def confidence(self) -> float:
        return self.metadata.confidence


ParseOutcome = ParsingResult | list[ParsingResult]
