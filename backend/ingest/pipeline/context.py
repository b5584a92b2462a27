"""
Per-call inputs and state — ParserConfig, ParseOptions and ParseContext.

ParserConfig and ParseOptions are immutable values handed down the call
chain.  ParseContext is the mutable working state of exactly one parse
call; the engine never keeps it after the call returns.
"""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ingest.core.config import settings
from ingest.core.constants import DetectionHeuristic, ParseState, SourceFormat

# Correlation IDs for log lines; the only state shared across calls
_call_ids = itertools.count(1)


def next_call_id() -> int:
    return next(_call_ids)


# ═══════════════════════════════════════════════════════════
#  ParserConfig
# ═══════════════════════════════════════════════════════════

class ParserConfig(BaseModel):
    """Fault-tolerance and resource knobs for one parse call."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    continue_on_error: bool = False
    max_errors: int = Field(default=10, ge=1)
    timeout: float = Field(default=30.0, gt=0, description="Seconds")
    batch_size: int = Field(default=100, ge=1)
    error_threshold: float = Field(default=0.1, ge=0, le=1)

    @classmethod
    def from_settings(cls) -> "ParserConfig":
        """Process-wide default built from environment settings."""
        return cls(
            continue_on_error=settings.PARSER_CONTINUE_ON_ERROR,
            max_errors=settings.PARSER_MAX_ERRORS,
            timeout=settings.PARSER_TIMEOUT_SECONDS,
            batch_size=settings.PARSER_BATCH_SIZE,
            error_threshold=settings.PARSER_ERROR_THRESHOLD,
        )


# ═══════════════════════════════════════════════════════════
#  ParseOptions
# ═══════════════════════════════════════════════════════════

class ParseOptions(BaseModel):
    """Caller-supplied options describing the payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: str | None = None       # filename or label for diagnostics
    has_header: bool = True
    raw_data: str | None = None     # kept in metadata instead of the payload
    delimiter: str = Field(default=",", min_length=1)


# ═══════════════════════════════════════════════════════════
#  Detection
# ═══════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Detection:
    """Which reader handles a payload, and how sure we are."""

    format: SourceFormat
    certainty: float
    heuristic: DetectionHeuristic

    @classmethod
    def declared(cls, fmt: SourceFormat) -> "Detection":
        return cls(format=fmt, certainty=1.0, heuristic=DetectionHeuristic.DECLARED)


# ═══════════════════════════════════════════════════════════
#  ParseContext
# ═══════════════════════════════════════════════════════════

@dataclass
class ParseContext:
    """
    Working state of a single parse call.

    Populated progressively — the engine fills in the schema, the
    detection and the call-level warnings as the call moves through
    its states.
    """

    raw: str
    schema_name: str
    options: ParseOptions
    config: ParserConfig
    call_id: int = field(default_factory=next_call_id)

    state: ParseState = ParseState.IDLE
    started: float = field(default_factory=time.perf_counter)
    detection: Detection | None = None

    # Warnings that apply to every result of the call
    warnings: list[str] = field(default_factory=list)

    # Running count of error strings across all records
    error_count: int = 0

    def transition(self, state: ParseState) -> None:
        self.state = state

    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.started) * 1000, 3)

    @property
    def source_format(self) -> str:
        return str(self.detection.format) if self.detection else str(SourceFormat.UNKNOWN)

    @property
    def certainty(self) -> float:
        return self.detection.certainty if self.detection else 1.0

    def add_warning(self, warning: str) -> None:
        """Record a call-level warning."""
        self.warnings.append(warning)

    def to_summary_dict(self) -> dict[str, Any]:
        """Compact summary for logging."""
        return {
            "call_id": self.call_id,
            "schema": self.schema_name,
            "source": self.options.source,
            "state": str(self.state),
            "format": self.source_format,
            "heuristic": str(self.detection.heuristic) if self.detection else None,
            "error_count": self.error_count,
            "warnings": len(self.warnings),
        }
