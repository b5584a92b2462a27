"""Confidence scoring for parse quality."""

from __future__ import annotations


def score_confidence(
    total_fields: int,
    violation_count: int,
    format_certainty: float = 1.0,
) -> float:
    """
    Score a parsed record.  Returns a float 0.0 to 1.0.

    The valid-field ratio of the record, scaled by how sure the engine
    is about the source format (1.0 when the caller declared it).
    """
    if total_fields <= 0:
        raise ValueError("total_fields must be positive")

    base = max(0.0, (total_fields - violation_count) / total_fields)
    certainty = min(1.0, max(0.0, format_certainty))
    return min(1.0, max(0.0, base * certainty))
