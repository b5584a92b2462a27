"""Field coercion, validation and confidence scoring."""

from ingest.validation.confidence_scorer import score_confidence
from ingest.validation.field_validator import FieldViolation, ValidationOutcome, validate

__all__ = ["FieldViolation", "ValidationOutcome", "score_confidence", "validate"]
