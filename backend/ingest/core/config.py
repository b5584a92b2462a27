"""
Pydantic Settings — centralized configuration loaded from environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Application ───────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ── Parser defaults ──────────────────────
    PARSER_VERSION: str = "1.0.0"
    PARSER_CONTINUE_ON_ERROR: bool = False
    PARSER_MAX_ERRORS: int = Field(default=10, ge=1)
    PARSER_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)
    PARSER_BATCH_SIZE: int = Field(default=100, ge=1)
    PARSER_ERROR_THRESHOLD: float = Field(default=0.1, ge=0, le=1)

    # ── Format detection ─────────────────────
    # Certainty multipliers applied to the confidence score when the
    # format was guessed instead of declared by the caller.
    DETECTION_MARKER_CERTAINTY: float = Field(default=1.0, gt=0, le=1)
    DETECTION_FALLBACK_CERTAINTY: float = Field(default=0.7, gt=0, le=1)

    model_config = {"env_prefix": "INGEST_", "env_file": [".env"], "extra": "ignore"}


settings = Settings()
