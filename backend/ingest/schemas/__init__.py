"""
Schema registry — named, immutable record schemas for every upload surface.
"""

from ingest.schemas.models import FieldDefinition, RecordSchema
from ingest.schemas.registry import (
    SchemaInfo,
    SchemaRegistry,
    get_schema,
    get_schema_info,
    registry,
)

__all__ = [
    "FieldDefinition",
    "RecordSchema",
    "SchemaInfo",
    "SchemaRegistry",
    "get_schema",
    "get_schema_info",
    "registry",
]
