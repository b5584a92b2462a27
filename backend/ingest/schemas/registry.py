"""
SchemaRegistry — read-only lookup of named record schemas.

Built once at import time from the schema definitions.  Lookups are
exact and case-sensitive; nothing is registered after startup, so the
registry is shared across concurrent parse calls without locking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from ingest.pipeline.errors import InvalidSchemaError, SchemaNotFoundError
from ingest.schemas.definitions import ALL_SCHEMAS
from ingest.schemas.models import FieldDefinition, RecordSchema


@dataclass(frozen=True)
class SchemaInfo:
    """Introspection view of a schema."""

    name: str
    description: str
    fields: list[FieldDefinition] = field(default_factory=list)
    required_fields: list[str] = field(default_factory=list)

    @property
    def field_names(self) -> list[str]:
        return [fd.name for fd in self.fields]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "fields": [fd.to_dict() for fd in self.fields],
            "required_fields": list(self.required_fields),
        }


class SchemaRegistry:
    """Immutable name → RecordSchema table."""

    def __init__(self, schemas: Iterable[RecordSchema]) -> None:
        table: dict[str, RecordSchema] = {}
        for schema in schemas:
            if schema.name in table:
                raise InvalidSchemaError(
                    f"Schema '{schema.name}' registered twice",
                    schema_name=schema.name,
                )
            table[schema.name] = schema
        self._schemas: Mapping[str, RecordSchema] = MappingProxyType(table)

    def get_schema(self, name: str) -> RecordSchema:
        """Return the schema registered under `name` or raise SchemaNotFoundError."""
        schema = self._schemas.get(name)
        if schema is None:
            raise SchemaNotFoundError(
                f"Unknown schema type: {name}",
                schema_name=name,
                details={"available": self.list_schemas()},
            )
        return schema

    def get_schema_info(self, name: str) -> SchemaInfo:
        schema = self.get_schema(name)
        return SchemaInfo(
            name=schema.name,
            description=schema.description or f"Schema for {schema.name}",
            fields=list(schema.fields),
            required_fields=schema.required_fields,
        )

    def list_schemas(self) -> list[str]:
        return list(self._schemas)

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)


# Process-wide registry
registry = SchemaRegistry(ALL_SCHEMAS)


def get_schema(name: str) -> RecordSchema:
    return registry.get_schema(name)


def get_schema_info(name: str) -> SchemaInfo:
    return registry.get_schema_info(name)
