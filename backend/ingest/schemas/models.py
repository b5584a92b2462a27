"""
Schema building blocks — FieldDefinition and RecordSchema.

Schemas are immutable and validated on construction, so a broken
definition fails at import time rather than mid-parse.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ingest.core.constants import FieldType
from ingest.pipeline.errors import InvalidSchemaError


@dataclass(frozen=True)
class FieldDefinition:
    """
    A single declared field of a record schema.

    Args:
        name: Field key, matched case-sensitively against input keys.
        type: Declared FieldType the value is coerced to.
        optional: Optional fields may be absent without a violation.
        allowed: Permitted values for ENUM fields.
        minimum: Inclusive lower bound for NUMBER fields.
        maximum: Inclusive upper bound for NUMBER fields.
        description: Human-readable label.
    """

    name: str
    type: FieldType
    optional: bool = False
    allowed: tuple[str, ...] = ()
    minimum: float | None = None
    maximum: float | None = None
    description: str = ""

    @property
    def required(self) -> bool:
        return not self.optional

    def to_dict(self) -> dict[str, Any]:
        """Serialise for schema introspection."""
        data: dict[str, Any] = {
            "name": self.name,
            "type": str(self.type),
            "optional": self.optional,
            "description": self.description,
        }
        if self.allowed:
            data["allowed"] = list(self.allowed)
        if self.minimum is not None:
            data["minimum"] = self.minimum
        if self.maximum is not None:
            data["maximum"] = self.maximum
        return data


@dataclass(frozen=True)
class RecordSchema:
    """Named, ordered collection of field definitions."""

    name: str
    fields: tuple[FieldDefinition, ...]
    description: str = ""
    _by_name: dict[str, FieldDefinition] = field(
        init=False, repr=False, compare=False, default_factory=dict,
    )

    def __post_init__(self) -> None:
        if not self.fields:
            raise InvalidSchemaError(
                f"Schema '{self.name}' has no fields", schema_name=self.name,
            )

        by_name: dict[str, FieldDefinition] = {}
        for fd in self.fields:
            if fd.name in by_name:
                raise InvalidSchemaError(
                    f"Schema '{self.name}' declares field '{fd.name}' twice",
                    schema_name=self.name,
                )
            _check_field(self.name, fd)
            by_name[fd.name] = fd

        # Frozen dataclass: populate the lookup cache in place
        self._by_name.update(by_name)

    @property
    def field_names(self) -> list[str]:
        return [fd.name for fd in self.fields]

    @property
    def required_fields(self) -> list[str]:
        return [fd.name for fd in self.fields if fd.required]

    def get_field(self, name: str) -> FieldDefinition | None:
        return self._by_name.get(name)

    def __len__(self) -> int:
        return len(self.fields)


def _check_field(schema_name: str, fd: FieldDefinition) -> None:
    """Enforce per-field invariants."""
    if not fd.name:
        raise InvalidSchemaError(
            f"Schema '{schema_name}' has a field without a name",
            schema_name=schema_name,
        )
    if fd.type == FieldType.ENUM and not fd.allowed:
        raise InvalidSchemaError(
            f"Enum field '{fd.name}' declares no allowed values",
            schema_name=schema_name,
        )
    if fd.type != FieldType.ENUM and fd.allowed:
        raise InvalidSchemaError(
            f"Field '{fd.name}' is not an enum but declares allowed values",
            schema_name=schema_name,
        )
    has_bounds = fd.minimum is not None or fd.maximum is not None
    if has_bounds and fd.type != FieldType.NUMBER:
        raise InvalidSchemaError(
            f"Field '{fd.name}' declares bounds but is not a number",
            schema_name=schema_name,
        )
    if fd.minimum is not None and fd.maximum is not None and fd.minimum > fd.maximum:
        raise InvalidSchemaError(
            f"Field '{fd.name}' has minimum greater than maximum",
            schema_name=schema_name,
        )


# ─── Terse constructors used by the schema definitions ──────

def string(name: str, *, optional: bool = False, description: str = "") -> FieldDefinition:
    return FieldDefinition(name, FieldType.STRING, optional=optional, description=description)


def number(
    name: str,
    *,
    optional: bool = False,
    minimum: float | None = None,
    maximum: float | None = None,
    description: str = "",
) -> FieldDefinition:
    return FieldDefinition(
        name, FieldType.NUMBER, optional=optional,
        minimum=minimum, maximum=maximum, description=description,
    )


def boolean(name: str, *, optional: bool = False, description: str = "") -> FieldDefinition:
    return FieldDefinition(name, FieldType.BOOLEAN, optional=optional, description=description)


def date(name: str, *, optional: bool = False, description: str = "") -> FieldDefinition:
    return FieldDefinition(name, FieldType.DATE, optional=optional, description=description)


def enum(
    name: str,
    allowed: tuple[str, ...],
    *,
    optional: bool = False,
    description: str = "",
) -> FieldDefinition:
    return FieldDefinition(
        name, FieldType.ENUM, optional=optional, allowed=allowed, description=description,
    )


def string_array(name: str, *, optional: bool = False, description: str = "") -> FieldDefinition:
    return FieldDefinition(name, FieldType.STRING_ARRAY, optional=optional, description=description)
