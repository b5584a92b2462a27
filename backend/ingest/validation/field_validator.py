"""
Field coercion and validation against a record schema.

Every schema field is visited in declaration order.  A field either
coerces to its declared type or produces exactly one FieldViolation;
nothing is dropped silently.

Coercion is locale-free: numbers use "." as the decimal separator and
dates are ISO-8601 or one of a few day-first date-only layouts.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from ingest.core.constants import FieldType, ViolationReason
from ingest.schemas.models import FieldDefinition, RecordSchema

# Date-only layouts tried after ISO-8601, in order
DATE_FORMATS: tuple[str, ...] = (
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
)

# Largest decimal exponent accepted for numeric text (float range)
MAX_DECIMAL_EXPONENT = 308

TRUE_TOKENS = frozenset({"true", "1"})
FALSE_TOKENS = frozenset({"false", "0"})


@dataclass(frozen=True)
class FieldViolation:
    """A single field-level validation failure."""

    field: str
    reason: ViolationReason
    detail: str | None = None

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


@dataclass
class ValidationOutcome:
    """Coerced record plus everything that went wrong on the way."""

    record: dict[str, Any] = field(default_factory=dict)
    violations: list[FieldViolation] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def errors(self) -> list[str]:
        return [str(v) for v in self.violations]


class CoercionError(ValueError):
    """Raised by a coercer; carries the violation reason."""

    def __init__(self, reason: ViolationReason, detail: str) -> None:
        self.reason = reason
        super().__init__(detail)


def validate(loose: dict[str, Any], schema: RecordSchema) -> ValidationOutcome:
    """Coerce `loose` field-by-field against `schema`."""
    outcome = ValidationOutcome()

    for key in loose:
        if schema.get_field(key) is None:
            outcome.warnings.append(f"{key}: unknown field ignored")

    for fd in schema.fields:
        raw = loose.get(fd.name)

        if _is_absent(raw):
            if fd.required:
                outcome.violations.append(
                    FieldViolation(fd.name, ViolationReason.MISSING, "required field absent")
                )
            elif isinstance(raw, str):
                outcome.warnings.append(f"{fd.name}: empty value omitted")
            continue

        try:
            outcome.record[fd.name] = coerce_value(fd, raw)
        except CoercionError as exc:
            outcome.violations.append(FieldViolation(fd.name, exc.reason, str(exc)))

    return outcome


def coerce_value(fd: FieldDefinition, value: Any) -> Any:
    """Convert one present value to the field's declared type."""
    coercer = _COERCERS[fd.type]
    return coercer(fd, value)


# ─── Per-type coercers ──────────────────────────────

def _coerce_string(fd: FieldDefinition, value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    raise CoercionError(ViolationReason.WRONG_TYPE, f"expected text, got {type(value).__name__}")


def _coerce_number(fd: FieldDefinition, value: Any) -> int | float:
    if isinstance(value, bool):
        raise CoercionError(ViolationReason.WRONG_TYPE, "boolean is not a number")

    if isinstance(value, int):
        number: int | float = value
    elif isinstance(value, float):
        number = value
    elif isinstance(value, str):
        number = _parse_decimal(value.strip())
    else:
        raise CoercionError(ViolationReason.WRONG_TYPE, f"expected number, got {type(value).__name__}")

    if isinstance(number, float) and not math.isfinite(number):
        raise CoercionError(ViolationReason.WRONG_TYPE, "number is not finite")

    if fd.minimum is not None and number < fd.minimum:
        raise CoercionError(ViolationReason.OUT_OF_RANGE, f"{number} < {fd.minimum}")
    if fd.maximum is not None and number > fd.maximum:
        raise CoercionError(ViolationReason.OUT_OF_RANGE, f"{number} > {fd.maximum}")

    return number


def _parse_decimal(text: str) -> int | float:
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        raise CoercionError(ViolationReason.WRONG_TYPE, f"'{text}' is not a number") from None

    if not parsed.is_finite():
        raise CoercionError(ViolationReason.WRONG_TYPE, f"'{text}' is not finite")
    # Bounded before int() so a short exponent cannot expand into a huge integer
    if parsed.adjusted() > MAX_DECIMAL_EXPONENT:
        raise CoercionError(ViolationReason.WRONG_TYPE, f"'{text}' is too large")
    if parsed == parsed.to_integral_value():
        return int(parsed)
    return float(parsed)


def _coerce_boolean(fd: FieldDefinition, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        token = value.strip().lower()
        if token in TRUE_TOKENS:
            return True
        if token in FALSE_TOKENS:
            return False
    raise CoercionError(ViolationReason.WRONG_TYPE, f"'{value}' is not a boolean")


def _coerce_date(fd: FieldDefinition, value: Any) -> date | datetime:
    # datetime is a subclass of date; both pass through untouched
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise CoercionError(ViolationReason.UNPARSABLE, f"cannot read a date from {type(value).__name__}")

    parsed = parse_date(value.strip())
    if parsed is None:
        raise CoercionError(ViolationReason.UNPARSABLE, f"'{value}' is not a recognised date")
    return parsed


def parse_date(text: str) -> date | datetime | None:
    """ISO-8601 first, then the date-only layouts.  None when nothing fits."""
    if not text:
        return None

    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        if len(iso) == 10:
            return date.fromisoformat(iso)
        return datetime.fromisoformat(iso)
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _coerce_enum(fd: FieldDefinition, value: Any) -> str:
    if not isinstance(value, str):
        raise CoercionError(ViolationReason.OUT_OF_RANGE, f"{value!r} is not one of {list(fd.allowed)}")
    token = value.strip()
    if token not in fd.allowed:
        raise CoercionError(ViolationReason.OUT_OF_RANGE, f"'{token}' is not one of {list(fd.allowed)}")
    return token


def _coerce_string_array(fd: FieldDefinition, value: Any) -> list[str]:
    if isinstance(value, str):
        items: list[Any] = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        raise CoercionError(ViolationReason.WRONG_TYPE, f"expected a list, got {type(value).__name__}")

    result: list[str] = []
    for item in items:
        if isinstance(item, (dict, list, tuple)):
            raise CoercionError(ViolationReason.WRONG_TYPE, "list items must be scalars")
        if item is None:
            continue
        text = _coerce_string(fd, item)
        if text:
            result.append(text)
    return result


_COERCERS: dict[FieldType, Callable[[FieldDefinition, Any], Any]] = {
    FieldType.STRING: _coerce_string,
    FieldType.NUMBER: _coerce_number,
    FieldType.BOOLEAN: _coerce_boolean,
    FieldType.DATE: _coerce_date,
    FieldType.ENUM: _coerce_enum,
    FieldType.STRING_ARRAY: _coerce_string_array,
}


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
