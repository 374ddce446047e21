"""Schema Validator — declarative field rules turning untyped input into normalized records.

Invariants:
    - validate() is PURE: no IO, no exceptions for bad input, no mutation of raw
    - Per field, in order: presence -> coercion -> range/length -> pattern;
      the first failing step yields that field's single error message
    - Every failing field is reported (never just the first field)
    - Optional fields with None/blank input are absent: omitted from data, never errors
    - Cross-field rules run only when every involved field passed its own rules
    - Unknown input keys are ignored
    - Only text and plain numbers are field values; anything else (bool,
      list, object) fails with the field's invalid message

Design Decisions:
    - Checks carry a stage so range/length always precede pattern even if a
      schema declares them in another order
    - Schema.for_update derives the partial variant instead of a second
      hand-written schema, so create/update rules cannot drift apart
"""

import math
import re
from dataclasses import dataclass, field, replace
from datetime import date
from enum import IntEnum
from typing import Any, Callable, Mapping

from backoffice.core.errors import ValidationError


# ─── Coercers (str -> typed value, raise ValueError on bad format) ──

# ASCII digits only; no digit-group underscores
_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def as_text(raw: str) -> str:
    return raw.strip()


def as_code(raw: str) -> str:
    """Identifier codes are stored upper-case (IATA/ICAO)."""
    return raw.strip().upper()


def as_float(raw: str) -> float:
    text = raw.strip()
    if not _DECIMAL.fullmatch(text):
        raise ValueError(f"not a decimal number: {raw!r}")
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"non-finite number: {raw!r}")
    return value


def as_int(raw: str) -> int:
    text = raw.strip()
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"not a whole number: {raw!r}")
    return int(text)


def as_date(raw: str) -> date:
    return date.fromisoformat(raw.strip())


# ─── Checks ─────────────────────────────────────────────────────

class CheckStage(IntEnum):
    RANGE = 1      # length and numeric/date bounds
    PATTERN = 2


@dataclass(frozen=True)
class Check:
    """A single constraint on an already-coerced value."""
    stage: CheckStage
    test: Callable[[Any], bool]
    message: str


def length(min_len: int | None = None, max_len: int | None = None, *, message: str) -> Check:
    def test(value: str) -> bool:
        if min_len is not None and len(value) < min_len:
            return False
        return max_len is None or len(value) <= max_len
    return Check(CheckStage.RANGE, test, message)


def exact_length(size: int, *, message: str) -> Check:
    return Check(CheckStage.RANGE, lambda v: len(v) == size, message)


def value_range(low: float, high: float, *, message: str) -> Check:
    return Check(CheckStage.RANGE, lambda v: low <= v <= high, message)


def positive(*, message: str) -> Check:
    return Check(CheckStage.RANGE, lambda v: v > 0, message)


def at_most(high: float, *, message: str) -> Check:
    return Check(CheckStage.RANGE, lambda v: v <= high, message)


def not_in_future(*, message: str) -> Check:
    return Check(CheckStage.RANGE, lambda v: v <= date.today(), message)


def pattern(regex: str, *, message: str) -> Check:
    compiled = re.compile(regex)
    return Check(CheckStage.PATTERN, lambda v: compiled.fullmatch(v) is not None, message)


# ─── Rules ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class FieldRule:
    """Declarative rule set for one input field."""
    name: str
    required: bool = False
    required_message: str = "This field is required"
    coerce: Callable[[str], Any] = as_text
    invalid_message: str = "Invalid format"
    checks: tuple[Check, ...] = ()

    def optional(self) -> "FieldRule":
        return replace(self, required=False)

    def apply(self, raw: object) -> tuple[Any, str | None]:
        """Return (value, None) on success, (None, message) on failure.

        An absent optional field returns (None, None).
        """
        if not _is_scalar(raw):
            return None, self.invalid_message
        text = _as_raw_text(raw)
        if text is None:
            return None, (self.required_message if self.required else None)
        try:
            value = self.coerce(text)
        except (TypeError, ValueError):
            return None, self.invalid_message
        for check in sorted(self.checks, key=lambda c: c.stage):
            if not check.test(value):
                return None, check.message
        return value, None


@dataclass(frozen=True)
class CrossFieldRule:
    """Constraint across several fields; error is reported on target."""
    fields: tuple[str, ...]
    target: str
    test: Callable[[dict[str, Any]], bool]
    message: str


def fields_match(first: str, second: str, *, message: str) -> CrossFieldRule:
    """Both values, when present, must be equal (e.g. password confirmation)."""
    def test(data: dict[str, Any]) -> bool:
        if first not in data or second not in data:
            return True
        return data[first] == data[second]
    return CrossFieldRule((first, second), second, test, message)


@dataclass(frozen=True)
class Schema:
    """Named collection of field rules plus cross-field rules."""
    name: str
    fields: tuple[FieldRule, ...]
    cross_field_rules: tuple[CrossFieldRule, ...] = ()

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(rule.name for rule in self.fields)

    def for_update(self, id_rule: FieldRule) -> "Schema":
        """Partial-update variant: all fields optional, identifying id required."""
        return Schema(
            name=f"{self.name}_update",
            fields=(replace(id_rule, required=True),)
            + tuple(rule.optional() for rule in self.fields if rule.name != id_rule.name),
            cross_field_rules=self.cross_field_rules,
        )


@dataclass(frozen=True)
class ValidationResult:
    """Either normalized data (errors empty) or the complete field error map."""
    data: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate(schema: Schema, raw: Mapping[str, object]) -> ValidationResult:
    """Apply every rule of schema to raw input. Never raises for bad input."""
    data: dict[str, Any] = {}
    errors: dict[str, str] = {}

    for rule in schema.fields:
        value, error = rule.apply(raw.get(rule.name))
        if error is not None:
            errors[rule.name] = error
        elif value is not None:
            data[rule.name] = value

    for cross in schema.cross_field_rules:
        if any(name in errors for name in cross.fields):
            continue
        if cross.target not in errors and not cross.test(data):
            errors[cross.target] = cross.message

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(data=data)


def require_valid(schema: Schema, raw: Mapping[str, object]) -> dict[str, Any]:
    """Validate and return normalized data, or raise ValidationError with all field errors."""
    result = validate(schema, raw)
    if not result.is_valid:
        raise ValidationError(result.errors)
    return result.data


def _is_scalar(raw: object) -> bool:
    """Text and plain numbers only; bools, lists and objects are not field values."""
    if raw is None or isinstance(raw, str):
        return True
    return isinstance(raw, (int, float)) and not isinstance(raw, bool)


def _as_raw_text(raw: object) -> str | None:
    """Normalize an untyped input value to text; None for absent/blank."""
    if raw is None:
        return None
    text = raw if isinstance(raw, str) else str(raw)
    if not text.strip():
        return None
    return text
