"""Schema Validator — tests for the generic field/cross-field rule engine.

Tests cover:
    - Presence, coercion, range and pattern steps in order
    - One error per field, every failing field reported
    - Absent optional fields (None / blank) omitted from data
    - Cross-field rules skipped when an involved field already failed
    - for_update derivation (id required, everything else optional)
    - Purity: raw input never mutated
    - Bools, lists and objects rejected; ASCII-only numeric coercion
"""

from datetime import date, timedelta

import pytest

from backoffice.core.errors import ValidationError
from backoffice.core.validation import (
    CheckStage, FieldRule, Schema,
    as_code, as_date, as_float, as_int,
    exact_length, fields_match, length, not_in_future, pattern, positive,
    require_valid, validate,
)


CODE = FieldRule(
    "code", required=True, required_message="Code is required", coerce=as_code,
    checks=(
        # declared pattern-first on purpose; length must still win
        pattern(r"[A-Z]{3}", message="Code must be letters"),
        exact_length(3, message="Code must be 3 characters"),
    ),
)
COUNT = FieldRule(
    "count", coerce=as_int, invalid_message="Count must be a whole number",
    checks=(positive(message="Count must be positive"),),
)
SCHEMA = Schema("sample", (
    FieldRule("title", required=True, required_message="Title is required",
              checks=(length(1, 10, message="Title too long"),)),
    CODE,
    COUNT,
))


# ─── Field steps ─────────────────────────────────────────────────

def test_valid_input_is_normalized():
    result = validate(SCHEMA, {"title": "  Hello ", "code": "abc", "count": "4"})
    assert result.is_valid
    assert result.data == {"title": "Hello", "code": "ABC", "count": 4}


def test_missing_required_field_reports_required_message():
    result = validate(SCHEMA, {"code": "ABC"})
    assert result.errors == {"title": "Title is required"}
    assert result.data == {}


def test_blank_required_field_counts_as_missing():
    result = validate(SCHEMA, {"title": "   ", "code": "ABC"})
    assert result.errors == {"title": "Title is required"}


def test_coercion_failure_uses_invalid_message():
    result = validate(SCHEMA, {"title": "x", "code": "ABC", "count": "four"})
    assert result.errors == {"count": "Count must be a whole number"}


def test_length_is_checked_before_pattern():
    result = validate(SCHEMA, {"title": "x", "code": "A1"})
    assert result.errors == {"code": "Code must be 3 characters"}


def test_pattern_checked_once_length_passes():
    result = validate(SCHEMA, {"title": "x", "code": "A1B"})
    assert result.errors == {"code": "Code must be letters"}


def test_every_failing_field_is_reported():
    result = validate(SCHEMA, {"code": "TOOLONG", "count": "-1"})
    assert set(result.errors) == {"title", "code", "count"}


def test_absent_optional_field_is_omitted():
    result = validate(SCHEMA, {"title": "x", "code": "ABC", "count": ""})
    assert result.is_valid
    assert "count" not in result.data


def test_non_string_input_is_stringified():
    result = validate(SCHEMA, {"title": "x", "code": "ABC", "count": 7})
    assert result.data["count"] == 7


def test_unknown_keys_are_ignored():
    result = validate(SCHEMA, {"title": "x", "code": "ABC", "id": 99, "extra": "y"})
    assert result.data == {"title": "x", "code": "ABC"}


def test_raw_input_is_not_mutated():
    raw = {"title": "  x  ", "code": "abc"}
    validate(SCHEMA, raw)
    assert raw == {"title": "  x  ", "code": "abc"}


def test_checks_sorted_by_stage():
    stages = sorted(c.stage for c in CODE.checks)
    assert stages == [CheckStage.RANGE, CheckStage.PATTERN]


# ─── Non-text input ─────────────────────────────────────────────

@pytest.mark.parametrize("raw", [{"evil": [1, 2]}, ["Wyoming"], True, False])
def test_structured_or_boolean_values_are_invalid(raw):
    result = validate(SCHEMA, {"title": raw, "code": "ABC"})
    assert result.errors == {"title": "Invalid format"}


def test_structured_values_rejected_on_optional_fields_too():
    result = validate(SCHEMA, {"title": "x", "code": "ABC", "count": [3]})
    assert result.errors == {"count": "Count must be a whole number"}


def test_plain_numbers_are_accepted_as_text():
    result = validate(SCHEMA, {"title": 12, "code": "ABC", "count": 3})
    assert result.data == {"title": "12", "code": "ABC", "count": 3}


# ─── Coercers ────────────────────────────────────────────────────

def test_as_float_rejects_non_finite():
    with pytest.raises(ValueError):
        as_float("nan")
    with pytest.raises(ValueError):
        as_float("inf")
    assert as_float(" 1.5 ") == 1.5


@pytest.mark.parametrize("raw", ["1_000", "\u0661\u0662", "12.0", "0x1f", ""])
def test_as_int_accepts_ascii_digits_only(raw):
    with pytest.raises(ValueError):
        as_int(raw)


def test_as_int_accepts_signed_integers():
    assert as_int(" -15 ") == -15
    assert as_int("+7") == 7


@pytest.mark.parametrize("raw", ["1_000.5", "\u0661.5", "1e", "."])
def test_as_float_accepts_ascii_decimals_only(raw):
    with pytest.raises(ValueError):
        as_float(raw)


def test_as_float_accepts_exponents():
    assert as_float("1e-05") == 1e-05
    assert as_float("-.5") == -0.5


def test_as_date_parses_iso_dates():
    assert as_date("1872-03-01") == date(1872, 3, 1)
    with pytest.raises(ValueError):
        as_date("03/01/1872")


def test_not_in_future_allows_today():
    rule = FieldRule("d", coerce=as_date,
                     checks=(not_in_future(message="future"),))
    today = date.today()
    assert rule.apply(today.isoformat()) == (today, None)
    assert rule.apply((today + timedelta(days=1)).isoformat()) == (None, "future")


# ─── Cross-field rules ──────────────────────────────────────────

PASSWORDS = Schema(
    "passwords",
    (
        FieldRule("password", required=True, coerce=str,
                  checks=(length(min_len=3, message="Too short"),)),
        FieldRule("confirm", required=True, coerce=str),
    ),
    cross_field_rules=(fields_match("password", "confirm", message="Mismatch"),),
)


def test_cross_field_mismatch_reported_on_target():
    result = validate(PASSWORDS, {"password": "secret", "confirm": "secreT"})
    assert result.errors == {"confirm": "Mismatch"}


def test_cross_field_skipped_when_involved_field_failed():
    result = validate(PASSWORDS, {"password": "ab", "confirm": "xyz"})
    assert result.errors == {"password": "Too short"}


def test_cross_field_passes_when_equal():
    assert validate(PASSWORDS, {"password": "secret", "confirm": "secret"}).is_valid


# ─── Update variant ─────────────────────────────────────────────

ID_RULE = FieldRule("id", required=True, required_message="Invalid record ID",
                    coerce=as_int, invalid_message="Invalid record ID")


def test_for_update_requires_id_and_relaxes_other_fields():
    update = SCHEMA.for_update(ID_RULE)
    assert update.field_names[0] == "id"
    assert validate(update, {"id": "3"}).data == {"id": 3}
    assert validate(update, {}).errors == {"id": "Invalid record ID"}


def test_for_update_keeps_value_checks():
    update = SCHEMA.for_update(ID_RULE)
    result = validate(update, {"id": "3", "code": "ab"})
    assert result.errors == {"code": "Code must be 3 characters"}


def test_for_update_does_not_change_create_schema():
    SCHEMA.for_update(ID_RULE)
    assert validate(SCHEMA, {}).errors["title"] == "Title is required"


# ─── require_valid ──────────────────────────────────────────────

def test_require_valid_returns_data():
    assert require_valid(SCHEMA, {"title": "x", "code": "abc"}) == {
        "title": "x", "code": "ABC",
    }


def test_require_valid_raises_with_all_field_errors():
    with pytest.raises(ValidationError) as exc_info:
        require_valid(SCHEMA, {"count": "0"})
    assert exc_info.value.field_errors == {
        "title": "Title is required",
        "code": "Code is required",
        "count": "Count must be positive",
    }
    assert exc_info.value.http_status == 400
