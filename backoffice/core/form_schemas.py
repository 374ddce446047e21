"""Form Schemas — the validation catalogue for every admin and account form.

Invariants:
    - Field names match ORM attribute names, so validated data maps 1:1 onto models
    - *_UPDATE schemas are derived from *_CREATE via Schema.for_update
    - Messages are user-facing and field-addressable
"""

from backoffice.core.domain_types import (
    ResourceKind,
    MAX_SEARCH_LENGTH,
    MIN_LATITUDE, MAX_LATITUDE, MIN_LONGITUDE, MAX_LONGITUDE,
    PARK_NAME_MAX, PARK_STATE_MIN, PARK_STATE_MAX, PARK_DESCRIPTION_MAX, PARK_AREA_MAX,
    AIRPORT_NAME_MAX, AIRPORT_PLACE_MAX, AIRPORT_TIMEZONE_MAX,
    MIN_ELEVATION, MAX_ELEVATION, IATA_CODE_LENGTH, ICAO_CODE_LENGTH,
)
from backoffice.core.validation import (
    FieldRule, Schema,
    as_code, as_date, as_float, as_int,
    at_most, exact_length, fields_match, length, not_in_future, pattern,
    positive, value_range,
)


RESOURCE_ID = FieldRule(
    "id", required=True, required_message="Invalid record ID",
    coerce=as_int, invalid_message="Invalid record ID",
    checks=(positive(message="Invalid record ID"),),
)

LIST_QUERY = Schema("list_query", (
    FieldRule(
        "search",
        checks=(length(max_len=MAX_SEARCH_LENGTH,
                       message=f"Search query must be less than {MAX_SEARCH_LENGTH} characters"),),
    ),
))


def _latitude(required: bool = False) -> FieldRule:
    message = "Latitude must be between -90 and 90 degrees"
    return FieldRule(
        "latitude", required=required, required_message="Latitude is required",
        coerce=as_float, invalid_message="Invalid latitude format",
        checks=(value_range(MIN_LATITUDE, MAX_LATITUDE, message=message),),
    )


def _longitude(required: bool = False) -> FieldRule:
    message = "Longitude must be between -180 and 180 degrees"
    return FieldRule(
        "longitude", required=required, required_message="Longitude is required",
        coerce=as_float, invalid_message="Invalid longitude format",
        checks=(value_range(MIN_LONGITUDE, MAX_LONGITUDE, message=message),),
    )


# ─── Parks ───────────────────────────────────────────────────────

PARK_CREATE = Schema("park", (
    FieldRule(
        "name", required=True, required_message="Park name is required",
        checks=(length(1, PARK_NAME_MAX, message="Park name must be less than 100 characters"),),
    ),
    FieldRule(
        "state", required=True, required_message="State is required",
        checks=(
            length(PARK_STATE_MIN, PARK_STATE_MAX,
                   message="State must be between 2 and 50 characters"),
        ),
    ),
    FieldRule(
        "description",
        checks=(length(max_len=PARK_DESCRIPTION_MAX,
                       message="Description must be less than 2000 characters"),),
    ),
    _latitude(),
    _longitude(),
    FieldRule(
        "established_date", coerce=as_date, invalid_message="Invalid date format",
        checks=(not_in_future(message="Established date cannot be in the future"),),
    ),
    FieldRule(
        "area", coerce=as_float, invalid_message="Invalid area format",
        checks=(
            positive(message="Area must be a positive number"),
            at_most(PARK_AREA_MAX, message="Area seems unreasonably large"),
        ),
    ),
))

PARK_UPDATE = PARK_CREATE.for_update(RESOURCE_ID)


# ─── Airports ────────────────────────────────────────────────────

AIRPORT_CREATE = Schema("airport", (
    FieldRule(
        "iata_code", required=True, required_message="IATA code is required",
        coerce=as_code,
        checks=(
            exact_length(IATA_CODE_LENGTH, message="IATA code must be exactly 3 characters"),
            pattern(r"[A-Z]{3}", message="IATA code must be 3 letters"),
        ),
    ),
    FieldRule(
        "icao_code", coerce=as_code,
        checks=(
            exact_length(ICAO_CODE_LENGTH, message="ICAO code must be exactly 4 characters"),
            pattern(r"[A-Z]{4}", message="ICAO code must be 4 letters"),
        ),
    ),
    FieldRule(
        "name", required=True, required_message="Airport name is required",
        checks=(length(1, AIRPORT_NAME_MAX,
                       message="Airport name must be less than 200 characters"),),
    ),
    FieldRule(
        "city", required=True, required_message="City is required",
        checks=(length(1, AIRPORT_PLACE_MAX, message="City must be less than 100 characters"),),
    ),
    FieldRule(
        "state",
        checks=(length(max_len=AIRPORT_PLACE_MAX,
                       message="State must be less than 100 characters"),),
    ),
    FieldRule(
        "country", required=True, required_message="Country is required",
        checks=(length(1, AIRPORT_PLACE_MAX,
                       message="Country must be less than 100 characters"),),
    ),
    _latitude(required=True),
    _longitude(required=True),
    FieldRule(
        "elevation", coerce=as_int, invalid_message="Elevation must be a whole number",
        checks=(
            value_range(MIN_ELEVATION, MAX_ELEVATION,
                        message="Elevation must be between -1500 and 30000 feet"),
        ),
    ),
    FieldRule(
        "timezone",
        checks=(
            length(max_len=AIRPORT_TIMEZONE_MAX,
                   message="Timezone must be less than 50 characters"),
            pattern(r"[A-Za-z_/]+", message="Invalid timezone format"),
        ),
    ),
))

AIRPORT_UPDATE = AIRPORT_CREATE.for_update(RESOURCE_ID)


# ─── Accounts (validated here, stored by the identity provider) ──

REGISTRATION = Schema(
    "registration",
    (
        FieldRule(
            "name", required=True, required_message="Name must be between 2 and 50 characters",
            checks=(length(2, 50, message="Name must be between 2 and 50 characters"),),
        ),
        FieldRule(
            "email", required=True, required_message="Please enter a valid email address",
            checks=(pattern(r"[^\s@]+@[^\s@]+\.[^\s@]+",
                            message="Please enter a valid email address"),),
        ),
        FieldRule(
            "password", required=True,
            required_message="Password must be at least 8 characters with letters and numbers",
            coerce=str,
            checks=(
                length(min_len=8,
                       message="Password must be at least 8 characters with letters and numbers"),
                pattern(r"(?=.*[A-Za-z])(?=.*\d).*",
                        message="Password must be at least 8 characters with letters and numbers"),
            ),
        ),
        FieldRule(
            "confirm_password", required=True,
            required_message="Please confirm your password", coerce=str,
        ),
    ),
    cross_field_rules=(
        fields_match("password", "confirm_password", message="Passwords do not match"),
    ),
)

LOGIN = Schema("login", (
    REGISTRATION.fields[1],
    FieldRule("password", required=True, required_message="Password is required", coerce=str),
))


SCHEMAS_BY_KIND: dict[ResourceKind, tuple[Schema, Schema]] = {
    ResourceKind.PARK: (PARK_CREATE, PARK_UPDATE),
    ResourceKind.AIRPORT: (AIRPORT_CREATE, AIRPORT_UPDATE),
}
