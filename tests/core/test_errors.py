"""Error Hierarchy — tests for status codes, categories and response envelopes.

Tests cover:
    - HTTP status per error type
    - Field-addressable errors expose "fields"
    - StoreError never leaks internal detail in its response
    - AuthorizationError carries nothing about the protected resource
"""

from backoffice.core.errors import (
    AuthorizationError, BackofficeError, ConflictError, ErrorCategory, ErrorContext,
    ErrorSeverity, NotFoundError, ReferentialIntegrityError, StoreError, ValidationError,
)


def test_every_error_is_a_backoffice_error():
    errors = [
        AuthorizationError(),
        ValidationError({"name": "Park name is required"}),
        NotFoundError("park", 4),
        ConflictError("name", "A park with this name already exists in this state"),
        ReferentialIntegrityError("park", 4, {"trip_stops.park_id": 2}),
        StoreError("connection refused", "execute"),
    ]
    assert all(isinstance(e, BackofficeError) for e in errors)
    assert [e.http_status for e in errors] == [404, 400, 404, 409, 409, 503]


def test_validation_error_response_lists_fields():
    err = ValidationError({"name": "Park name is required", "state": "State is required"})
    body = err.to_response()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    assert body["category"] == "validation"
    assert body["fields"] == {
        "name": "Park name is required", "state": "State is required",
    }


def test_conflict_error_is_addressed_to_field():
    err = ConflictError("iata_code", "An airport with this IATA code already exists")
    assert err.field == "iata_code"
    assert err.to_response()["error"]["fields"] == {
        "iata_code": "An airport with this IATA code already exists",
    }
    assert err.category == ErrorCategory.CONFLICT


def test_not_found_error_names_kind_and_id():
    err = NotFoundError("airport", 12)
    assert err.message == "Airport '12' not found"
    assert err.resource_kind == "airport"
    assert err.resource_id == 12


def test_referential_integrity_error_keeps_references():
    err = ReferentialIntegrityError("park", 4, {"trip_stops.park_id": 2})
    assert err.references == {"trip_stops.park_id": 2}
    assert err.code == "REFERENTIAL_INTEGRITY"


def test_store_error_hides_internal_detail():
    err = StoreError("password authentication failed for user admin", "execute")
    body = err.to_response()["error"]
    assert "password" not in body["message"]
    assert body["message"] == "The data store is temporarily unavailable"
    assert err.severity == ErrorSeverity.CRITICAL
    assert err.operation == "execute"


def test_authorization_error_response_has_no_resource_detail():
    body = AuthorizationError().to_response()["error"]
    assert body["message"] == "Not Found"
    assert "fields" not in body


def test_context_defaults_to_timestamp_only():
    err = NotFoundError("park", 1)
    assert err.context.timestamp is not None
    assert err.context.resource_kind is None


def test_explicit_context_is_kept():
    ctx = ErrorContext(resource_kind="park", resource_id=9, operation="delete")
    err = ReferentialIntegrityError("park", 9, context=ctx)
    assert err.context is ctx
    assert err.to_response()["error"]["timestamp"] == ctx.timestamp.isoformat()
