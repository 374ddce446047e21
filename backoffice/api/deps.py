"""API Dependencies — identity extraction and per-request ResourceAdmin wiring.

Invariants:
    - Identity comes only from the trusted header set by the upstream identity
      provider; a missing or blank header means "unauthenticated" (None)
    - The header value is passed through untouched (no trimming or lowercasing)
    - The AuthorizationGate is read from app.state; it is built once at startup
    - No dependency here validates request input, so the gate inside
      ResourceAdmin is the first decision made on every request
"""

from typing import Mapping

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.config import get_settings
from backoffice.core.authorization import AuthorizationGate, Identity
from backoffice.core.form_schemas import SCHEMAS_BY_KIND
from backoffice.core.domain_types import ResourceKind
from backoffice.infrastructure.database import get_db
from backoffice.services.airports_repository import AirportsRepository
from backoffice.services.parks_repository import ParksRepository
from backoffice.services.resource_admin import AirportAdmin, ResourceAdmin


def identity_from_headers(headers: Mapping[str, str]) -> Identity | None:
    """Caller identity asserted by the upstream identity provider, if any."""
    email = headers.get(get_settings().identity_header)
    if email is None or not email.strip():
        return None
    return Identity(email=email)


def get_identity(request: Request) -> Identity | None:
    return identity_from_headers(request.headers)


def get_authorization_gate(request: Request) -> AuthorizationGate:
    return request.app.state.authorization_gate


def get_parks_admin(
    gate: AuthorizationGate = Depends(get_authorization_gate),
    db: AsyncSession = Depends(get_db),
) -> ResourceAdmin:
    create_schema, update_schema = SCHEMAS_BY_KIND[ResourceKind.PARK]
    return ResourceAdmin(
        gate, ParksRepository(db), create_schema, update_schema,
        page_size=get_settings().page_size,
    )


def get_airports_admin(
    gate: AuthorizationGate = Depends(get_authorization_gate),
    db: AsyncSession = Depends(get_db),
) -> AirportAdmin:
    create_schema, update_schema = SCHEMAS_BY_KIND[ResourceKind.AIRPORT]
    return AirportAdmin(
        gate, AirportsRepository(db), create_schema, update_schema,
        page_size=get_settings().page_size,
    )


async def read_json_body(request: Request) -> object:
    """Parsed JSON body, or None when empty or malformed.

    Shape checks happen inside ResourceAdmin, after the gate.
    """
    body = await request.body()
    if not body:
        return None
    try:
        return await request.json()
    except ValueError:
        return None
