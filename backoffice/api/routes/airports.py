"""Airports Routes — admin CRUD for airports plus lookup by IATA code."""

from fastapi import Depends

from backoffice.api.deps import get_airports_admin, get_identity
from backoffice.api.routes.resource_router import build_resource_router
from backoffice.core.authorization import Identity
from backoffice.schemas.resource import AirportResponse
from backoffice.services.resource_admin import AirportAdmin

router = build_resource_router(
    "/api/v1/admin/airports", "airports", get_airports_admin, AirportResponse,
)


@router.get("/iata/{iata_code}", response_model=AirportResponse)
async def get_airport_by_iata_code(
    iata_code: str,
    identity: Identity | None = Depends(get_identity),
    admin: AirportAdmin = Depends(get_airports_admin),
):
    """Case-insensitive lookup: /iata/lax finds LAX."""
    return AirportResponse.model_validate(
        await admin.get_by_iata_code(identity, iata_code),
    )
