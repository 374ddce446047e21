"""Admin Dashboard — landing view with the caller and per-kind record counts."""

from fastapi import APIRouter, Depends

from backoffice.api.deps import get_airports_admin, get_identity, get_parks_admin
from backoffice.core.authorization import Identity
from backoffice.schemas.resource import DashboardResponse
from backoffice.services.resource_admin import AirportAdmin, ResourceAdmin

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get("", response_model=DashboardResponse)
async def dashboard(
    identity: Identity | None = Depends(get_identity),
    parks: ResourceAdmin = Depends(get_parks_admin),
    airports: AirportAdmin = Depends(get_airports_admin),
):
    counts = {
        parks.kind.plural: await parks.count(identity),
        airports.kind.plural: await airports.count(identity),
    }
    return DashboardResponse(email=identity.email, counts=counts)
