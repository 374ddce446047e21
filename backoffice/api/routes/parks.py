"""Parks Routes — admin CRUD for national parks under /api/v1/admin/parks."""

from backoffice.api.deps import get_parks_admin
from backoffice.api.routes.resource_router import build_resource_router
from backoffice.schemas.resource import ParkResponse

router = build_resource_router(
    "/api/v1/admin/parks", "parks", get_parks_admin, ParkResponse,
)
