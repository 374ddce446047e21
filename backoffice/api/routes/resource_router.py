"""Resource Router Factory — the five admin endpoints shared by every resource kind.

Invariants:
    - Handlers accept only untyped strings (query, path) and a raw body, so
      FastAPI never rejects a request before the gate has run
    - Every handler delegates to ResourceAdmin with the caller identity first
    - DELETE answers 204 with an empty body
"""

from typing import Callable

from fastapi import APIRouter, Depends, Query, Request, Response, status
from pydantic import BaseModel

from backoffice.api.deps import get_identity, read_json_body
from backoffice.core.authorization import Identity
from backoffice.schemas.resource import PagedResponse
from backoffice.services.resource_admin import ResourceAdmin


def build_resource_router(
    prefix: str,
    tag: str,
    get_admin: Callable[..., ResourceAdmin],
    response_model: type[BaseModel],
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])
    paged_model = PagedResponse[response_model]

    @router.get("", response_model=paged_model)
    async def list_resources(
        search: str | None = Query(None),
        page: str | None = Query(None),
        identity: Identity | None = Depends(get_identity),
        admin: ResourceAdmin = Depends(get_admin),
    ):
        """Paged list, optionally filtered by a case-insensitive search."""
        result = await admin.list_page(identity, search, page)
        return paged_model.from_page(
            result, response_model, search=(search or "").strip(),
        )

    @router.post(
        "", response_model=response_model, status_code=status.HTTP_201_CREATED,
    )
    async def create_resource(
        request: Request,
        identity: Identity | None = Depends(get_identity),
        admin: ResourceAdmin = Depends(get_admin),
    ):
        raw = await read_json_body(request)
        created = await admin.create(identity, raw)
        return response_model.model_validate(created)

    @router.get("/{resource_id}", response_model=response_model)
    async def get_resource(
        resource_id: str,
        identity: Identity | None = Depends(get_identity),
        admin: ResourceAdmin = Depends(get_admin),
    ):
        return response_model.model_validate(await admin.get(identity, resource_id))

    @router.patch("/{resource_id}", response_model=response_model)
    async def update_resource(
        resource_id: str,
        request: Request,
        identity: Identity | None = Depends(get_identity),
        admin: ResourceAdmin = Depends(get_admin),
    ):
        """Partial update: omitted or blank fields keep their stored value."""
        raw = await read_json_body(request)
        updated = await admin.update(identity, resource_id, raw)
        return response_model.model_validate(updated)

    @router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_resource(
        resource_id: str,
        identity: Identity | None = Depends(get_identity),
        admin: ResourceAdmin = Depends(get_admin),
    ):
        await admin.delete(identity, resource_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
