"""Resource Admin — the gate -> validate -> store pipeline for one resource kind.

Invariants:
    - Every public method calls AuthorizationGate.require_authorized FIRST,
      before parsing ids, validating input, or touching the store
    - Mutations only reach the repository with schema-validated data
    - A raw id that is not a positive integer cannot identify a record -> NotFoundError
    - Raw page numbers that are not integers fall back to page 1

Design Decisions:
    - Transport-agnostic: takes an optional Identity and raw mappings, so the
      HTTP layer and tests drive exactly the same code path
"""

from typing import Any, Mapping

from backoffice.core.authorization import AuthorizationGate, Identity
from backoffice.core.domain_types import DEFAULT_PAGE_SIZE, ResourceId, ResourceKind
from backoffice.core.errors import ErrorContext, NotFoundError, ValidationError
from backoffice.core.form_schemas import LIST_QUERY, RESOURCE_ID
from backoffice.core.pagination import PagedResult, parse_page_number
from backoffice.core.repository_protocols import ResourceRepository
from backoffice.core.validation import Schema, require_valid
from backoffice.services.query_orchestrator import fetch_page


class ResourceAdmin:
    """Gated administrative operations over one repository."""

    def __init__(
        self,
        gate: AuthorizationGate,
        repository: ResourceRepository,
        create_schema: Schema,
        update_schema: Schema,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self._gate = gate
        self._repository = repository
        self._create_schema = create_schema
        self._update_schema = update_schema
        self._page_size = page_size

    @property
    def kind(self) -> ResourceKind:
        return self._repository.kind

    async def list_page(
        self, identity: Identity | None, search: str | None = None, page: object = None,
    ) -> PagedResult:
        self._gate.require_authorized(identity)
        query = require_valid(LIST_QUERY, {"search": search}).get("search", "")
        return await fetch_page(
            self._repository, query, parse_page_number(page), self._page_size,
        )

    async def count(self, identity: Identity | None) -> int:
        self._gate.require_authorized(identity)
        return await self._repository.count()

    async def get(self, identity: Identity | None, raw_id: object):
        self._gate.require_authorized(identity)
        return await self._repository.get_by_id(self._parse_id(raw_id))

    async def create(self, identity: Identity | None, raw: object):
        self._gate.require_authorized(identity)
        record = require_valid(self._create_schema, _require_mapping(raw))
        return await self._repository.create(record)

    async def update(
        self, identity: Identity | None, raw_id: object, raw: object,
    ):
        self._gate.require_authorized(identity)
        resource_id = self._parse_id(raw_id)
        fields = _require_mapping(raw)
        changes = require_valid(self._update_schema, {**fields, "id": resource_id})
        changes.pop("id")
        return await self._repository.update(resource_id, changes)

    async def delete(self, identity: Identity | None, raw_id: object) -> None:
        self._gate.require_authorized(identity)
        await self._repository.delete(self._parse_id(raw_id))

    def _parse_id(self, raw_id: object) -> ResourceId:
        value, error = RESOURCE_ID.apply(raw_id)
        if error is not None:
            raise NotFoundError(
                self.kind.value, raw_id, ErrorContext(resource_kind=self.kind.value),
            )
        return ResourceId(value)


class AirportAdmin(ResourceAdmin):
    """Airport operations plus lookup by IATA code."""

    async def get_by_iata_code(self, identity: Identity | None, iata_code: str):
        self._gate.require_authorized(identity)
        return await self._repository.get_by_iata_code(iata_code)


def _require_mapping(raw: object) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise ValidationError({"body": "Request body must be a JSON object"})
    return raw
