"""Boundary Protocols — contracts between the core pipeline and the store.

Invariants:
    - Core NEVER imports from the shell — dependency arrows point inward only
    - Every store operation either fully succeeds or raises a typed BackofficeError

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async in Protocol: implementations do IO; the pure validation and paging
      functions that surround these calls stay synchronous
"""

from typing import Any, Protocol, Sequence

from backoffice.core.domain_types import ResourceId, ResourceKind


class ResourceRepository(Protocol):
    """Contract for one kind's persistence — implemented by services/."""
    kind: ResourceKind

    async def get_all(self) -> Sequence[Any]: ...
    async def get_by_id(self, resource_id: ResourceId) -> Any: ...
    async def search(self, query: str) -> Sequence[Any]: ...
    async def exists_in_scope(
        self, name: str, scope: str, exclude_id: ResourceId | None = None,
    ) -> bool: ...
    async def count(self) -> int: ...
    async def create(self, record: dict[str, Any]) -> Any: ...
    async def update(self, resource_id: ResourceId, changes: dict[str, Any]) -> Any: ...
    async def delete(self, resource_id: ResourceId) -> None: ...


class ReferenceGuard(Protocol):
    """Counts persisted rows that reference a resource, keyed by referencing table."""
    async def find_references(self, resource_id: ResourceId) -> dict[str, int]: ...
