"""Resource Repository — SQLAlchemy persistence for one managed resource kind.

Invariants:
    - Every operation fully succeeds or leaves the store unchanged and raises a
      typed BackofficeError (NotFound, Conflict, ReferentialIntegrity, Store)
    - (name, scope) and any extra unique fields are checked before writing AND
      backed by storage-level unique constraints; an IntegrityError on commit
      (a concurrent writer won the race) becomes ConflictError
    - id, created_at and updated_at are never taken from caller input
    - update preserves created_at and never moves updated_at backwards
    - delete runs every ReferenceGuard first; a store FK violation on delete
      is also reported as ReferentialIntegrityError
    - get_all and search return records in creation (id) order

Design Decisions:
    - One generic class configured by class attributes; kind-specific
      repositories only declare their model, scope and extra unique fields
    - Reference guards are injectable so alternative reference sources can be
      plugged in; the default guard inspects foreign keys in Base.metadata
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, ClassVar, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.domain_types import ResourceId, ResourceKind
from backoffice.core.errors import (
    ConflictError, ErrorContext, NotFoundError, ReferentialIntegrityError, StoreError,
)
from backoffice.core.repository_protocols import ReferenceGuard
from backoffice.db.base import Base
from backoffice.services.reference_guards import ForeignKeyReferenceGuard

logger = logging.getLogger(__name__)

_MANAGED_COLUMNS = frozenset({"id", "created_at", "updated_at"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; treat them as UTC."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def next_updated_at(previous: datetime | None) -> datetime:
    """Refresh timestamp that is never earlier than the previous one."""
    now = _utcnow()
    if previous is None:
        return now
    return max(now, _as_utc(previous))


class SQLAlchemyResourceRepository:
    """Generic async repository over a single resource table."""

    model: ClassVar[type[Base]]
    kind: ClassVar[ResourceKind]
    scope_field: ClassVar[str]
    scope_conflict_message: ClassVar[str]
    # (field, conflict message) for single-column unique constraints
    unique_fields: ClassVar[tuple[tuple[str, str], ...]] = ()
    # searched in addition to name and scope
    extra_search_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self, db: AsyncSession, reference_guards: Sequence[ReferenceGuard] | None = None,
    ):
        self._db = db
        if reference_guards is None:
            reference_guards = [ForeignKeyReferenceGuard(db, self.model.__table__)]
        self._guards = list(reference_guards)

    # ─── Reads ───────────────────────────────────────────────────

    async def get_all(self) -> list:
        async with self._store_errors("get_all"):
            result = await self._db.execute(
                select(self.model).order_by(self.model.id),
            )
            return list(result.scalars().all())

    async def get_by_id(self, resource_id: ResourceId):
        async with self._store_errors("get_by_id"):
            entity = await self._db.get(self.model, resource_id)
        if entity is None:
            raise NotFoundError(
                self.kind.value, resource_id,
                ErrorContext(resource_kind=self.kind.value, resource_id=resource_id),
            )
        return entity

    async def search(self, query: str) -> list:
        """Case-insensitive substring match on name, scope and extra search fields."""
        term = (query or "").strip()
        if not term:
            return await self.get_all()
        fields = ("name", self.scope_field, *self.extra_search_fields)
        conditions = [
            getattr(self.model, name).icontains(term, autoescape=True)
            for name in fields
        ]
        async with self._store_errors("search"):
            result = await self._db.execute(
                select(self.model).where(or_(*conditions)).order_by(self.model.id),
            )
            return list(result.scalars().all())

    async def exists_in_scope(
        self, name: str, scope: str, exclude_id: ResourceId | None = None,
    ) -> bool:
        """Exact (name, scope) match among live records, ignoring exclude_id."""
        return await self._exists_where(
            exclude_id,
            self.model.name == name,
            getattr(self.model, self.scope_field) == scope,
        )

    async def count(self) -> int:
        async with self._store_errors("count"):
            result = await self._db.execute(
                select(func.count()).select_from(self.model),
            )
            return result.scalar_one()

    # ─── Writes ──────────────────────────────────────────────────

    async def create(self, record: dict[str, Any]):
        values = self._writable(record)
        async with self._store_errors("create"):
            conflict = await self._find_conflict(values)
            if conflict:
                raise conflict

            now = _utcnow()
            entity = self.model(**values, created_at=now, updated_at=now)
            self._db.add(entity)
            try:
                await self._db.commit()
            except IntegrityError as e:
                await self._db.rollback()
                raise await self._conflict_after_race(values, None, e)
            await self._db.refresh(entity)

        logger.info(
            f"Created {self.kind.value} #{entity.id}",
            extra={"resource_kind": self.kind.value, "resource_id": entity.id},
        )
        return entity

    async def update(self, resource_id: ResourceId, changes: dict[str, Any]):
        values = self._writable(changes)
        entity = await self.get_by_id(resource_id)
        async with self._store_errors("update"):
            merged = self._current_keys(entity) | values
            conflict = await self._find_conflict(merged, exclude_id=resource_id)
            if conflict:
                raise conflict

            previous = entity.updated_at
            for name, value in values.items():
                setattr(entity, name, value)
            entity.updated_at = next_updated_at(previous)
            try:
                await self._db.commit()
            except IntegrityError as e:
                await self._db.rollback()
                raise await self._conflict_after_race(merged, resource_id, e)
            await self._db.refresh(entity)

        logger.info(
            f"Updated {self.kind.value} #{resource_id}",
            extra={"resource_kind": self.kind.value, "resource_id": resource_id},
        )
        return entity

    async def delete(self, resource_id: ResourceId) -> None:
        entity = await self.get_by_id(resource_id)
        async with self._store_errors("delete"):
            references: dict[str, int] = {}
            for guard in self._guards:
                references.update(await guard.find_references(resource_id))
            if references:
                raise ReferentialIntegrityError(
                    self.kind.value, resource_id, references,
                    ErrorContext(resource_kind=self.kind.value, resource_id=resource_id),
                )

            await self._db.delete(entity)
            try:
                await self._db.commit()
            except IntegrityError as e:
                await self._db.rollback()
                logger.warning(
                    f"Store rejected delete of {self.kind.value} #{resource_id}: {e}",
                    extra={"resource_kind": self.kind.value, "resource_id": resource_id},
                )
                raise ReferentialIntegrityError(self.kind.value, resource_id)

        logger.info(
            f"Deleted {self.kind.value} #{resource_id}",
            extra={"resource_kind": self.kind.value, "resource_id": resource_id},
        )

    # ─── Helpers ─────────────────────────────────────────────────

    def _writable(self, record: dict[str, Any]) -> dict[str, Any]:
        """Keep only model columns the caller may set."""
        columns = self.model.__table__.columns.keys()
        return {
            k: v for k, v in record.items()
            if k in columns and k not in _MANAGED_COLUMNS
        }

    def _current_keys(self, entity) -> dict[str, Any]:
        keys = ["name", self.scope_field, *(f for f, _ in self.unique_fields)]
        return {k: getattr(entity, k) for k in keys}

    async def _exists_where(self, exclude_id: ResourceId | None, *conditions) -> bool:
        stmt = select(self.model.id).where(*conditions)
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        async with self._store_errors("exists"):
            result = await self._db.execute(stmt.limit(1))
            return result.scalar_one_or_none() is not None

    async def _find_conflict(
        self, values: dict[str, Any], exclude_id: ResourceId | None = None,
    ) -> ConflictError | None:
        name, scope = values.get("name"), values.get(self.scope_field)
        if name is not None and scope is not None:
            if await self.exists_in_scope(name, scope, exclude_id):
                return ConflictError("name", self.scope_conflict_message)
        for field_name, message in self.unique_fields:
            value = values.get(field_name)
            if value is None:
                continue
            if await self._exists_where(exclude_id, getattr(self.model, field_name) == value):
                return ConflictError(field_name, message)
        return None

    async def _conflict_after_race(
        self, values: dict[str, Any], exclude_id: ResourceId | None, cause: IntegrityError,
    ) -> Exception:
        """Explain an IntegrityError raised on commit after the pre-check passed."""
        conflict = await self._find_conflict(values, exclude_id)
        if conflict:
            logger.warning(
                f"Concurrent write lost uniqueness race on {self.kind.value}.{conflict.field}",
                extra={"resource_kind": self.kind.value, "resource_id": exclude_id},
            )
            return conflict
        logger.error(
            f"Integrity error writing {self.kind.value}: {cause}",
            extra={"resource_kind": self.kind.value, "operation": "commit"},
        )
        return StoreError("Integrity constraint violated", "commit")

    @asynccontextmanager
    async def _store_errors(self, operation: str) -> AsyncGenerator[None, None]:
        """Map unexpected SQLAlchemy failures to StoreError after rolling back."""
        try:
            yield
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(
                f"{self.kind.value} {operation} failed: {e}",
                exc_info=True,
                extra={"resource_kind": self.kind.value, "operation": operation},
            )
            raise StoreError(f"{self.kind.value} {operation}", operation) from e
