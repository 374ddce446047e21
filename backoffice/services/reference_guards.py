"""Reference Guards — find persisted rows that still point at a resource before it is deleted.

Invariants:
    - Referencing tables are discovered from Base.metadata at call time, so any
      table later declared with a foreign key to a resource table is guarded
      without changes here
    - Only non-zero counts are returned; an empty dict means "safe to delete"
    - Read-only: the guard never modifies the store
"""

import logging

from sqlalchemy import Table, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.domain_types import ResourceId

logger = logging.getLogger(__name__)


class ForeignKeyReferenceGuard:
    """ReferenceGuard that counts rows in every table holding an FK to target_table."""

    def __init__(self, db: AsyncSession, target_table: Table):
        self._db = db
        self._target = target_table

    def referencing_columns(self) -> list:
        """All (child) columns across the metadata whose FK points at the target table."""
        columns = []
        for table in self._target.metadata.sorted_tables:
            if table is self._target:
                continue
            for fk in table.foreign_keys:
                if fk.references(self._target):
                    columns.append(fk.parent)
        return columns

    async def find_references(self, resource_id: ResourceId) -> dict[str, int]:
        references: dict[str, int] = {}
        for column in self.referencing_columns():
            result = await self._db.execute(
                select(func.count()).select_from(column.table).where(column == resource_id),
            )
            count = result.scalar_one()
            if count:
                key = f"{column.table.name}.{column.name}"
                references[key] = count
        if references:
            logger.info(
                f"{self._target.name} #{resource_id} still referenced by {references}",
                extra={"resource_id": resource_id, "operation": "delete"},
            )
        return references
