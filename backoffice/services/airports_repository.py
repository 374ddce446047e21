"""Airports Repository — airports, unique by (name, city), IATA code and ICAO code.

Invariants:
    - Code lookups upper-case their input; codes are stored upper-case
    - search also matches codes, state and country
"""

from sqlalchemy import select

from backoffice.core.domain_types import ResourceId, ResourceKind
from backoffice.core.errors import ErrorContext, NotFoundError
from backoffice.models.airport import Airport
from backoffice.services.resource_repository import SQLAlchemyResourceRepository


class AirportsRepository(SQLAlchemyResourceRepository):
    model = Airport
    kind = ResourceKind.AIRPORT
    scope_field = "city"
    scope_conflict_message = "An airport with this name already exists in this city"
    unique_fields = (
        ("iata_code", "An airport with this IATA code already exists"),
        ("icao_code", "An airport with this ICAO code already exists"),
    )
    extra_search_fields = ("iata_code", "icao_code", "state", "country")

    async def get_by_iata_code(self, iata_code: str) -> Airport:
        code = iata_code.strip().upper()
        async with self._store_errors("get_by_iata_code"):
            result = await self._db.execute(
                select(Airport).where(Airport.iata_code == code),
            )
            airport = result.scalar_one_or_none()
        if airport is None:
            raise NotFoundError(
                self.kind.value, code, ErrorContext(resource_kind=self.kind.value),
            )
        return airport

    async def exists_by_iata_code(
        self, iata_code: str, exclude_id: ResourceId | None = None,
    ) -> bool:
        return await self._exists_where(
            exclude_id, Airport.iata_code == iata_code.strip().upper(),
        )

    async def exists_by_icao_code(
        self, icao_code: str | None, exclude_id: ResourceId | None = None,
    ) -> bool:
        if not icao_code or not icao_code.strip():
            return False
        return await self._exists_where(
            exclude_id, Airport.icao_code == icao_code.strip().upper(),
        )

