"""Parks Repository — national parks, unique by (name, state)."""

from backoffice.core.domain_types import ResourceKind
from backoffice.models.national_park import NationalPark
from backoffice.services.resource_repository import SQLAlchemyResourceRepository


class ParksRepository(SQLAlchemyResourceRepository):
    model = NationalPark
    kind = ResourceKind.PARK
    scope_field = "state"
    scope_conflict_message = "A park with this name already exists in this state"
