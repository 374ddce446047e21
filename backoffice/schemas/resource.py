"""Resource Schemas — public response shapes for parks, airports and paged views.

Invariants:
    - Built from ORM objects via from_attributes (no manual dict assembly)
    - Timestamps always serialized; optional descriptive fields may be null
"""

from datetime import date, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from backoffice.core.pagination import PagedResult


class ParkResponse(BaseModel):
    """National park as returned by the admin API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    state: str
    description: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    established_date: date | None = None
    area: float | None = None
    created_at: datetime
    updated_at: datetime


class AirportResponse(BaseModel):
    """Airport as returned by the admin API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    iata_code: str
    icao_code: str | None = None
    name: str
    city: str
    state: str | None = None
    country: str
    latitude: float
    longitude: float
    elevation: int | None = None
    timezone: str | None = None
    created_at: datetime
    updated_at: datetime


ItemT = TypeVar("ItemT", bound=BaseModel)


class PaginationInfo(BaseModel):
    current_page: int
    page_size: int
    total_pages: int
    total_count: int
    has_next: bool
    has_prev: bool
    start_index: int
    end_index: int


class PagedResponse(BaseModel, Generic[ItemT]):
    """One page of records plus navigation metadata and the echoed search."""
    items: list[ItemT]
    pagination: PaginationInfo
    search: str = ""

    @classmethod
    def from_page(
        cls, page: PagedResult, item_model: type[ItemT], search: str = "",
    ) -> "PagedResponse[ItemT]":
        return cls(
            items=[item_model.model_validate(item) for item in page.items],
            pagination=PaginationInfo(
                current_page=page.page_number,
                page_size=page.page_size,
                total_pages=page.total_pages,
                total_count=page.total_count,
                has_next=page.has_next,
                has_prev=page.has_prev,
                start_index=page.start_index,
                end_index=page.end_index,
            ),
            search=search,
        )


class DashboardResponse(BaseModel):
    """Admin landing view: who is signed in and how many records each kind holds."""
    email: str
    counts: dict[str, int]
