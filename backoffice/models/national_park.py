"""NationalPark ORM — persists a managed park record.

Invariants:
    - id is a store-assigned integer primary key
    - name and state are non-nullable; (name, state) is unique
    - created_at is written once; updated_at only by the repository update path
"""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NationalPark(Base):
    """National park entity — scoped by state."""
    __tablename__ = "national_parks"
    __table_args__ = (
        UniqueConstraint("name", "state", name="national_parks_name_state_unique"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[float | None] = mapped_column(
        Numeric(10, 8, asdecimal=False), nullable=True,
    )
    longitude: Mapped[float | None] = mapped_column(
        Numeric(11, 8, asdecimal=False), nullable=True,
    )
    established_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    area: Mapped[float | None] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=True,
    )  # square miles
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
