"""Airport ORM — persists a managed airport record.

Invariants:
    - (name, city) is unique; iata_code is unique; icao_code is unique when present
    - Codes are stored upper-case
    - latitude and longitude are mandatory for airports
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Airport(Base):
    """Airport entity — scoped by city, additionally keyed by IATA/ICAO codes."""
    __tablename__ = "airports"
    __table_args__ = (
        UniqueConstraint("name", "city", name="airports_name_city_unique"),
        UniqueConstraint("iata_code", name="airports_iata_code_unique"),
        UniqueConstraint("icao_code", name="airports_icao_code_unique"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    iata_code: Mapped[str] = mapped_column(String(3), nullable=False)
    icao_code: Mapped[str | None] = mapped_column(String(4), nullable=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    latitude: Mapped[float] = mapped_column(
        Numeric(10, 8, asdecimal=False), nullable=False,
    )
    longitude: Mapped[float] = mapped_column(
        Numeric(11, 8, asdecimal=False), nullable=False,
    )
    elevation: Mapped[int | None] = mapped_column(Integer, nullable=True)  # feet
    timezone: Mapped[str | None] = mapped_column(String(50), nullable=True)  # IANA
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
