"""Domain Types — identifiers, resource kinds and field bounds shared across layers.

Invariants:
    - ResourceId wraps the store-assigned integer key — always positive
    - All valid resource kinds encoded as an Enum — no raw string matching
    - Numeric bounds live here, not inside validators or models

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: kinds serialize to JSON and log records without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ResourceId = NewType("ResourceId", int)


# ─── Enums ───────────────────────────────────────────────────────

class ResourceKind(str, Enum):
    """Managed entity kinds — one table and one repository each."""
    PARK = "park"
    AIRPORT = "airport"

    @property
    def plural(self) -> str:
        return f"{self.value}s"


# ─── Listing ─────────────────────────────────────────────────────

DEFAULT_PAGE_SIZE = 20
MAX_SEARCH_LENGTH = 100


# ─── Geography ───────────────────────────────────────────────────

MIN_LATITUDE, MAX_LATITUDE = -90.0, 90.0
MIN_LONGITUDE, MAX_LONGITUDE = -180.0, 180.0


# ─── Parks ───────────────────────────────────────────────────────

PARK_NAME_MAX = 100
PARK_STATE_MIN, PARK_STATE_MAX = 2, 50
PARK_DESCRIPTION_MAX = 2000
PARK_AREA_MAX = 1_000_000          # square miles


# ─── Airports ────────────────────────────────────────────────────

AIRPORT_NAME_MAX = 200
AIRPORT_PLACE_MAX = 100            # city, state, country
AIRPORT_TIMEZONE_MAX = 50
MIN_ELEVATION, MAX_ELEVATION = -1500, 30_000   # feet above sea level
IATA_CODE_LENGTH = 3
ICAO_CODE_LENGTH = 4
