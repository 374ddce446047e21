"""ORM Models — SQLAlchemy declarative models for managed resources.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every resource table carries id, name, a scope column, created_at, updated_at
    - (name, scope) uniqueness is enforced by a storage-level constraint

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all,
      Alembic autogenerate, or the delete guard inspects it
"""

from backoffice.models.national_park import NationalPark  # noqa: F401
from backoffice.models.airport import Airport  # noqa: F401
