"""Infrastructure Layer — database session management and structured logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All SQLAlchemy failures leave this layer as StoreError
"""
