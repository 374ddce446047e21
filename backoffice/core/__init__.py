"""Core Layer — authorization, validation, pagination. No IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (not_in_future reads today's date)
"""
