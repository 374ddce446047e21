"""Pydantic Schemas — response shapes for the admin API.

Invariants:
    - Schemas serialize at the system boundary only
    - Input validation is done by core.validation, not by these models
"""
