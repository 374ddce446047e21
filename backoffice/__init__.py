"""Backoffice Package — administrative resource management engine.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
