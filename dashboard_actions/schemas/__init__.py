"""Pydantic Schemas — response shapes returned to the presentation layer.

Invariants:
    - Schemas describe API contracts; form input validation lives in core/validate_form.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
