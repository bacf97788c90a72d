"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are pure; the only non-determinism is the bcrypt salt and the clock,
      both confined to core/normalize.py

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
