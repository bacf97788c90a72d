"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes read form fields and delegate to MutationOrchestrator; no business logic here

Design Decisions:
    - Thin routes delegate to services (ADR: impureim sandwich)
"""
