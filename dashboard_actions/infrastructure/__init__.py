"""Infrastructure Layer — database access, cache signals, and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every store failure is classified before it leaves this layer

Design Decisions:
    - Tagged outcomes over raised driver errors at the gateway boundary
"""
