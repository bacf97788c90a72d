"""Services Layer — session establishment and the mutation orchestrator.

Invariants:
    - Services depend on Protocols from core/, never on concrete infrastructure
    - Each action runs validate -> normalize -> persist -> invalidate -> navigate, in order

Design Decisions:
    - Collaborators passed in explicitly (ADR: no ambient sign-in or cache globals)
"""
