"""Boundary Protocols — contracts between the mutation pipeline and its collaborators.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Every IO collaborator returns a tagged outcome (OutcomeKind), never raises for
      expected failures (conflict, bad credentials, store error)
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async in Protocol: boundary methods are async because implementations do IO
    - CacheInvalidator is sync: invalidation is a local signal, not a round-trip
"""

from typing import Protocol

from dashboard_actions.core.domain_types import (
    GatewayOutcome, InvoiceChanges, InvoiceId, NewInvoice, NewUser,
    SessionOutcome, StoredUser,
)


class PersistenceGatewayLike(Protocol):
    """Contract for the only write path to users/invoices — implemented by shell."""
    async def insert_user(self, user: NewUser) -> GatewayOutcome: ...
    async def insert_invoice(self, invoice: NewInvoice) -> GatewayOutcome: ...
    async def update_invoice(
        self, invoice_id: InvoiceId, changes: InvoiceChanges,
    ) -> GatewayOutcome: ...
    async def delete_invoice(self, invoice_id: InvoiceId) -> GatewayOutcome: ...


class UserLookup(Protocol):
    """Contract for reading a user back by e-mail for credential checks."""
    async def find_user_by_email(self, email: str) -> StoredUser | None: ...


class SessionEstablisherLike(Protocol):
    """Contract for sign-in — implemented by services/session_establisher.py."""
    async def establish(self, email: str, password: str) -> SessionOutcome: ...


class CacheInvalidator(Protocol):
    """Contract for marking a cached view stale."""
    def revalidate(self, path: str) -> None: ...
