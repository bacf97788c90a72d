"""Service test fixtures — hand-written fakes for the orchestrator's collaborators.

Invariants:
    - Fakes record every call so tests can assert "no side effects" after a failure
    - FakeGateway returns preset GatewayOutcomes per operation (default: one row written)
    - FakeSessions returns a preset SessionOutcome (default: navigate to the dashboard)
    - The orchestrator clock is pinned to 2026-10-17 UTC

Design Decisions:
    - Fakes over mocks: the Protocols are small, a fake reads better than AsyncMock wiring
    - hash_rounds=4: the bcrypt minimum, keeps registration tests fast
"""

from datetime import datetime, timezone

import pytest

from dashboard_actions.core.domain_types import (
    GatewayOutcome, OperationKind, OutcomeKind, SessionOutcome,
)
from dashboard_actions.services.mutation_orchestrator import (
    MutationOrchestrator, NavigationPaths,
)

FIXED_NOW = datetime(2026, 10, 17, 15, 30, tzinfo=timezone.utc)
PATHS = NavigationPaths(dashboard="/dashboard", invoices="/dashboard/invoices")


class FakeGateway:
    def __init__(self):
        self.calls: list[tuple[OperationKind, tuple]] = []
        self.outcomes: dict[OperationKind, GatewayOutcome] = {}

    def _outcome(self, operation: OperationKind, *args) -> GatewayOutcome:
        self.calls.append((operation, args))
        return self.outcomes.get(
            operation, GatewayOutcome(OutcomeKind.SUCCESS, operation, row_count=1),
        )

    async def insert_user(self, user):
        return self._outcome(OperationKind.INSERT_USER, user)

    async def insert_invoice(self, invoice):
        return self._outcome(OperationKind.INSERT_INVOICE, invoice)

    async def update_invoice(self, invoice_id, changes):
        return self._outcome(OperationKind.UPDATE_INVOICE, invoice_id, changes)

    async def delete_invoice(self, invoice_id):
        return self._outcome(OperationKind.DELETE_INVOICE, invoice_id)


class FakeSessions:
    def __init__(self):
        self.calls: list[tuple[str, str]] = []
        self.outcome = SessionOutcome(
            OutcomeKind.NAVIGATE, redirect_to="/dashboard",
            session_token="token-123", expires_in=3600,
        )

    async def establish(self, email, password):
        self.calls.append((email, password))
        return self.outcome


class FakeCache:
    def __init__(self):
        self.revalidated: list[str] = []

    def revalidate(self, path):
        self.revalidated.append(path)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def sessions():
    return FakeSessions()


@pytest.fixture
def cache():
    return FakeCache()


@pytest.fixture
def orchestrator(gateway, sessions, cache):
    return MutationOrchestrator(
        gateway=gateway, sessions=sessions, cache=cache, paths=PATHS,
        hash_rounds=4, clock=lambda: FIXED_NOW,
    )
