"""Mutation Orchestrator — step ordering, error shortcuts, and result shapes per action.

Tests cover:
    - Validation failure returns every field error and performs no side effects
    - createInvoice normalizes, persists, revalidates the invoices view, then navigates
    - updateInvoice uses the same soft-fail contract as create
    - deleteInvoice revalidates and returns a message (no navigation)
    - register maps conflict / generic failure / sign-in redirect distinctly
    - authenticate keeps "Invalid credentials." apart from "Something went wrong."
    - Unanticipated exceptions become the generic retry message
"""

from decimal import Decimal

import bcrypt

from dashboard_actions.core.domain_types import (
    GatewayOutcome, InvoiceStatus, OperationKind, OutcomeKind, SessionOutcome,
)
from dashboard_actions.services.mutation_orchestrator import (
    AUTH_FAILED_MESSAGE,
    DELETED_INVOICE_MESSAGE,
    EMAIL_EXISTS_MESSAGE,
    INVALID_CREDENTIALS_MESSAGE,
    MISSING_CREATE_FIELDS_MESSAGE,
    MISSING_UPDATE_FIELDS_MESSAGE,
    MISSING_USER_FIELDS_MESSAGE,
    UNEXPECTED_FAILURE_MESSAGE,
)

VALID_INVOICE = {"customerId": "abc", "amount": "50", "status": "pending"}
VALID_REGISTRATION = {
    "email": "ada@example.com",
    "name": "Ada",
    "password": "secret123",
    "confirm-password": "secret123",
}


# ─── createInvoice ───────────────────────────────────────────────

async def test_create_invoice_persists_cents_and_today(orchestrator, gateway):
    await orchestrator.create_invoice(None, VALID_INVOICE)

    [(operation, (invoice,))] = gateway.calls
    assert operation == OperationKind.INSERT_INVOICE
    assert invoice.customer_id == "abc"
    assert invoice.amount_cents == 5000
    assert invoice.status == InvoiceStatus.PENDING
    assert invoice.date == "2026-10-17"


async def test_create_invoice_revalidates_then_navigates(orchestrator, cache):
    result = await orchestrator.create_invoice(None, VALID_INVOICE)

    assert cache.revalidated == ["/dashboard/invoices"]
    assert result.redirect_to == "/dashboard/invoices"
    assert result.success is True
    assert result.errors is None


async def test_create_invoice_converts_fractional_dollars(orchestrator, gateway):
    await orchestrator.create_invoice(
        None, {**VALID_INVOICE, "amount": "19.99"},
    )
    invoice = gateway.calls[0][1][0]
    assert invoice.amount_cents == 1999


async def test_create_invoice_rejects_non_positive_amount_without_insert(
    orchestrator, gateway, cache,
):
    for amount in ("0", "-5", "", "abc"):
        result = await orchestrator.create_invoice(
            None, {**VALID_INVOICE, "amount": amount},
        )
        assert result.errors["amount"] == ["Please enter an amount greater than $0."]
        assert result.message == MISSING_CREATE_FIELDS_MESSAGE
    assert gateway.calls == []
    assert cache.revalidated == []


async def test_create_invoice_rejects_sub_cent_amount_without_insert(orchestrator, gateway):
    result = await orchestrator.create_invoice(
        None, {**VALID_INVOICE, "amount": "0.004"},
    )

    assert result.errors == {"amount": ["Please enter an amount greater than $0."]}
    assert gateway.calls == []


async def test_create_invoice_reports_oversized_amount_on_field(orchestrator, gateway):
    result = await orchestrator.create_invoice(
        None, {**VALID_INVOICE, "amount": "1e30"},
    )

    assert result.message == MISSING_CREATE_FIELDS_MESSAGE
    assert set(result.errors) == {"amount"}
    assert gateway.calls == []


async def test_create_invoice_returns_all_field_errors_together(orchestrator):
    result = await orchestrator.create_invoice(None, {})

    assert set(result.errors) == {"customerId", "amount", "status"}
    assert result.redirect_to is None


async def test_create_invoice_database_failure_message(orchestrator, gateway, cache):
    gateway.outcomes[OperationKind.INSERT_INVOICE] = GatewayOutcome(
        OutcomeKind.ERROR, OperationKind.INSERT_INVOICE, detail="boom",
    )

    result = await orchestrator.create_invoice(None, VALID_INVOICE)

    assert result.message == "Database Error: Failed to Create Invoice."
    assert result.redirect_to is None
    assert cache.revalidated == []


# ─── updateInvoice ───────────────────────────────────────────────

async def test_update_invoice_sends_only_mutable_columns(orchestrator, gateway):
    await orchestrator.update_invoice(
        "inv-1", None, {"customerId": "c-2", "amount": "12.5", "status": "paid"},
    )

    [(operation, (invoice_id, changes))] = gateway.calls
    assert operation == OperationKind.UPDATE_INVOICE
    assert invoice_id == "inv-1"
    assert changes.customer_id == "c-2"
    assert changes.amount_cents == 1250
    assert changes.status == InvoiceStatus.PAID
    assert not hasattr(changes, "date")


async def test_update_invoice_navigates_to_list(orchestrator, cache):
    result = await orchestrator.update_invoice("inv-1", None, VALID_INVOICE)

    assert result.redirect_to == "/dashboard/invoices"
    assert cache.revalidated == ["/dashboard/invoices"]


async def test_update_invoice_soft_fails_on_invalid_input(orchestrator, gateway):
    result = await orchestrator.update_invoice(
        "inv-1", None, {**VALID_INVOICE, "status": "overdue"},
    )

    assert result.message == MISSING_UPDATE_FIELDS_MESSAGE
    assert result.errors == {"status": ["Please select an invoice status."]}
    assert gateway.calls == []


async def test_update_invoice_database_failure_message(orchestrator, gateway):
    gateway.outcomes[OperationKind.UPDATE_INVOICE] = GatewayOutcome(
        OutcomeKind.ERROR, OperationKind.UPDATE_INVOICE,
    )

    result = await orchestrator.update_invoice("inv-1", None, VALID_INVOICE)

    assert result.message == "Database Error: Failed to Update Invoice."


# ─── deleteInvoice ───────────────────────────────────────────────

async def test_delete_invoice_returns_message_without_navigation(orchestrator, cache):
    result = await orchestrator.delete_invoice("inv-1")

    assert result.message == DELETED_INVOICE_MESSAGE
    assert result.success is True
    assert result.redirect_to is None
    assert cache.revalidated == ["/dashboard/invoices"]


async def test_delete_invoice_store_error(orchestrator, gateway, cache):
    gateway.outcomes[OperationKind.DELETE_INVOICE] = GatewayOutcome(
        OutcomeKind.ERROR, OperationKind.DELETE_INVOICE,
    )

    result = await orchestrator.delete_invoice("nonexistent-id")

    assert result.message == "Database Error: Failed to Delete Invoice."
    assert result.success is False
    assert cache.revalidated == []


# ─── register ────────────────────────────────────────────────────

async def test_register_hashes_password_before_insert(orchestrator, gateway):
    await orchestrator.register(None, VALID_REGISTRATION)

    [(operation, (user,))] = gateway.calls
    assert operation == OperationKind.INSERT_USER
    assert user.email == "ada@example.com"
    assert user.name == "Ada"
    assert user.password_hash != "secret123"
    assert bcrypt.checkpw(b"secret123", user.password_hash.encode())


async def test_register_signs_in_and_navigates_to_dashboard(orchestrator, sessions):
    result = await orchestrator.register(None, VALID_REGISTRATION)

    assert sessions.calls == [("ada@example.com", "secret123")]
    assert result.redirect_to == "/dashboard"
    assert result.session_token == "token-123"
    assert result.message is None


async def test_register_password_mismatch_reported_on_confirm_field(
    orchestrator, gateway, sessions,
):
    result = await orchestrator.register(
        None, {**VALID_REGISTRATION, "confirm-password": "different1"},
    )

    assert result.errors["confirmPassword"] == ["Password does not match"]
    assert result.message == MISSING_USER_FIELDS_MESSAGE
    assert gateway.calls == []
    assert sessions.calls == []


async def test_register_overlong_password_is_field_error(orchestrator, gateway):
    password = "p" * 80
    result = await orchestrator.register(
        None, {**VALID_REGISTRATION, "password": password, "confirm-password": password},
    )

    assert result.message == MISSING_USER_FIELDS_MESSAGE
    assert set(result.errors) == {"password"}
    assert gateway.calls == []


async def test_register_duplicate_email(orchestrator, gateway, sessions):
    gateway.outcomes[OperationKind.INSERT_USER] = GatewayOutcome(
        OutcomeKind.CONFLICT, OperationKind.INSERT_USER,
    )

    result = await orchestrator.register(None, VALID_REGISTRATION)

    assert result.message == EMAIL_EXISTS_MESSAGE
    assert sessions.calls == []


async def test_register_generic_database_failure(orchestrator, gateway):
    gateway.outcomes[OperationKind.INSERT_USER] = GatewayOutcome(
        OutcomeKind.ERROR, OperationKind.INSERT_USER,
    )

    result = await orchestrator.register(None, VALID_REGISTRATION)

    assert result.message == "Database Error: Failed to Create User."


async def test_register_treats_zero_rows_as_failure(orchestrator, gateway, sessions):
    gateway.outcomes[OperationKind.INSERT_USER] = GatewayOutcome(
        OutcomeKind.SUCCESS, OperationKind.INSERT_USER, row_count=0,
    )

    result = await orchestrator.register(None, VALID_REGISTRATION)

    assert result.message == "Database Error: Failed to Create User."
    assert sessions.calls == []


async def test_register_sign_in_failure_after_insert(orchestrator, sessions):
    sessions.outcome = SessionOutcome(OutcomeKind.ERROR, detail="provider down")

    result = await orchestrator.register(None, VALID_REGISTRATION)

    assert result.message == UNEXPECTED_FAILURE_MESSAGE
    assert result.redirect_to is None


# ─── authenticate ────────────────────────────────────────────────

async def test_authenticate_success_navigates_with_token(orchestrator):
    result = await orchestrator.authenticate(
        None, {"email": "ada@example.com", "password": "secret123"},
    )

    assert result.redirect_to == "/dashboard"
    assert result.session_token == "token-123"


async def test_authenticate_wrong_password(orchestrator, sessions):
    sessions.outcome = SessionOutcome(OutcomeKind.INVALID_CREDENTIALS)

    result = await orchestrator.authenticate(
        None, {"email": "ada@example.com", "password": "wrong-pass"},
    )

    assert result.message == INVALID_CREDENTIALS_MESSAGE
    assert result.session_token is None


async def test_authenticate_provider_error_is_not_invalid_credentials(
    orchestrator, sessions,
):
    sessions.outcome = SessionOutcome(OutcomeKind.ERROR)

    result = await orchestrator.authenticate(
        None, {"email": "ada@example.com", "password": "secret123"},
    )

    assert result.message == AUTH_FAILED_MESSAGE
    assert result.success is False


async def test_authenticate_malformed_input_never_reaches_sessions(
    orchestrator, sessions,
):
    result = await orchestrator.authenticate(None, {"email": "not-an-email"})

    assert result.message == INVALID_CREDENTIALS_MESSAGE
    assert set(result.errors) == {"email", "password"}
    assert sessions.calls == []


# ─── Unanticipated faults ────────────────────────────────────────

async def test_unexpected_exception_becomes_generic_message(orchestrator, gateway):
    async def explode(invoice):
        raise RuntimeError("driver vanished")

    gateway.insert_invoice = explode

    result = await orchestrator.create_invoice(None, VALID_INVOICE)

    assert result.message == UNEXPECTED_FAILURE_MESSAGE
    assert result.redirect_to is None


async def test_revalidating_same_input_twice_is_deterministic(orchestrator, gateway):
    await orchestrator.create_invoice(None, VALID_INVOICE)
    await orchestrator.create_invoice(None, VALID_INVOICE)

    first, second = (call[1][0] for call in gateway.calls)
    assert first == second
    assert Decimal(first.amount_cents) / 100 == Decimal("50")
