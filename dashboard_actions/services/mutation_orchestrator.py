"""Mutation Orchestrator — runs each action through validate -> normalize -> persist -> invalidate -> navigate.

Invariants:
    - Steps run strictly in order; a failed step ends the action with an ActionResult
    - Validation failure performs NO side effects (no hash, no statement, no cache signal)
    - Cache is revalidated only after a successful invoice mutation
    - Navigation is returned as ActionResult.redirect_to, never raised
    - Only this class triggers sign-in (register and authenticate)
    - Unanticipated exceptions become "Something went wrong, please try again." and are logged
      with traceback; expected failures arrive as tagged outcomes and are never exceptions

Design Decisions:
    - Collaborators injected (gateway, session establisher, cache invalidator): tests use fakes,
      no ambient sign-in/revalidate globals (ADR: explicit collaborator handles)
    - Switch on OutcomeKind instead of exception identity: the register -> sign-in redirect can
      no longer be mistaken for a failure
    - update_invoice uses the same soft-fail validation contract as create_invoice
    - previous_state is accepted on every form action so callers can pass the last result back
      on re-submission; the pipeline itself does not read it
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from dashboard_actions.config import Settings
from dashboard_actions.core.domain_types import (
    FormSchema, GatewayOutcome, InvoiceChanges, InvoiceId, NewInvoice, NewUser,
    OutcomeKind, SessionOutcome,
)
from dashboard_actions.core.errors import FormValidationError
from dashboard_actions.core.normalize import hash_password, to_minor_units, today_iso
from dashboard_actions.core.repository_protocols import (
    CacheInvalidator, PersistenceGatewayLike, SessionEstablisherLike,
)
from dashboard_actions.core.validate_form import validate_form
from dashboard_actions.schemas.action_result import ActionResult

logger = logging.getLogger(__name__)


# ─── User-facing Messages ────────────────────────────────────────

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
AUTH_FAILED_MESSAGE = "Something went wrong."
UNEXPECTED_FAILURE_MESSAGE = "Something went wrong, please try again."
EMAIL_EXISTS_MESSAGE = "Email already exists. Please sign in."
MISSING_USER_FIELDS_MESSAGE = "Missing Fields. Failed to Create User, please try again."
MISSING_CREATE_FIELDS_MESSAGE = "Missing Fields. Failed to Create Invoice."
MISSING_UPDATE_FIELDS_MESSAGE = "Missing Fields. Failed to Update Invoice."
DELETED_INVOICE_MESSAGE = "Deleted Invoice."


def database_error_message(verb: str, entity: str) -> str:
    return f"Database Error: Failed to {verb} {entity}."


@dataclass(frozen=True)
class NavigationPaths:
    dashboard: str
    invoices: str


def navigation_paths_from(settings: Settings) -> NavigationPaths:
    return NavigationPaths(
        dashboard=settings.dashboard_path, invoices=settings.invoices_path,
    )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MutationOrchestrator:
    """The five dashboard actions. One instance per request."""

    def __init__(
        self,
        gateway: PersistenceGatewayLike,
        sessions: SessionEstablisherLike,
        cache: CacheInvalidator,
        paths: NavigationPaths,
        hash_rounds: int = 10,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._gateway = gateway
        self._sessions = sessions
        self._cache = cache
        self._paths = paths
        self._hash_rounds = hash_rounds
        self._clock = clock

    # ─── Actions ─────────────────────────────────────────────────

    async def authenticate(
        self, previous_state: ActionResult | None, form: Mapping[str, Any],
    ) -> ActionResult:
        return await self._guard("authenticate", self._authenticate(form))

    async def register(
        self, previous_state: ActionResult | None, form: Mapping[str, Any],
    ) -> ActionResult:
        return await self._guard("register", self._register(form))

    async def create_invoice(
        self, previous_state: ActionResult | None, form: Mapping[str, Any],
    ) -> ActionResult:
        return await self._guard("create_invoice", self._create_invoice(form))

    async def update_invoice(
        self, invoice_id: str,
        previous_state: ActionResult | None, form: Mapping[str, Any],
    ) -> ActionResult:
        return await self._guard(
            "update_invoice", self._update_invoice(InvoiceId(invoice_id), form),
        )

    async def delete_invoice(self, invoice_id: str) -> ActionResult:
        return await self._guard(
            "delete_invoice", self._delete_invoice(InvoiceId(invoice_id)),
        )

    # ─── Pipelines ───────────────────────────────────────────────

    async def _authenticate(self, form: Mapping[str, Any]) -> ActionResult:
        try:
            credentials = validate_form(FormSchema.CREDENTIALS, form)
        except FormValidationError as exc:
            self._log_invalid("authenticate", exc)
            return ActionResult.failed(INVALID_CREDENTIALS_MESSAGE, exc.field_errors)

        outcome = await self._sessions.establish(
            credentials.email, credentials.password,
        )
        return self._from_session(
            outcome,
            on_invalid=INVALID_CREDENTIALS_MESSAGE, on_error=AUTH_FAILED_MESSAGE,
        )

    async def _register(self, form: Mapping[str, Any]) -> ActionResult:
        try:
            registration = validate_form(FormSchema.REGISTRATION, form)
        except FormValidationError as exc:
            self._log_invalid("register", exc)
            return ActionResult.failed(MISSING_USER_FIELDS_MESSAGE, exc.field_errors)

        user = NewUser(
            email=registration.email,
            name=registration.name,
            password_hash=await asyncio.to_thread(
                hash_password, registration.password, self._hash_rounds,
            ),
        )
        outcome = await self._gateway.insert_user(user)
        if outcome.kind == OutcomeKind.CONFLICT:
            logger.warning(
                "Registration rejected: e-mail already registered",
                extra={"action": "register", "error_code": "CONFLICT"},
            )
            return ActionResult.failed(EMAIL_EXISTS_MESSAGE)
        if not self._wrote_one_row(outcome):
            return ActionResult.failed(database_error_message("Create", "User"))

        signed_in = await self._sessions.establish(
            registration.email, registration.password,
        )
        return self._from_session(
            signed_in,
            on_invalid=UNEXPECTED_FAILURE_MESSAGE, on_error=UNEXPECTED_FAILURE_MESSAGE,
        )

    async def _create_invoice(self, form: Mapping[str, Any]) -> ActionResult:
        try:
            draft = validate_form(FormSchema.INVOICE_CREATE, form)
        except FormValidationError as exc:
            self._log_invalid("create_invoice", exc)
            return ActionResult.failed(MISSING_CREATE_FIELDS_MESSAGE, exc.field_errors)

        invoice = NewInvoice(
            customer_id=draft.customer_id,
            amount_cents=to_minor_units(draft.amount),
            status=draft.status,
            date=today_iso(self._clock()),
        )
        outcome = await self._gateway.insert_invoice(invoice)
        if not outcome.ok:
            return ActionResult.failed(database_error_message("Create", "Invoice"))

        return self._invalidate_and_navigate()

    async def _update_invoice(
        self, invoice_id: InvoiceId, form: Mapping[str, Any],
    ) -> ActionResult:
        try:
            draft = validate_form(FormSchema.INVOICE_UPDATE, form)
        except FormValidationError as exc:
            self._log_invalid("update_invoice", exc)
            return ActionResult.failed(MISSING_UPDATE_FIELDS_MESSAGE, exc.field_errors)

        changes = InvoiceChanges(
            customer_id=draft.customer_id,
            amount_cents=to_minor_units(draft.amount),
            status=draft.status,
        )
        outcome = await self._gateway.update_invoice(invoice_id, changes)
        if not outcome.ok:
            return ActionResult.failed(database_error_message("Update", "Invoice"))
        self._warn_if_no_rows("update_invoice", invoice_id, outcome)

        return self._invalidate_and_navigate()

    async def _delete_invoice(self, invoice_id: InvoiceId) -> ActionResult:
        outcome = await self._gateway.delete_invoice(invoice_id)
        if not outcome.ok:
            return ActionResult.failed(database_error_message("Delete", "Invoice"))
        self._warn_if_no_rows("delete_invoice", invoice_id, outcome)

        self._cache.revalidate(self._paths.invoices)
        return ActionResult.succeeded(DELETED_INVOICE_MESSAGE)

    # ─── Helpers ─────────────────────────────────────────────────

    async def _guard(
        self, action: str, pipeline: Awaitable[ActionResult],
    ) -> ActionResult:
        """Last line of defense: unanticipated faults never escape as exceptions."""
        try:
            return await pipeline
        except Exception:
            logger.error(
                f"Unhandled failure in {action}",
                extra={"action": action, "error_code": "INTERNAL_ERROR"},
                exc_info=True,
            )
            return ActionResult.failed(UNEXPECTED_FAILURE_MESSAGE)

    def _invalidate_and_navigate(self) -> ActionResult:
        self._cache.revalidate(self._paths.invoices)
        return ActionResult.navigate(self._paths.invoices)

    def _from_session(
        self, outcome: SessionOutcome, on_invalid: str, on_error: str,
    ) -> ActionResult:
        if outcome.kind == OutcomeKind.NAVIGATE:
            return ActionResult.navigate(
                outcome.redirect_to or self._paths.dashboard,
                session_token=outcome.session_token,
                session_expires_in=outcome.expires_in,
            )
        if outcome.kind == OutcomeKind.INVALID_CREDENTIALS:
            return ActionResult.failed(on_invalid)
        return ActionResult.failed(on_error)

    @staticmethod
    def _wrote_one_row(outcome: GatewayOutcome) -> bool:
        return outcome.ok and outcome.row_count == 1

    @staticmethod
    def _log_invalid(action: str, exc: FormValidationError) -> None:
        logger.info(
            f"{action}: {exc.message}",
            extra={"action": action, "error_code": exc.code},
        )

    @staticmethod
    def _warn_if_no_rows(
        action: str, invoice_id: InvoiceId, outcome: GatewayOutcome,
    ) -> None:
        if outcome.row_count == 0:
            logger.warning(
                f"{action}: no invoice with id {invoice_id}",
                extra={"action": action},
            )
