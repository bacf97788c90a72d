"""Persistence Gateway — the only write path to users and invoices.

Invariants:
    - Each operation executes exactly ONE statement, then commits
    - Every value is a bound parameter (SQLAlchemy Core constructs, no string building)
    - Unique violations -> OutcomeKind.CONFLICT; every other store failure -> OutcomeKind.ERROR
    - Never retries: inserts are not idempotent, a blind retry could duplicate rows
    - Failures roll the session back before the outcome is returned

Design Decisions:
    - Tagged GatewayOutcome over raised exceptions: the orchestrator switches on kind
      instead of inspecting driver error codes (ADR: one error taxonomy)
    - SQLSTATE 23505 for PostgreSQL, message match for SQLite (test engine)
"""

import logging

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import Executable

from dashboard_actions.core.domain_types import (
    GatewayOutcome, InvoiceChanges, InvoiceId, NewInvoice, NewUser,
    OperationKind, OutcomeKind, StoredUser, UserId,
)
from dashboard_actions.core.errors import ErrorContext, PersistenceError
from dashboard_actions.models.invoice import Invoice
from dashboard_actions.models.user import User

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the integrity failure is a UNIQUE constraint, not FK/NOT NULL/CHECK."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == UNIQUE_VIOLATION_SQLSTATE:
        return True
    return "UNIQUE constraint failed" in str(orig)


class PersistenceGateway:
    """Executes single parameterized statements and classifies the outcome."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def insert_user(self, user: NewUser) -> GatewayOutcome:
        return await self._execute(
            OperationKind.INSERT_USER,
            insert(User).values(
                email=user.email, password=user.password_hash, name=user.name,
            ),
        )

    async def insert_invoice(self, invoice: NewInvoice) -> GatewayOutcome:
        return await self._execute(
            OperationKind.INSERT_INVOICE,
            insert(Invoice).values(
                customer_id=invoice.customer_id,
                amount=invoice.amount_cents,
                status=invoice.status.value,
                date=invoice.date,
            ),
        )

    async def update_invoice(
        self, invoice_id: InvoiceId, changes: InvoiceChanges,
    ) -> GatewayOutcome:
        return await self._execute(
            OperationKind.UPDATE_INVOICE,
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(
                customer_id=changes.customer_id,
                amount=changes.amount_cents,
                status=changes.status.value,
            ),
        )

    async def delete_invoice(self, invoice_id: InvoiceId) -> GatewayOutcome:
        return await self._execute(
            OperationKind.DELETE_INVOICE,
            delete(Invoice).where(Invoice.id == invoice_id),
        )

    async def find_user_by_email(self, email: str) -> StoredUser | None:
        """Read-only lookup for credential checks. Raises PersistenceError on store failure."""
        try:
            result = await self._db.execute(
                select(User.id, User.email, User.name, User.password)
                .where(User.email == email),
            )
            row = result.one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"User lookup failed: {e}", extra={"operation": "select_user"})
            raise PersistenceError("User lookup failed", "select") from e
        if row is None:
            return None
        return StoredUser(
            id=UserId(row.id), email=row.email, name=row.name,
            password_hash=row.password,
        )

    async def _execute(
        self, operation: OperationKind, statement: Executable,
    ) -> GatewayOutcome:
        """Run one statement + commit. Expected failures become outcomes."""
        try:
            result = await self._db.execute(statement)
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            if is_unique_violation(e):
                logger.warning(
                    f"Unique constraint violated on {operation.value}",
                    extra={"operation": operation.value, "error_code": "CONFLICT"},
                )
                return GatewayOutcome(
                    OutcomeKind.CONFLICT, operation,
                    detail="unique constraint violated",
                )
            return self._failure(operation, e)
        except SQLAlchemyError as e:
            await self._db.rollback()
            return self._failure(operation, e)

        return GatewayOutcome(
            OutcomeKind.SUCCESS, operation, row_count=max(result.rowcount, 0),
        )

    def _failure(
        self, operation: OperationKind, exc: SQLAlchemyError,
    ) -> GatewayOutcome:
        error = PersistenceError(
            type(exc).__name__, operation.value,
            ErrorContext(operation=operation.value, debug_info={"driver": str(exc)}),
        )
        logger.error(
            error.message,
            extra={"operation": operation.value, "error_code": error.code},
        )
        return GatewayOutcome(OutcomeKind.ERROR, operation, detail=error.message)
