"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, InvoiceId, CustomerId wrap the 36-char string ids stored in the tables
    - AmountCents is always an integer count of minor currency units
    - All valid states encoded as Enums — no raw string matching
    - OutcomeKind is the ONE result taxonomy shared by every collaborator

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Outcomes are frozen dataclasses with a kind tag: callers switch on kind instead of
      inspecting exception identity (ADR: a redirect is not an error)
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
InvoiceId = NewType("InvoiceId", str)
CustomerId = NewType("CustomerId", str)


# ─── Value Types ─────────────────────────────────────────────────

AmountCents = NewType("AmountCents", int)
IsoDate = NewType("IsoDate", str)                       # YYYY-MM-DD


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice states — maps to DB `status` column."""
    PENDING = "pending"
    PAID = "paid"


class OperationKind(str, Enum):
    """Write operations the persistence gateway accepts."""
    INSERT_USER = "insert_user"
    INSERT_INVOICE = "insert_invoice"
    UPDATE_INVOICE = "update_invoice"
    DELETE_INVOICE = "delete_invoice"


class OutcomeKind(str, Enum):
    """Tagged result of a persistence or session call."""
    SUCCESS = "success"
    CONFLICT = "conflict"
    ERROR = "error"
    INVALID_CREDENTIALS = "invalid_credentials"
    NAVIGATE = "navigate"


class FormSchema(str, Enum):
    """Named validation schemas for raw form input."""
    CREDENTIALS = "credentials"
    REGISTRATION = "registration"
    INVOICE_CREATE = "invoice_create"
    INVOICE_UPDATE = "invoice_update"


# ─── Storage-ready Records ───────────────────────────────────────

@dataclass(frozen=True)
class NewUser:
    """User row ready for insert. password_hash is never plaintext."""
    email: str
    name: str
    password_hash: str


@dataclass(frozen=True)
class NewInvoice:
    """Invoice row ready for insert. date is server-assigned."""
    customer_id: CustomerId
    amount_cents: AmountCents
    status: InvoiceStatus
    date: IsoDate


@dataclass(frozen=True)
class InvoiceChanges:
    """Mutable invoice columns. id and date are never updated."""
    customer_id: CustomerId
    amount_cents: AmountCents
    status: InvoiceStatus


@dataclass(frozen=True)
class StoredUser:
    """User row as read back for credential checks."""
    id: UserId
    email: str
    name: str
    password_hash: str


# ─── Outcomes ────────────────────────────────────────────────────

@dataclass(frozen=True)
class GatewayOutcome:
    """Result of exactly one statement against the store."""
    kind: OutcomeKind
    operation: OperationKind
    row_count: int = 0
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS


@dataclass(frozen=True)
class SessionOutcome:
    """Result of a sign-in attempt. NAVIGATE means the session is established."""
    kind: OutcomeKind
    redirect_to: str | None = None
    session_token: str | None = None
    expires_in: int | None = None
    detail: str | None = None
