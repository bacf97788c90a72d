"""Form Validation — schema checks on raw, untyped form input before any mutation.

Invariants:
    - validate_form is PURE: no IO, no logging, no hashing
    - ALL field errors are collected and returned together, never just the first
    - Error keys are the presentation field names (customerId, confirmPassword, ...)
    - A password mismatch is always reported on confirmPassword, even when other fields fail
    - A valid amount stores as 1..MAX_AMOUNT_CENTS whole cents; a valid password fits bcrypt

Design Decisions:
    - Pydantic models for per-field shape/type rules: error collection across fields comes free
    - Cross-field refinements as an ordered (field, predicate, message) table evaluated on the
      raw submission: they run independently of per-field failures (ADR: no hidden skips)
    - PydanticCustomError for business messages: avoids the "Value error, " prefix of ValueError
"""

from collections.abc import Callable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, NamedTuple

from pydantic import BaseModel, EmailStr, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from dashboard_actions.core.domain_types import CustomerId, FormSchema, InvoiceStatus
from dashboard_actions.core.errors import FormValidationError
from dashboard_actions.core.normalize import (
    MAX_AMOUNT_CENTS, from_minor_units, to_minor_units,
)


CUSTOMER_REQUIRED_MESSAGE = "Please select a customer."
AMOUNT_MESSAGE = "Please enter an amount greater than $0."
STATUS_MESSAGE = "Please select an invoice status."
PASSWORD_MISMATCH_MESSAGE = "Password does not match"
MIN_PASSWORD_LENGTH = 6
# bcrypt only accepts the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72
PASSWORD_TOO_LONG_MESSAGE = f"Password must be at most {MAX_PASSWORD_BYTES} bytes."
MAX_AMOUNT = from_minor_units(MAX_AMOUNT_CENTS)
AMOUNT_TOO_LARGE_MESSAGE = f"Please enter an amount no greater than ${MAX_AMOUNT:,}."


# ─── Validated Value Objects ─────────────────────────────────────

def _check_password_bytes(password: str) -> str:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise PydanticCustomError("password_too_long", PASSWORD_TOO_LONG_MESSAGE)
    return password


class CredentialsForm(BaseModel):
    """Sign-in submission. Lives for one request only."""
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)

    @field_validator("password")
    @classmethod
    def password_fits_hash(cls, v: str) -> str:
        return _check_password_bytes(v)


class RegistrationForm(BaseModel):
    """Account registration submission."""
    email: EmailStr
    name: str = Field(min_length=1)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    confirm_password: str = Field(alias="confirmPassword", min_length=MIN_PASSWORD_LENGTH)

    @field_validator("password")
    @classmethod
    def password_fits_hash(cls, v: str) -> str:
        return _check_password_bytes(v)


class InvoiceForm(BaseModel):
    """Invoice create/update submission. amount is decimal dollars here."""
    customer_id: CustomerId = Field(alias="customerId")
    amount: Decimal
    status: InvoiceStatus

    @field_validator("customer_id", mode="before")
    @classmethod
    def require_customer(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise PydanticCustomError("customer_required", CUSTOMER_REQUIRED_MESSAGE)
        return v.strip()

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_positive_amount(cls, v: Any) -> Decimal:
        amount = _coerce_decimal(v)
        if amount is None or amount <= 0:
            raise PydanticCustomError("amount_not_positive", AMOUNT_MESSAGE)
        if amount > MAX_AMOUNT:
            raise PydanticCustomError("amount_too_large", AMOUNT_TOO_LARGE_MESSAGE)
        # stored in whole cents: sub-cent amounts round to zero
        if to_minor_units(amount) < 1:
            raise PydanticCustomError("amount_not_positive", AMOUNT_MESSAGE)
        return amount

    @field_validator("status", mode="before")
    @classmethod
    def require_known_status(cls, v: Any) -> InvoiceStatus:
        try:
            return InvoiceStatus(v)
        except ValueError:
            raise PydanticCustomError("status_required", STATUS_MESSAGE) from None


def _coerce_decimal(v: Any) -> Decimal | None:
    """Numeric coercion of a form value. Blank input coerces to zero."""
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, str) and not v.strip():
        return Decimal(0)
    try:
        amount = Decimal(str(v).strip())
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


# ─── Cross-field Refinements ─────────────────────────────────────

class Refinement(NamedTuple):
    """One rule over the raw submission. predicate returns True when satisfied."""
    field: str
    predicate: Callable[[Mapping[str, Any]], bool]
    message: str


def _passwords_match(raw: Mapping[str, Any]) -> bool:
    return raw.get("confirmPassword") == raw.get("password")


_REFINEMENTS: dict[FormSchema, tuple[Refinement, ...]] = {
    FormSchema.CREDENTIALS: (),
    FormSchema.REGISTRATION: (
        Refinement("confirmPassword", _passwords_match, PASSWORD_MISMATCH_MESSAGE),
    ),
    FormSchema.INVOICE_CREATE: (),
    FormSchema.INVOICE_UPDATE: (),
}


# ─── Schema Registry ─────────────────────────────────────────────

# schema key -> submitted form field name
FORM_FIELDS: dict[FormSchema, dict[str, str]] = {
    FormSchema.CREDENTIALS: {"email": "email", "password": "password"},
    FormSchema.REGISTRATION: {
        "email": "email",
        "name": "name",
        "password": "password",
        "confirmPassword": "confirm-password",
    },
    FormSchema.INVOICE_CREATE: {
        "customerId": "customerId", "amount": "amount", "status": "status",
    },
    FormSchema.INVOICE_UPDATE: {
        "customerId": "customerId", "amount": "amount", "status": "status",
    },
}

_MODELS: dict[FormSchema, type[BaseModel]] = {
    FormSchema.CREDENTIALS: CredentialsForm,
    FormSchema.REGISTRATION: RegistrationForm,
    FormSchema.INVOICE_CREATE: InvoiceForm,
    FormSchema.INVOICE_UPDATE: InvoiceForm,
}


def read_form_fields(
    schema: FormSchema, form: Mapping[str, Any],
) -> dict[str, Any]:
    """Pick the schema's fields out of a submission. Missing fields become None."""
    return {
        key: form.get(form_name)
        for key, form_name in FORM_FIELDS[schema].items()
    }


def collect_field_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Flatten pydantic errors into field -> messages, preserving order."""
    errors: dict[str, list[str]] = {}
    for e in exc.errors():
        key = str(e["loc"][0]) if e["loc"] else "_form"
        messages = errors.setdefault(key, [])
        if e["msg"] not in messages:
            messages.append(e["msg"])
    return errors


def validate_form(schema: FormSchema, form: Mapping[str, Any]) -> BaseModel:
    """Validate a raw submission against a named schema.

    Returns the typed value object, or raises FormValidationError carrying
    every field error found (per-field rules and refinements together).
    """
    raw = read_form_fields(schema, form)
    errors: dict[str, list[str]] = {}
    validated: BaseModel | None = None
    try:
        validated = _MODELS[schema].model_validate(raw)
    except ValidationError as exc:
        errors = collect_field_errors(exc)

    for rule in _REFINEMENTS[schema]:
        if not rule.predicate(raw):
            messages = errors.setdefault(rule.field, [])
            if rule.message not in messages:
                messages.append(rule.message)

    if errors or validated is None:
        raise FormValidationError(errors)
    return validated
