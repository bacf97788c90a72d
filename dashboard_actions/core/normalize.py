"""Domain Normalization — turns validated form values into storage-ready values.

Invariants:
    - Only ever called on data that already passed validate_form
    - validate_form bounds amounts to MAX_AMOUNT_CENTS, so quantize never overflows
    - to_minor_units is deterministic: same Decimal in, same int out
    - hash_password output is a salted bcrypt hash; the plaintext is not kept anywhere
    - today_iso is calendar-day precision, UTC, "YYYY-MM-DD"

Design Decisions:
    - Decimal with ROUND_HALF_UP over float * 100: 19.99 must become 1999, not 1998.9999
    - Clock injected as an optional datetime: callers and tests pin the day without patching
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

import bcrypt

from dashboard_actions.core.domain_types import AmountCents, IsoDate


CENTS_PER_UNIT = 100
# invoices.amount is a 32-bit INTEGER
MAX_AMOUNT_CENTS = 2**31 - 1
DEFAULT_HASH_ROUNDS = 10


def to_minor_units(amount: Decimal) -> AmountCents:
    """Dollars -> integer cents, rounded to the nearest cent."""
    cents = (amount * CENTS_PER_UNIT).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return AmountCents(int(cents))


def from_minor_units(amount_cents: int) -> Decimal:
    """Integer cents -> exact Decimal dollars."""
    return Decimal(amount_cents) / CENTS_PER_UNIT


def hash_password(password: str, rounds: int = DEFAULT_HASH_ROUNDS) -> str:
    """Salted one-way hash with a fixed cost factor."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def today_iso(now: datetime | None = None) -> IsoDate:
    """Current date truncated to the day, canonical ISO form."""
    moment = now or datetime.now(timezone.utc)
    return IsoDate(moment.date().isoformat())
