"""Invoice ORM — billing records mutated by create/update/delete actions.

Invariants:
    - amount is integer cents (minor currency units), never dollars
    - date is "YYYY-MM-DD", assigned on insert and never updated
    - status is one of InvoiceStatus values ("pending" | "paid")

Design Decisions:
    - date stored as a 10-char string: mirrors the canonical form the normalizer produces
"""

import uuid

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from dashboard_actions.db.base import Base


class Invoice(Base):
    __tablename__ = "invoices"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    customer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("customers.id"), nullable=False,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)
