"""Customer ORM — read-only from the action layer; referenced by invoices.customer_id."""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from dashboard_actions.db.base import Base


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str] = mapped_column(String(255), nullable=False, default="")
