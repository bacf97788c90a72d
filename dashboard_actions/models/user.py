"""User ORM — accounts created by registration.

Invariants:
    - id is a generated string UUID
    - email is UNIQUE at the store level (duplicate insert -> unique violation)
    - password column holds a bcrypt hash, never plaintext
    - Never updated or deleted by the action layer
"""

import uuid

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dashboard_actions.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)
