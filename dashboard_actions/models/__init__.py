"""ORM Models — SQLAlchemy declarative models for users, customers, invoices.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from dashboard_actions.models.user import User  # noqa: F401
from dashboard_actions.models.customer import Customer  # noqa: F401
from dashboard_actions.models.invoice import Invoice  # noqa: F401
