"""API test fixtures — ASGI client over the in-memory database, plus session helpers."""

import pytest
from httpx import ASGITransport, AsyncClient

from dashboard_actions.config import get_settings
from dashboard_actions.core.domain_types import StoredUser, UserId
from dashboard_actions.core.normalize import hash_password
from dashboard_actions.infrastructure.database import get_db
from dashboard_actions.main import app
from dashboard_actions.models.customer import Customer
from dashboard_actions.models.user import User
from dashboard_actions.services.session_establisher import (
    create_session_token, session_settings_from,
)


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def seeded(test_session_factory):
    """One customer and one user (ada@example.com / secret123)."""
    async with test_session_factory() as session:
        session.add(Customer(
            id="abc", name="Acme", email="billing@acme.test",
            image_url="/customers/acme.png",
        ))
        session.add(User(
            id="user-1", email="ada@example.com", name="Ada",
            password=hash_password("secret123", rounds=4),
        ))
        await session.commit()


@pytest.fixture
def auth_headers():
    user = StoredUser(UserId("user-1"), "ada@example.com", "Ada", "unused")
    token, _ = create_session_token(user, session_settings_from(get_settings()))
    return {"Authorization": f"Bearer {token}"}
