"""Auth Routes — HTTP shape of sign-in, registration, sign-out, and route checks."""

from sqlalchemy import func, select

from dashboard_actions.config import get_settings
from dashboard_actions.models.user import User
from dashboard_actions.services.mutation_orchestrator import EMAIL_EXISTS_MESSAGE

COOKIE = get_settings().session_cookie_name


async def test_login_success_redirects_with_cookie(client, seeded):
    response = await client.post(
        "/api/v1/auth/login",
        data={"email": "ada@example.com", "password": "secret123"},
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard"
    assert COOKIE in response.cookies


async def test_login_wrong_password_returns_message(client, seeded):
    response = await client.post(
        "/api/v1/auth/login",
        data={"email": "ada@example.com", "password": "not-it-at-all"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Invalid credentials."
    assert body["success"] is False
    assert "session_token" not in body
    assert COOKIE not in response.cookies


async def test_register_creates_user_and_signs_in(client, test_db):
    response = await client.post(
        "/api/v1/auth/register",
        data={
            "email": "grace@example.com",
            "name": "Grace",
            "password": "secret123",
            "confirm-password": "secret123",
        },
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard"
    stored = (await test_db.execute(select(User))).scalar_one()
    assert stored.email == "grace@example.com"
    assert stored.password != "secret123"


async def test_register_duplicate_email(client, seeded, test_db):
    response = await client.post(
        "/api/v1/auth/register",
        data={
            "email": "ada@example.com",
            "name": "Ada Again",
            "password": "secret123",
            "confirm-password": "secret123",
        },
    )

    assert response.status_code == 200
    assert response.json()["message"] == EMAIL_EXISTS_MESSAGE
    count = (await test_db.execute(select(func.count()).select_from(User))).scalar()
    assert count == 1


async def test_register_mismatch_returns_field_errors(client):
    response = await client.post(
        "/api/v1/auth/register",
        data={
            "email": "grace@example.com",
            "name": "Grace",
            "password": "secret123",
            "confirm-password": "secret999",
        },
    )

    body = response.json()
    assert body["errors"] == {"confirmPassword": ["Password does not match"]}


async def test_logout_clears_cookie(client):
    response = await client.post("/api/v1/auth/logout")

    assert response.status_code == 204
    assert COOKIE in response.headers.get("set-cookie", "")


async def test_route_check_anonymous_dashboard_redirects(client):
    response = await client.get(
        "/api/v1/auth/route-check", params={"path": "/dashboard/invoices"},
    )

    assert response.json() == {"allowed": False, "redirect_to": "/login"}


async def test_route_check_signed_in_login_redirects(client, auth_headers):
    response = await client.get(
        "/api/v1/auth/route-check", params={"path": "/login"}, headers=auth_headers,
    )

    assert response.json() == {"allowed": False, "redirect_to": "/dashboard"}
