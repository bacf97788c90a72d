"""Session Establisher — verifies credentials and issues a signed session token.

Invariants:
    - Unknown e-mail and wrong password are the SAME outcome (INVALID_CREDENTIALS)
    - Store or token failures are OutcomeKind.ERROR, never INVALID_CREDENTIALS and never NAVIGATE
    - Success is OutcomeKind.NAVIGATE: the session exists and the caller must redirect
    - The plaintext password is only passed to bcrypt.checkpw; it is never logged or stored

Design Decisions:
    - JWT (HS256) as the opaque session: stateless "logged in" checks from the cookie
    - Token helpers live beside establish(): one module owns the session format
    - AuthenticationError is raised inside the sign-in steps and mapped to an outcome in
      establish(); it never crosses into the orchestrator
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from dashboard_actions.config import Settings
from dashboard_actions.core.domain_types import (
    OutcomeKind, SessionOutcome, StoredUser, UserId,
)
from dashboard_actions.core.errors import (
    AuthenticationError, AuthFailureKind, ErrorContext, PersistenceError,
)
from dashboard_actions.core.repository_protocols import UserLookup

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"


@dataclass(frozen=True)
class SessionSettings:
    secret: str
    ttl_minutes: int
    redirect_to: str


@dataclass(frozen=True)
class SessionClaims:
    user_id: UserId
    email: str


def session_settings_from(settings: Settings) -> SessionSettings:
    return SessionSettings(
        secret=settings.session_secret,
        ttl_minutes=settings.session_ttl_minutes,
        redirect_to=settings.dashboard_path,
    )


def check_password(password: str, password_hash: str) -> bool:
    """Compare plaintext to a stored bcrypt hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_session_token(
    user: StoredUser, settings: SessionSettings, now: datetime | None = None,
) -> tuple[str, int]:
    """Signed token for an authenticated user. Returns (token, expires_in seconds)."""
    issued = now or datetime.now(timezone.utc)
    expires_in = settings.ttl_minutes * 60
    payload = {
        "sub": user.id,
        "email": user.email,
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(seconds=expires_in)).timestamp()),
    }
    token = jwt.encode(payload, settings.secret, algorithm=JWT_ALGORITHM)
    return token, expires_in


def decode_session_token(token: str, settings: SessionSettings) -> SessionClaims | None:
    """Claims for a valid, unexpired token; None otherwise."""
    try:
        payload = jwt.decode(token, settings.secret, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None
    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        return None
    return SessionClaims(user_id=UserId(user_id), email=email)


class SessionEstablisher:
    """Credential check + session issue. Implements SessionEstablisherLike."""

    def __init__(self, users: UserLookup, settings: SessionSettings):
        self._users = users
        self._settings = settings

    async def establish(self, email: str, password: str) -> SessionOutcome:
        try:
            user = await self._verify(email, password)
            token, expires_in = self._issue(user)
        except AuthenticationError as e:
            return self._rejected(e)

        logger.info("Session established", extra={"outcome": OutcomeKind.NAVIGATE.value})
        return SessionOutcome(
            OutcomeKind.NAVIGATE,
            redirect_to=self._settings.redirect_to,
            session_token=token,
            expires_in=expires_in,
        )

    async def _verify(self, email: str, password: str) -> StoredUser:
        try:
            user = await self._users.find_user_by_email(email)
        except PersistenceError as e:
            raise AuthenticationError(
                AuthFailureKind.PROVIDER_ERROR,
                ErrorContext(debug_info={"detail": e.message}),
            ) from e

        if user is None or not await asyncio.to_thread(
            check_password, password, user.password_hash,
        ):
            raise AuthenticationError(AuthFailureKind.INVALID_CREDENTIALS)
        return user

    def _issue(self, user: StoredUser) -> tuple[str, int]:
        try:
            return create_session_token(user, self._settings)
        except jwt.PyJWTError as e:
            raise AuthenticationError(
                AuthFailureKind.PROVIDER_ERROR,
                ErrorContext(debug_info={"detail": f"token issue failed: {e}"}),
            ) from e

    @staticmethod
    def _rejected(error: AuthenticationError) -> SessionOutcome:
        """Map a sign-in failure onto its outcome. Only provider faults log at ERROR."""
        if error.kind == AuthFailureKind.INVALID_CREDENTIALS:
            logger.info("Sign-in rejected", extra={"error_code": error.code})
            return SessionOutcome(OutcomeKind.INVALID_CREDENTIALS)

        detail = (error.context.debug_info or {}).get("detail")
        logger.error(
            f"{error.message}: {detail}", extra={"error_code": error.code},
        )
        return SessionOutcome(OutcomeKind.ERROR, detail=detail)
