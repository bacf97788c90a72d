"""Request Dependencies — wires per-request collaborators for the action routes.

Invariants:
    - One PersistenceGateway per request, bound to that request's AsyncSession
    - The PathRevalidator is per-process (app.state), shared by all requests
    - require_session accepts a bearer token or the session cookie; anything else -> 401

Design Decisions:
    - FastAPI Depends over module globals: routes stay thin, tests override get_db only
"""

from typing import Any

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard_actions.config import get_settings
from dashboard_actions.infrastructure.database import get_db
from dashboard_actions.infrastructure.persistence_gateway import PersistenceGateway
from dashboard_actions.infrastructure.revalidation import PathRevalidator
from dashboard_actions.services.mutation_orchestrator import (
    MutationOrchestrator, navigation_paths_from,
)
from dashboard_actions.services.session_establisher import (
    SessionClaims, SessionEstablisher, decode_session_token, session_settings_from,
)


def get_revalidator(request: Request) -> PathRevalidator:
    revalidator = getattr(request.app.state, "revalidator", None)
    if revalidator is None:
        revalidator = PathRevalidator()
        request.app.state.revalidator = revalidator
    return revalidator


async def get_orchestrator(
    db: AsyncSession = Depends(get_db),
    revalidator: PathRevalidator = Depends(get_revalidator),
) -> MutationOrchestrator:
    settings = get_settings()
    gateway = PersistenceGateway(db)
    return MutationOrchestrator(
        gateway=gateway,
        sessions=SessionEstablisher(gateway, session_settings_from(settings)),
        cache=revalidator,
        paths=navigation_paths_from(settings),
        hash_rounds=settings.password_hash_rounds,
    )


async def read_form(request: Request) -> dict[str, Any]:
    """Submitted form fields as plain strings. File parts are ignored."""
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def current_session(
    request: Request, authorization: str | None,
) -> SessionClaims | None:
    settings = get_settings()
    token = _bearer_token(authorization) or request.cookies.get(
        settings.session_cookie_name,
    )
    if not token:
        return None
    return decode_session_token(token, session_settings_from(settings))


async def require_session(
    request: Request,
    authorization: str | None = Header(None, alias="Authorization"),
) -> SessionClaims:
    claims = current_session(request, authorization)
    if claims is None:
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED, detail="Not signed in",
        )
    return claims
