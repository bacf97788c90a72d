"""Auth Routes — sign-in, registration, sign-out, and page authorization checks.

Invariants:
    - login/register success -> 303 to the dashboard with the session cookie set
    - login/register failure -> 200 JSON ActionResult (message, optional field errors)
    - route-check answers "proceed or redirect" for a page path; it never mutates the session

Design Decisions:
    - Form-encoded bodies: the same field names the presentation forms submit
      (email, name, password, confirm-password)
"""

from fastapi import APIRouter, Depends, Header, Query, Request, Response, status

from dashboard_actions.api.dependencies import (
    current_session, get_orchestrator, read_form,
)
from dashboard_actions.api.responses import action_response, clear_session_cookie
from dashboard_actions.config import get_settings
from dashboard_actions.core.authorize_route import authorize_request
from dashboard_actions.services.mutation_orchestrator import MutationOrchestrator

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login")
async def login(
    request: Request,
    orchestrator: MutationOrchestrator = Depends(get_orchestrator),
):
    """Authenticate with e-mail + password."""
    result = await orchestrator.authenticate(None, await read_form(request))
    return action_response(result, get_settings())


@router.post("/register")
async def register(
    request: Request,
    orchestrator: MutationOrchestrator = Depends(get_orchestrator),
):
    """Create an account, then sign it in."""
    result = await orchestrator.register(None, await read_form(request))
    return action_response(result, get_settings())


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response):
    clear_session_cookie(response, get_settings())


@router.get("/route-check")
async def route_check(
    request: Request,
    path: str = Query(..., min_length=1),
    authorization: str | None = Header(None, alias="Authorization"),
):
    """Should a page request for `path` proceed, or redirect?"""
    settings = get_settings()
    decision = authorize_request(
        path,
        is_logged_in=current_session(request, authorization) is not None,
        dashboard_path=settings.dashboard_path,
        login_path=settings.login_path,
    )
    return {"allowed": decision.allowed, "redirect_to": decision.redirect_to}
