"""Action Responses — turns an ActionResult into an HTTP response.

Invariants:
    - redirect_to set -> 303 See Other to that location (plus session cookie when a token came back)
    - otherwise -> 200 JSON of the ActionResult; the form re-renders from it
    - The session token never appears in a response body
"""

from fastapi import Response, status
from fastapi.responses import JSONResponse, RedirectResponse

from dashboard_actions.config import Settings
from dashboard_actions.schemas.action_result import ActionResult


def set_session_cookie(
    response: Response, token: str, expires_in: int | None, settings: Settings,
) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        max_age=expires_in,
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def action_response(result: ActionResult, settings: Settings) -> Response:
    if result.is_navigation:
        response = RedirectResponse(
            result.redirect_to, status_code=status.HTTP_303_SEE_OTHER,
        )
        if result.session_token:
            set_session_cookie(
                response, result.session_token, result.session_expires_in, settings,
            )
        return response
    return JSONResponse(content=result.model_dump(mode="json"))
