"""Action Result — the uniform value every mutation action returns to its caller.

Invariants:
    - Exactly one shape: {success, message, errors, redirect_to}
    - errors present -> the form re-renders with per-field annotations
    - redirect_to present -> the action succeeded and the caller must navigate
    - session_token is never serialized; the HTTP layer moves it into a cookie

Design Decisions:
    - Navigation is data, not an exception: callers read redirect_to instead of
      catching a control-flow signal (ADR: a redirect is not an error)
"""

from pydantic import BaseModel, Field


class ActionResult(BaseModel):
    success: bool = False
    message: str | None = None
    errors: dict[str, list[str]] | None = None
    redirect_to: str | None = None
    session_token: str | None = Field(default=None, exclude=True)
    session_expires_in: int | None = Field(default=None, exclude=True)

    @classmethod
    def failed(
        cls, message: str, errors: dict[str, list[str]] | None = None,
    ) -> "ActionResult":
        return cls(message=message, errors=errors)

    @classmethod
    def succeeded(cls, message: str) -> "ActionResult":
        return cls(success=True, message=message)

    @classmethod
    def navigate(
        cls, redirect_to: str,
        session_token: str | None = None, session_expires_in: int | None = None,
    ) -> "ActionResult":
        return cls(
            success=True, redirect_to=redirect_to,
            session_token=session_token, session_expires_in=session_expires_in,
        )

    @property
    def is_navigation(self) -> bool:
        return self.redirect_to is not None
