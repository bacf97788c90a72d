"""Route Authorization — decides whether a page request proceeds or is redirected.

Invariants:
    - authorize_request is PURE: returns a decision, never touches the session
    - Only "logged in vs not" is considered; there is no role model
    - Dashboard pages require login; signed-in users skip the login/register pages
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RouteDecision:
    allowed: bool
    redirect_to: str | None = None


def _is_under(path: str, prefix: str) -> bool:
    prefix = prefix.rstrip("/")
    return path == prefix or path.startswith(prefix + "/")


def authorize_request(
    path: str, is_logged_in: bool, dashboard_path: str, login_path: str,
) -> RouteDecision:
    """Rule: dashboard needs a session; a session sends everything else to the dashboard."""
    if _is_under(path, dashboard_path):
        if is_logged_in:
            return RouteDecision(allowed=True)
        return RouteDecision(allowed=False, redirect_to=login_path)
    if is_logged_in:
        return RouteDecision(allowed=False, redirect_to=dashboard_path)
    return RouteDecision(allowed=True)
