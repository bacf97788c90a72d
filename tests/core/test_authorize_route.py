"""Route Authorization — dashboard requires login; signed-in users skip auth pages."""

from dashboard_actions.core.authorize_route import authorize_request


def _decide(path, logged_in):
    return authorize_request(
        path, logged_in, dashboard_path="/dashboard", login_path="/login",
    )


def test_dashboard_requires_login():
    decision = _decide("/dashboard/invoices", False)
    assert decision.allowed is False
    assert decision.redirect_to == "/login"


def test_dashboard_allowed_when_logged_in():
    assert _decide("/dashboard", True).allowed is True
    assert _decide("/dashboard/invoices/create", True).allowed is True


def test_logged_in_user_redirected_from_login_page():
    decision = _decide("/login", True)
    assert decision.allowed is False
    assert decision.redirect_to == "/dashboard"


def test_anonymous_user_may_visit_public_pages():
    assert _decide("/login", False).allowed is True
    assert _decide("/register", False).allowed is True


def test_prefix_match_respects_path_segments():
    assert _decide("/dashboards-public", False).allowed is True
