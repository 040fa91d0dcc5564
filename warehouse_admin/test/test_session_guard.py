"""
Tests for route guarding decisions and redirect idempotence
"""
import pytest

from warehouse_admin.buisness.navigator import RequestNavigator
from warehouse_admin.buisness.session_guard import GuardDecision, RoutePolicy, SessionGuard, decide
from warehouse_admin.buisness.session_store import SessionStore
from warehouse_admin.data.session import Session, SessionUser

ADMIN = SessionUser(id=1, username="admin")
POLICY = RoutePolicy()

BOOTING = Session.booting()
ANONYMOUS = Session(identity=None, loading=False)
SIGNED_IN = Session(identity=ADMIN, loading=False)


@pytest.mark.parametrize("path", ["/", "/login", "/dashboard/imports", "/about"])
@pytest.mark.parametrize("identity", [None, ADMIN])
def test_loading_never_redirects(path, identity):
    decision = decide(Session(identity=identity, loading=True), path, POLICY)
    assert decision == GuardDecision.loading()
    assert not decision.is_redirect


@pytest.mark.parametrize("path", ["/", "/dashboard", "/dashboard/imports", "/dashboard/reports/expenses"])
def test_anonymous_on_protected_route_goes_to_login(path):
    assert decide(ANONYMOUS, path, POLICY) == GuardDecision.redirect("/login")


@pytest.mark.parametrize("path", ["/login", "/login/verify", "/healthz", "/dashboards"])
def test_anonymous_on_open_route_renders(path):
    assert decide(ANONYMOUS, path, POLICY) == GuardDecision.allow()


@pytest.mark.parametrize("path", ["/", "/login", "/login/verify"])
def test_signed_in_on_login_or_root_goes_to_landing(path):
    assert decide(SIGNED_IN, path, POLICY) == GuardDecision.redirect("/dashboard/imports")


@pytest.mark.parametrize("path", ["/dashboard/imports", "/dashboard/users", "/healthz"])
def test_signed_in_on_other_routes_renders(path):
    assert decide(SIGNED_IN, path, POLICY) == GuardDecision.allow()


def test_custom_landing_path():
    policy = RoutePolicy(landing_path="/dashboard/inventory")
    assert decide(SIGNED_IN, "/login", policy).target == "/dashboard/inventory"


def test_missing_path_is_treated_as_empty():
    assert decide(ANONYMOUS, None, POLICY) == GuardDecision.allow()


def test_route_policy_prefix_matching():
    assert POLICY.requires_auth("/dashboard")
    assert POLICY.requires_auth("/dashboard/")
    assert not POLICY.requires_auth("/dashboard-old")
    assert POLICY.is_guarded("/login")
    assert not POLICY.is_guarded("/healthz")


def test_guard_requests_exactly_one_login_redirect():
    navigator = RequestNavigator("/dashboard/imports")
    guard = SessionGuard(navigator, POLICY)

    guard.evaluate(ANONYMOUS)
    guard.evaluate(ANONYMOUS)
    guard.evaluate(ANONYMOUS)

    assert navigator.push_count == 1
    assert navigator.pending_path == "/login"


def test_guard_requests_exactly_one_landing_redirect():
    navigator = RequestNavigator("/login")
    guard = SessionGuard(navigator, POLICY)

    for _ in range(5):
        guard.evaluate(SIGNED_IN)

    assert navigator.push_count == 1
    assert navigator.pending_path == "/dashboard/imports"


def test_guard_waits_while_loading():
    navigator = RequestNavigator("/dashboard/imports")
    guard = SessionGuard(navigator, POLICY)

    guard.evaluate(BOOTING)

    assert navigator.push_count == 0
    assert guard.decision == GuardDecision.loading()


def test_guard_attached_to_store_reacts_to_resolution():
    navigator = RequestNavigator("/")
    store = SessionStore()
    guard = SessionGuard(navigator, POLICY)

    guard.attach(store)
    assert navigator.push_count == 0, "No redirect before the session resolves"

    store.resolve(ADMIN)
    assert navigator.pending_path == "/dashboard/imports"

    store.logout()
    assert navigator.pending_path == "/login"
    assert navigator.push_count == 2


def test_guard_detaches_cleanly():
    navigator = RequestNavigator("/dashboard/imports")
    store = SessionStore()
    guard = SessionGuard(navigator, POLICY)

    release = guard.attach(store)
    release()
    store.resolve(None)

    assert navigator.push_count == 0


def test_guard_attach_evaluates_current_snapshot():
    navigator = RequestNavigator("/dashboard/imports")
    store = SessionStore()
    store.resolve(None)

    SessionGuard(navigator, POLICY).attach(store)

    assert navigator.pending_path == "/login"
