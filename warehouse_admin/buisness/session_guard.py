"""
Session guard
Decides, per route, whether to render, show the loading placeholder, or redirect.

Rules, in order:
- session still loading: loading placeholder, never a redirect
- no identity on a route that requires login: redirect to the login route
- identity on the login or root route: redirect to the landing route
- anything else: render

Redirect loops are not detected; the route policy must keep the rules terminating.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from warehouse_admin.data.session import Session
from warehouse_admin.utils.logger import get_logger

logger = get_logger("warehouse_admin.buisness.session_guard")


@dataclass(frozen=True)
class RoutePolicy:
    login_path: str = "/login"
    root_path: str = "/"
    landing_path: str = "/dashboard/imports"
    protected_prefixes: Tuple[str, ...] = ("/dashboard",)

    def requires_auth(self, path: str) -> bool:
        """The root route counts as protected: it is the home redirector"""
        if path == self.root_path:
            return True
        return any(
            path == prefix or path.startswith(prefix.rstrip("/") + "/")
            for prefix in self.protected_prefixes
        )

    def redirects_authenticated(self, path: str) -> bool:
        """Root and the login pages (including the verification step)"""
        if path in (self.login_path, self.root_path):
            return True
        return path.startswith(self.login_path.rstrip("/") + "/")

    def is_guarded(self, path: str) -> bool:
        """Routes whose rendering depends on the session at all"""
        return self.requires_auth(path) or self.redirects_authenticated(path)


@dataclass(frozen=True)
class GuardDecision:
    ALLOW = "allow"
    LOADING = "loading"
    REDIRECT = "redirect"

    action: str
    target: Optional[str] = None

    @classmethod
    def allow(cls) -> 'GuardDecision':
        return cls(cls.ALLOW)

    @classmethod
    def loading(cls) -> 'GuardDecision':
        return cls(cls.LOADING)

    @classmethod
    def redirect(cls, target: str) -> 'GuardDecision':
        return cls(cls.REDIRECT, target)

    @property
    def is_redirect(self) -> bool:
        return self.action == self.REDIRECT


def decide(session: Session, path: Optional[str], policy: RoutePolicy) -> GuardDecision:
    """Pure decision for one (session, path) pair"""
    path = path or ""

    # Identity is not trusted until resolution finishes
    if session.loading:
        return GuardDecision.loading()

    if session.identity is None:
        if policy.requires_auth(path):
            return GuardDecision.redirect(policy.login_path)
        return GuardDecision.allow()

    if policy.redirects_authenticated(path):
        return GuardDecision.redirect(policy.landing_path)
    return GuardDecision.allow()


class SessionGuard:
    """
    Applies decide() whenever the session changes and requests redirects
    through the navigator.

    A redirect is requested once per distinct (session, path) pair, so
    re-evaluating an unchanged session never issues another push.
    """

    def __init__(self, navigator, policy: Optional[RoutePolicy] = None):
        self.navigator = navigator
        self.policy = policy or RoutePolicy()
        self._last_redirect_key = None
        self.decision = GuardDecision.loading()

    def attach(self, store) -> Callable[[], None]:
        """Subscribe to a SessionStore and evaluate its current snapshot"""
        unsubscribe = store.subscribe(self.evaluate)
        self.evaluate(store.session)
        return unsubscribe

    def evaluate(self, session: Session) -> GuardDecision:
        path = self.navigator.current_path
        decision = decide(session, path, self.policy)
        self.decision = decision

        if decision.is_redirect:
            key = (session, path, decision.target)
            if key != self._last_redirect_key:
                self._last_redirect_key = key
                logger.debug(f"Guard redirect {path!r} -> {decision.target!r}")
                self.navigator.push(decision.target)
        return decision
