"""
Request gate
Runs before every request: builds the request's session store, guard, navigator
and viewport observer, resolves the session, then either redirects, shows the
loading placeholder, or lets the view render.
"""

from flask import current_app, g, redirect, render_template, request

from warehouse_admin.buisness.navigator import RequestNavigator
from warehouse_admin.buisness.session_guard import SessionGuard
from warehouse_admin.buisness.session_store import SessionStore
from warehouse_admin.buisness.viewport import (
    BREAKPOINTS,
    ViewportObserver,
    sidebar_width,
    width_from_request,
)
from warehouse_admin.services.session_service import SessionService
from warehouse_admin.utils.logger import get_logger

logger = get_logger("warehouse_admin.routes.gate")


def _is_static(endpoint):
    return endpoint is not None and (endpoint == 'static' or endpoint.endswith('.static'))


def _log_tier_change(tier):
    logger.debug(f"Viewport tier for {request.path}: {tier.value}")


def open_session_gate():
    if _is_static(request.endpoint):
        return None

    policy = current_app.config['ROUTE_POLICY']

    viewport = ViewportObserver()
    g.viewport = viewport
    g.release_viewport = viewport.subscribe(_log_tier_change)
    viewport.measure(width_from_request(request))

    navigator = RequestNavigator(request.path)
    store = SessionStore(on_logout=SessionService.revoke)
    guard = SessionGuard(navigator, policy)
    g.navigator = navigator
    g.session_store = store
    g.session_guard = guard
    g.release_session_guard = guard.attach(store)

    SessionService.resolve(store)

    if navigator.pending_path:
        return redirect(navigator.pending_path)

    if store.session.loading and policy.is_guarded(request.path):
        # Session not resolved yet: stay on the placeholder
        return render_template('loading.html', message="Đang kiểm tra đăng nhập...")

    return None


def close_session_gate(exc=None):
    for key in ('release_session_guard', 'release_viewport'):
        release = g.pop(key, None)
        if release is not None:
            release()


def inject_layout_state():
    store = g.get('session_store')
    viewport = g.get('viewport')
    mobile = viewport.is_mobile if viewport is not None else False
    return {
        'session_state': store.session if store is not None else None,
        'device_tier': viewport.tier.value if viewport is not None else 'desktop',
        'is_mobile': mobile,
        'sidebar_width': sidebar_width(mobile),
        'breakpoints': BREAKPOINTS,
    }
