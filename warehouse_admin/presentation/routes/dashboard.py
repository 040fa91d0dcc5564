"""
Dashboard routes
Layout shell with the sidebar, plus one table screen per section.
"""

from flask import Blueprint, abort, current_app, flash, g, redirect, render_template, request
from flask import session as flask_session
from flask_login import login_required

from warehouse_admin.buisness.navigation import NavigationTracker
from warehouse_admin.presentation.sections import SECTIONS_BY_SLUG
from warehouse_admin.presentation.sidebar import SIDEBAR_ENTRIES
from warehouse_admin.services.api_client import ApiClient
from warehouse_admin.services.errors import AuthRejected, BackendError, BackendUnavailable
from warehouse_admin.services.session_service import SessionService
from warehouse_admin.utils.logger import get_logger
from warehouse_admin.utils.logging_sanitizer import sanitize_exception_message

bp = Blueprint('dashboard', __name__)
logger = get_logger("warehouse_admin.routes.dashboard")


def _tracker() -> NavigationTracker:
    tracker = NavigationTracker(SIDEBAR_ENTRIES, g.navigator)
    tracker.sync(request.path)
    return tracker


def _api_client() -> ApiClient:
    return ApiClient(
        base_url=current_app.config['BACKEND_URL'],
        timeout=current_app.config['BACKEND_TIMEOUT'],
    )


def _fetch_rows(section):
    """
    Rows for a section. On a rejected token, refresh once and retry; if that
    fails the session is ended and the guard sends the user to login.
    """
    client = _api_client()
    try:
        return client.list(section.resource, flask_session.get('access_token'))
    except AuthRejected:
        if SessionService.refresh_access_token(SessionService.auth_client()):
            try:
                return client.list(section.resource, flask_session.get('access_token'))
            except AuthRejected:
                pass
            except BackendError as e:
                logger.error(f"Loading {section.resource} failed after token refresh: {e.message}")
                flash('Không thể tải dữ liệu', 'error')
                return []
        logger.info(f"Token rejected while loading {section.resource}, ending session")
        flash('Phiên đăng nhập đã hết hạn, vui lòng đăng nhập lại', 'info')
        g.session_store.logout()
        return None
    except BackendUnavailable:
        flash('Không thể kết nối máy chủ dữ liệu', 'error')
        return []
    except BackendError as e:
        logger.error(f"Loading {section.resource} failed: {sanitize_exception_message(e)}")
        flash(e.message or 'Không thể tải dữ liệu', 'error')
        return []


@bp.route('/')
@login_required
def index():
    """Dashboard root goes to the landing section"""
    return redirect(current_app.config['ROUTE_POLICY'].landing_path)


@bp.route('/go/<int:index>')
@login_required
def go(index):
    """Sidebar selection: highlight the entry, then move to its page"""
    tracker = _tracker()
    try:
        entry = tracker.select_index(index)
    except IndexError:
        abort(404)
    logger.debug(f"Sidebar selection: {entry.title}")
    return redirect(g.navigator.pending_path)


@bp.route('/<path:slug>')
@login_required
def section(slug):
    """Table screen for one section"""
    current = SECTIONS_BY_SLUG.get(slug.strip('/'))
    if current is None:
        abort(404)

    rows = _fetch_rows(current)
    if rows is None:
        return redirect(g.navigator.pending_path)

    return render_template('dashboard/section.html',
                           section=current,
                           rows=rows,
                           tracker=_tracker(),
                           entries=SIDEBAR_ENTRIES)
