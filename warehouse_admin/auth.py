from flask import Blueprint, current_app, flash, g, redirect, render_template, request, url_for
from flask import session as flask_session
from flask_login import login_required

from warehouse_admin import limiter
from warehouse_admin.services.errors import BackendError, BackendUnavailable
from warehouse_admin.services.session_service import SessionService
from warehouse_admin.utils.logger import get_logger
from warehouse_admin.utils.logging_sanitizer import sanitize_form_data

logger = get_logger("warehouse_admin.auth")
auth = Blueprint('auth', __name__)

LOGIN_FAILED = 'Đăng nhập thất bại'
VERIFY_FAILED = 'Xác thực thất bại'
BACKEND_DOWN = 'Không thể kết nối máy chủ xác thực'


def _login_rate_limit():
    return current_app.config['LOGIN_RATE_LIMIT']


def _after_login():
    """The guard has pushed the landing page once the store holds the user"""
    target = g.navigator.pending_path or current_app.config['ROUTE_POLICY'].landing_path
    return redirect(target)


@auth.route('/login', methods=['GET', 'POST'])
@limiter.limit(_login_rate_limit, methods=['POST'])
def login():
    if request.method == 'POST':
        username = (request.form.get('username') or '').strip()
        password = request.form.get('password') or ''

        logger.debug(f"Login attempt: {sanitize_form_data(request.form)}")

        if not username or not password:
            flash('Vui lòng nhập tên đăng nhập và mật khẩu', 'error')
            return render_template('auth/login.html', username=username)

        try:
            result = SessionService.auth_client().login(username, password, SessionService.device_uuid())
        except BackendUnavailable:
            flash(BACKEND_DOWN, 'error')
            return render_template('auth/login.html', username=username)
        except BackendError as e:
            logger.warning(f"Failed login attempt for username: {username}")
            flash(e.message or LOGIN_FAILED, 'error')
            return render_template('auth/login.html', username=username)

        if result.require_verification:
            flask_session['pending_verification'] = username
            logger.info(f"Verification code required for username: {username}")
            flash(result.message or 'Vui lòng nhập mã xác thực đã được gửi', 'info')
            return redirect(url_for('auth.verify'))

        identity = SessionService.establish(g.session_store, result)
        logger.info(f"Successful login for user: {identity.username}")
        return _after_login()

    logger.debug("Login page accessed")
    return render_template('auth/login.html')


@auth.route('/login/verify', methods=['GET', 'POST'])
@limiter.limit(_login_rate_limit, methods=['POST'])
def verify():
    """Second login step for devices the backend does not trust yet"""
    username = flask_session.get('pending_verification')
    if not username:
        return redirect(url_for('auth.login'))

    if request.method == 'POST':
        code = (request.form.get('code') or '').strip()
        if not code:
            flash('Vui lòng nhập mã xác thực', 'error')
            return render_template('auth/verify.html', username=username)

        try:
            result = SessionService.auth_client().verify_code(username, SessionService.device_uuid(), code)
        except BackendUnavailable:
            flash(BACKEND_DOWN, 'error')
            return render_template('auth/verify.html', username=username)
        except BackendError as e:
            logger.warning(f"Failed verification for username: {username}")
            flash(e.message or VERIFY_FAILED, 'error')
            return render_template('auth/verify.html', username=username)

        if result.require_verification:
            flash(result.message or VERIFY_FAILED, 'error')
            return render_template('auth/verify.html', username=username)

        flask_session.pop('pending_verification', None)
        identity = SessionService.establish(g.session_store, result)
        logger.info(f"Successful verified login for user: {identity.username}")
        return _after_login()

    return render_template('auth/verify.html', username=username)


@auth.route('/logout', methods=['POST'])
@login_required
def logout():
    g.session_store.logout()
    g.navigator.push(current_app.config['ROUTE_POLICY'].login_path)
    flash('Bạn đã đăng xuất', 'info')
    return redirect(g.navigator.pending_path)
