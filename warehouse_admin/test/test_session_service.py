"""
Tests for resolving the request's session from the stored credential
"""
import time

from flask import session as flask_session
from flask_login import current_user

from warehouse_admin.buisness.session_store import SessionStore
from warehouse_admin.services.auth_client import LoginResult
from warehouse_admin.services.session_service import SessionService
from warehouse_admin.test.conftest import ADMIN_RECORD


def _store_credential(access_token, refresh_token=None, validated_at=0):
    flask_session['access_token'] = access_token
    if refresh_token:
        flask_session['refresh_token'] = refresh_token
    flask_session['user'] = dict(ADMIN_RECORD, isAuthenticated=True)
    flask_session['validated_at'] = validated_at


def test_no_credential_resolves_anonymous(app, backend):
    with app.test_request_context('/dashboard/imports'):
        store = SessionStore()
        session = SessionService.resolve(store)

        assert session.loading is False
        assert session.identity is None
        assert backend.calls == [], "Nothing to validate without a credential"


def test_recently_validated_credential_skips_backend(app, backend):
    with app.test_request_context('/dashboard/imports'):
        _store_credential('access-1', validated_at=time.time())
        store = SessionStore()

        session = SessionService.resolve(store)

        assert session.identity.username == 'admin'
        assert backend.calls == []
        assert current_user.is_authenticated


def test_stale_credential_is_validated(app, backend):
    backend.access_tokens.add('access-9')
    with app.test_request_context('/dashboard/imports'):
        _store_credential('access-9')
        store = SessionStore()

        session = SessionService.resolve(store)

        assert session.identity.username == 'admin'
        assert backend.call_names() == ['validate']
        assert flask_session['validated_at'] > 0


def test_rejected_token_is_refreshed(app, backend):
    backend.refresh_tokens.add('refresh-1')
    with app.test_request_context('/dashboard/imports'):
        _store_credential('access-expired', refresh_token='refresh-1')
        store = SessionStore()

        session = SessionService.resolve(store)

        assert session.identity is not None
        assert backend.call_names() == ['validate', 'refresh']
        assert flask_session['access_token'] in backend.access_tokens


def test_rejected_token_without_refresh_clears_session(app, backend):
    with app.test_request_context('/dashboard/imports'):
        _store_credential('access-expired', refresh_token='refresh-revoked')
        store = SessionStore()

        session = SessionService.resolve(store)

        assert session.loading is False
        assert session.identity is None
        assert 'access_token' not in flask_session
        assert 'user' not in flask_session


def test_unreachable_backend_clears_credential(app, backend):
    backend.available = False
    with app.test_request_context('/dashboard/imports'):
        _store_credential('access-1', refresh_token='refresh-1')
        store = SessionStore()

        session = SessionService.resolve(store)

        assert session.loading is False, "Resolution always finishes"
        assert session.identity is None
        assert backend.call_names() == ['validate', 'refresh']
        assert 'access_token' not in flask_session
        assert 'refresh_token' not in flask_session


def test_server_error_on_validation_is_refreshed(app, backend):
    backend.fail_validation(500)
    backend.refresh_tokens.add('refresh-1')
    with app.test_request_context('/dashboard/imports'):
        _store_credential('access-1', refresh_token='refresh-1')
        store = SessionStore()

        session = SessionService.resolve(store)

        assert session.identity.username == 'admin'
        assert backend.call_names() == ['validate', 'refresh']
        assert flask_session['access_token'] != 'access-1'


def test_server_error_on_validation_without_refresh_clears_session(app, backend):
    backend.fail_validation(404)
    with app.test_request_context('/dashboard/imports'):
        _store_credential('access-1')
        store = SessionStore()

        session = SessionService.resolve(store)

        assert session.loading is False
        assert session.identity is None
        assert 'user' not in flask_session


def test_malformed_user_record_is_discarded(app, backend):
    with app.test_request_context('/dashboard/imports'):
        flask_session['access_token'] = 'access-1'
        flask_session['user'] = {'username': 'admin'}

        session = SessionService.resolve(SessionStore())

        assert session.identity is None
        assert 'user' not in flask_session


def test_establish_stores_tokens_and_resolves_store(app, backend):
    result = LoginResult(access_token='access-5', refresh_token='refresh-5', user=dict(ADMIN_RECORD))
    with app.test_request_context('/login', method='POST'):
        store = SessionStore()

        identity = SessionService.establish(store, result)

        assert identity.username == 'admin'
        assert store.session.identity == identity
        assert flask_session['access_token'] == 'access-5'
        assert flask_session['refresh_token'] == 'refresh-5'
        assert flask_session['user']['isAuthenticated'] is True
        assert flask_session.permanent


def test_revoke_calls_backend_and_forgets_credential(app, backend):
    with app.test_request_context('/logout', method='POST'):
        _store_credential('access-1', refresh_token='refresh-1')

        SessionService.revoke()

        assert ('logout', 'refresh-1') in backend.calls
        assert 'refresh_token' not in flask_session
        assert 'access_token' not in flask_session


def test_device_uuid_is_stable_per_session(app):
    with app.test_request_context('/login'):
        first = SessionService.device_uuid()
        assert SessionService.device_uuid() == first
        assert flask_session['device_uuid'] == first
