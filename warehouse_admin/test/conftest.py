"""
Pytest configuration and fixtures for the dashboard tests

The auth and data backends are replaced by FakeBackend, patched onto the
client classes, so no test talks to the network.
"""
import os
import tempfile

os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='warehouse-admin-logs-'))
os.environ.setdefault('LOG_LEVEL', 'WARNING')

import pytest

from warehouse_admin import create_app
from warehouse_admin.services.api_client import ApiClient
from warehouse_admin.services.auth_client import AuthClient, LoginResult
from warehouse_admin.services.errors import AuthRejected, BackendRequestError, BackendUnavailable


ADMIN_RECORD = {
    'id': 1,
    'username': 'admin',
    'email': 'admin@nltech.vn',
    'role_id': '1',
    'fullname': 'Quản trị viên',
    'role_name': 'admin',
}


class FakeBackend:
    """In-memory stand-in for the auth backend and the data API"""

    def __init__(self):
        self.available = True
        self.require_verification = False
        self.verification_code = '123456'
        self.validation_error = None
        self.users = {'admin': ('admin123456789', dict(ADMIN_RECORD))}
        self.rows = {}
        self.access_tokens = set()
        self.refresh_tokens = set()
        self.calls = []
        self._counter = 0

    def _check_available(self):
        if not self.available:
            raise BackendUnavailable("Cannot reach backend")

    def _issue(self, user):
        self._counter += 1
        access, refresh = f"access-{self._counter}", f"refresh-{self._counter}"
        self.access_tokens.add(access)
        self.refresh_tokens.add(refresh)
        return LoginResult(access_token=access, refresh_token=refresh, user=dict(user))

    def expire_access_tokens(self):
        self.access_tokens.clear()

    def fail_validation(self, status_code=500):
        self.validation_error = BackendRequestError("Internal error", status_code)

    def login(self, username, password, device_uuid):
        self.calls.append(('login', username))
        self._check_available()
        stored = self.users.get(username)
        if stored is None or stored[0] != password:
            raise AuthRejected("Sai tên đăng nhập hoặc mật khẩu", 401)
        if self.require_verification:
            return LoginResult(require_verification=True, message="Mã xác thực đã được gửi qua email")
        return self._issue(stored[1])

    def verify_code(self, username, device_uuid, code):
        self.calls.append(('verify_code', username))
        self._check_available()
        if code != self.verification_code:
            raise AuthRejected("Mã xác thực không đúng", 401)
        return self._issue(self.users[username][1])

    def validate(self, user_id, access_token):
        self.calls.append(('validate', user_id))
        self._check_available()
        if self.validation_error is not None:
            raise self.validation_error
        if access_token not in self.access_tokens:
            raise AuthRejected("Token expired", 401)
        return {'id': user_id}

    def refresh(self, refresh_token):
        self.calls.append(('refresh', refresh_token))
        self._check_available()
        if refresh_token not in self.refresh_tokens:
            raise AuthRejected("Invalid refresh token", 401)
        self._counter += 1
        access = f"access-{self._counter}"
        self.access_tokens.add(access)
        return access

    def logout(self, refresh_token):
        self.calls.append(('logout', refresh_token))
        self.refresh_tokens.discard(refresh_token)

    def list(self, resource, access_token, params=None):
        self.calls.append(('list', resource))
        self._check_available()
        if access_token not in self.access_tokens:
            raise AuthRejected("Token expired", 401)
        return list(self.rows.get(resource, []))

    def call_names(self):
        return [name for name, _ in self.calls]


@pytest.fixture(scope='session')
def app():
    """Create Flask application for testing"""
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key',
        'WTF_CSRF_ENABLED': False,
        'RATELIMIT_ENABLED': False,
        'ENABLE_HTTPS': False,
        'FORCE_HTTPS_REDIRECT': False,
        'SESSION_COOKIE_SECURE': False,
        'SESSION_REVALIDATE_SECONDS': 300,
    })

    # No app context held open here: each test request must get its own g
    yield app


@pytest.fixture(scope='function')
def backend(monkeypatch):
    """Patch the backend clients onto a fresh FakeBackend"""
    fake = FakeBackend()
    monkeypatch.setattr(AuthClient, 'login', lambda client, *args: fake.login(*args))
    monkeypatch.setattr(AuthClient, 'verify_code', lambda client, *args: fake.verify_code(*args))
    monkeypatch.setattr(AuthClient, 'validate', lambda client, *args: fake.validate(*args))
    monkeypatch.setattr(AuthClient, 'refresh', lambda client, *args: fake.refresh(*args))
    monkeypatch.setattr(AuthClient, 'logout', lambda client, *args: fake.logout(*args))
    monkeypatch.setattr(ApiClient, 'list', lambda client, *args, **kwargs: fake.list(*args, **kwargs))
    return fake


@pytest.fixture(scope='function')
def client(app, backend):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def authenticated_client(client):
    """Test client logged in as admin/admin123456789"""
    response = login_user(client)
    assert response.status_code == 302, "Fixture login should redirect to the landing page"
    return client


def login_user(client, username='admin', password='admin123456789'):
    """Helper function to login a user"""
    return client.post('/login', data={
        'username': username,
        'password': password
    })


def store_credentials(client, access_token='access-stale', refresh_token=None, validated_at=0, user=None):
    """Put a stored credential in the client's session, as a previous login would"""
    with client.session_transaction() as sess:
        sess['access_token'] = access_token
        if refresh_token:
            sess['refresh_token'] = refresh_token
        sess['user'] = dict(user or ADMIN_RECORD, isAuthenticated=True)
        sess['validated_at'] = validated_at
