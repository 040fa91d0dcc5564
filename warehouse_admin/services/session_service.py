"""
Session Service
Resolves the request's SessionStore from the credential kept in the Flask session.

Stored keys:
- access_token / refresh_token  issued by the auth backend
- user                          identity record returned at login
- validated_at                  epoch seconds of the last successful token check
- device_uuid                   per-browser id sent with login requests
"""

import time
import uuid
from typing import Optional

from flask import current_app, session as flask_session
from flask_login import login_user, logout_user

from warehouse_admin.data.session import Session, SessionUser
from warehouse_admin.services.auth_client import AuthClient, LoginResult
from warehouse_admin.services.errors import BackendError
from warehouse_admin.utils.logger import get_logger
from warehouse_admin.utils.logging_sanitizer import sanitize_exception_message

logger = get_logger("warehouse_admin.services.session_service")

CREDENTIAL_KEYS = ("access_token", "refresh_token", "user", "validated_at")


class SessionService:
    """
    Auth collaborator for the request gate.

    resolve() always finishes the store: a credential that fails validation
    for any reason gets one refresh attempt, and is cleared if that fails too.
    The store stays loading only while resolve() has not returned.
    """

    @staticmethod
    def auth_client() -> AuthClient:
        return AuthClient(
            base_url=current_app.config['BACKEND_URL'],
            timeout=current_app.config['BACKEND_TIMEOUT'],
        )

    @staticmethod
    def device_uuid() -> str:
        device = flask_session.get('device_uuid')
        if not device:
            device = str(uuid.uuid4())
            flask_session['device_uuid'] = device
        return device

    @staticmethod
    def stored_identity() -> Optional[SessionUser]:
        record = flask_session.get('user')
        if not record or not flask_session.get('access_token'):
            return None
        try:
            return SessionUser.from_record(record)
        except (KeyError, TypeError, ValueError):
            logger.warning("Discarding malformed stored user record")
            return None

    @staticmethod
    def clear_credentials() -> None:
        for key in CREDENTIAL_KEYS:
            flask_session.pop(key, None)
        logout_user()

    @classmethod
    def resolve(cls, store) -> Session:
        identity = cls.stored_identity()
        if identity is None:
            if flask_session.get('user') or flask_session.get('access_token'):
                cls.clear_credentials()
            return store.resolve(None)

        max_age = current_app.config['SESSION_REVALIDATE_SECONDS']
        validated_at = flask_session.get('validated_at') or 0
        if time.time() - validated_at < max_age:
            return cls._resolve_identity(store, identity)

        client = cls.auth_client()
        try:
            client.validate(identity.id, flask_session['access_token'])
        except BackendError as e:
            # Any failed check gets one refresh attempt
            logger.warning(f"Token validation failed for {identity.username}: {type(e).__name__} {sanitize_exception_message(e)}")
            if not cls.refresh_access_token(client):
                logger.info(f"Stored credential for {identity.username} could not be renewed, clearing session")
                cls.clear_credentials()
                return store.resolve(None)

        flask_session['validated_at'] = time.time()
        return cls._resolve_identity(store, identity)

    @staticmethod
    def _resolve_identity(store, identity: SessionUser) -> Session:
        if flask_session.get('_user_id') != identity.get_id():
            login_user(identity)
        return store.resolve(identity)

    @staticmethod
    def refresh_access_token(client: AuthClient) -> bool:
        """Swap the stored refresh token for a new access token; False when not possible"""
        refresh_token = flask_session.get('refresh_token')
        if not refresh_token:
            return False
        try:
            flask_session['access_token'] = client.refresh(refresh_token)
        except BackendError as e:
            logger.info(f"Token refresh failed: {type(e).__name__}")
            return False
        logger.debug("Access token refreshed")
        return True

    @classmethod
    def establish(cls, store, result: LoginResult) -> SessionUser:
        """Keep a successful login and resolve the store with its user"""
        user_record = dict(result.user)
        user_record['isAuthenticated'] = True
        identity = SessionUser.from_record(user_record)

        flask_session['access_token'] = result.access_token
        flask_session['refresh_token'] = result.refresh_token
        flask_session['user'] = user_record
        flask_session['validated_at'] = time.time()
        flask_session.permanent = True
        login_user(identity)

        store.resolve(identity)
        return identity

    @classmethod
    def revoke(cls) -> None:
        """Logout hook for the store: revoke remotely, then forget the credential"""
        cls.auth_client().logout(flask_session.get('refresh_token'))
        cls.clear_credentials()
