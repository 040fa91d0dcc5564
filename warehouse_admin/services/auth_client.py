"""
Auth Backend Client
Talks to the external authentication service.

Endpoints:
- POST /auth/login          username, password, device uuid
- POST /auth/verify-code    second step when the device is not yet trusted
- POST /auth/refresh-token  new access token from a refresh token
- POST /auth/logout         revoke a refresh token
- GET  /users/<id>          token validation
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from warehouse_admin.services.errors import BackendError, BackendRequestError
from warehouse_admin.services.http import BackendClient
from warehouse_admin.utils.logger import get_logger

logger = get_logger("warehouse_admin.services.auth_client")


@dataclass
class LoginResult:
    require_verification: bool = False
    message: str = ""
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    user: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, body: Optional[Dict[str, Any]]) -> 'LoginResult':
        body = body or {}
        if body.get("requireVerification"):
            return cls(require_verification=True, message=body.get("message") or "")

        access_token = body.get("accessToken")
        user = body.get("user")
        if not access_token or not isinstance(user, dict):
            raise BackendRequestError("Login response is missing the token or user")
        return cls(
            access_token=access_token,
            refresh_token=body.get("refreshToken"),
            user=user,
        )


class AuthClient(BackendClient):

    def login(self, username: str, password: str, device_uuid: str) -> LoginResult:
        body = self._make_request("/auth/login", method="POST", data={
            "username": username,
            "password": password,
            "uuid": device_uuid,
        })
        return LoginResult.from_response(body)

    def verify_code(self, username: str, device_uuid: str, code: str) -> LoginResult:
        body = self._make_request("/auth/verify-code", method="POST", data={
            "username": username,
            "uuid": device_uuid,
            "confirmationCode": code,
        })
        return LoginResult.from_response(body)

    def refresh(self, refresh_token: str) -> str:
        """
        Exchange a refresh token for a new access token.

        Raises:
            BackendRequestError: if the response carries no token
        """
        body = self._make_request("/auth/refresh-token", method="POST", data={
            "refreshToken": refresh_token,
        }) or {}
        access_token = body.get("accessToken")
        if not access_token:
            raise BackendRequestError("Refresh response is missing the access token")
        return access_token

    def validate(self, user_id: int, access_token: str) -> Dict[str, Any]:
        """Fetch the user with the token; raises AuthRejected when the token is no good"""
        return self._make_request(f"/users/{user_id}", access_token=access_token) or {}

    def logout(self, refresh_token: Optional[str]) -> None:
        """Revoke the refresh token. Failures are logged; local logout goes on regardless"""
        if not refresh_token:
            return
        try:
            self._make_request("/auth/logout", method="POST", data={"refreshToken": refresh_token})
        except BackendError as e:
            logger.warning(f"Remote logout failed: {type(e).__name__} {e.message}")
