"""
Shared request handling for backend clients
"""

from typing import Any, Dict, Optional

import requests

from warehouse_admin.services.errors import (
    AuthRejected,
    BackendRequestError,
    BackendUnavailable,
)
from warehouse_admin.utils.logger import get_logger
from warehouse_admin.utils.logging_sanitizer import sanitize_dict

logger = get_logger("warehouse_admin.services.http")

DEFAULT_BACKEND_URL = "http://localhost:7010/api"
DEFAULT_TIMEOUT = 10


def bearer(access_token: Optional[str]) -> Dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"} if access_token else {}


def _error_text(response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or ""
    if isinstance(body, dict):
        return str(body.get("error") or body.get("message") or "")
    return ""


class BackendClient:
    """Base class: URL joining, timeouts and error translation"""

    def __init__(self, base_url: str = DEFAULT_BACKEND_URL, timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = session or requests.Session()

    def _make_request(self, endpoint: str, method: str = "GET", data: Optional[Dict] = None,
                      params: Optional[Dict] = None, access_token: Optional[str] = None) -> Any:
        """
        Call the backend and return the decoded JSON body (None when empty).

        Raises:
            BackendUnavailable: connection error or timeout
            AuthRejected: 401/403
            BackendRequestError: other HTTP errors
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        logger.debug(f"{method} {url} payload={sanitize_dict(data) if data else None}")

        try:
            response = self.http.request(
                method,
                url,
                json=data,
                params=params,
                headers=bearer(access_token),
                timeout=self.timeout,
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.warning(f"Backend unreachable for {method} {url}: {type(e).__name__}")
            raise BackendUnavailable(f"Cannot reach backend at {self.base_url}") from e

        if response.status_code in (401, 403):
            raise AuthRejected(_error_text(response), response.status_code)
        if response.status_code >= 400:
            message = _error_text(response)
            logger.warning(f"Backend error {response.status_code} for {method} {url}: {message}")
            raise BackendRequestError(message, response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendRequestError("Invalid JSON from backend", response.status_code) from e
