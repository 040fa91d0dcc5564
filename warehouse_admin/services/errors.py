"""
Exceptions for calls to the external backend

Raised by the HTTP clients; routes and the session service decide what the
user sees.
"""


class BackendError(Exception):
    """Base exception for all backend call failures"""

    def __init__(self, message: str = "", status_code: int = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BackendUnavailable(BackendError):
    """Raised when the backend cannot be reached (connection error, timeout)"""
    pass


class AuthRejected(BackendError):
    """Raised when the backend rejects the credentials or token (401/403)"""
    pass


class BackendRequestError(BackendError):
    """Raised for any other HTTP error; message is the backend's error text"""
    pass
