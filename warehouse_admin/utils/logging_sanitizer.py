"""
Logging Sanitizer Utility

Strips credentials from data before it is logged.
Covers login form posts and auth backend payloads (tokens, verification codes).
"""

from typing import Dict, Any
from werkzeug.datastructures import ImmutableMultiDict


# Fields that should never be logged (compared lower-cased)
SENSITIVE_FIELDS = {
    'password',
    'new_password',
    'old_password',
    'secret',
    'token',
    'access_token',
    'accesstoken',
    'refresh_token',
    'refreshtoken',
    'authorization',
    'api_key',
    'csrf_token',
    'code',
    'confirmationcode',
    'confirmation_code',
}


def sanitize_dict(data: Dict[str, Any], redact_text: str = '[REDACTED]') -> Dict[str, Any]:
    """
    Sanitize a dictionary by replacing sensitive field values with redaction text.

    Args:
        data: Dictionary to sanitize
        redact_text: Text to use for redacted values (default: '[REDACTED]')

    Returns:
        Sanitized copy; nested dictionaries are sanitized too

    Example:
        >>> sanitize_dict({'username': 'admin', 'refreshToken': 'abc'})
        {'username': 'admin', 'refreshToken': '[REDACTED]'}
    """
    if not data:
        return data

    sanitized = {}
    for key, value in data.items():
        if str(key).lower() in SENSITIVE_FIELDS:
            sanitized[key] = redact_text
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, redact_text)
        else:
            sanitized[key] = value

    return sanitized


def sanitize_form_data(form_data: ImmutableMultiDict, redact_text: str = '[REDACTED]') -> Dict[str, Any]:
    """
    Sanitize Flask request.form data for safe logging.

    Args:
        form_data: Flask request.form (ImmutableMultiDict)
        redact_text: Text to use for redacted values (default: '[REDACTED]')

    Returns:
        Sanitized dictionary safe for logging
    """
    return sanitize_dict(form_data.to_dict(), redact_text)


def sanitize_exception_message(exception: Exception) -> str:
    """
    Sanitize exception messages to ensure they don't contain sensitive data.

    Args:
        exception: Exception to sanitize

    Returns:
        The message, or a placeholder when it mentions a sensitive field
    """
    message = str(exception)

    if any(field in message.lower() for field in SENSITIVE_FIELDS if len(field) > 4):
        return f"{type(exception).__name__}: [Message contains sensitive data]"

    return message
