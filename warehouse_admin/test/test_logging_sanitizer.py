"""
Test the logging sanitizer utility.
Passwords, tokens and verification codes must be redacted before logging.
"""

from werkzeug.datastructures import ImmutableMultiDict

from warehouse_admin.utils.logging_sanitizer import (
    SENSITIVE_FIELDS,
    sanitize_dict,
    sanitize_exception_message,
    sanitize_form_data,
)


def test_sanitize_dict():
    """Test dictionary sanitization"""
    test_data = {
        'username': 'admin',
        'password': 'secret123',
        'uuid': 'device-1'
    }
    result = sanitize_dict(test_data)
    assert result['username'] == 'admin', "Username should not be redacted"
    assert result['password'] == '[REDACTED]', "Password should be redacted"
    assert result['uuid'] == 'device-1', "Device id should not be redacted"
    assert test_data['password'] == 'secret123', "Input should not be modified"


def test_backend_payload_fields():
    """Auth backend payloads use camelCase keys"""
    result = sanitize_dict({
        'refreshToken': 'r1',
        'accessToken': 'a1',
        'confirmationCode': '123456',
        'username': 'admin'
    })
    assert result['refreshToken'] == '[REDACTED]'
    assert result['accessToken'] == '[REDACTED]'
    assert result['confirmationCode'] == '[REDACTED]'
    assert result['username'] == 'admin'


def test_case_insensitive_and_nested():
    result = sanitize_dict({
        'PASSWORD': 'x',
        'user': {'username': 'admin', 'Token': 'abc'},
        'settings': {'theme': 'dark'}
    })
    assert result['PASSWORD'] == '[REDACTED]'
    assert result['user'] == {'username': 'admin', 'Token': '[REDACTED]'}
    assert result['settings'] == {'theme': 'dark'}


def test_custom_redaction_text_and_empty_input():
    assert sanitize_dict({'secret': 's'}, redact_text='***') == {'secret': '***'}
    assert sanitize_dict({}) == {}
    assert sanitize_dict(None) is None


def test_sanitize_form_data():
    """Test Flask form data sanitization"""
    form = ImmutableMultiDict([
        ('username', 'admin'),
        ('password', 'secret123'),
        ('csrf_token', 'tok'),
        ('code', '654321')
    ])
    result = sanitize_form_data(form)
    assert result == {
        'username': 'admin',
        'password': '[REDACTED]',
        'csrf_token': '[REDACTED]',
        'code': '[REDACTED]'
    }


def test_sanitize_exception_message():
    assert sanitize_exception_message(ValueError("Invalid quantity")) == "Invalid quantity"
    assert sanitize_exception_message(ValueError("bad password for admin")) == \
        "ValueError: [Message contains sensitive data]"


def test_sensitive_fields_are_lower_case():
    for field in SENSITIVE_FIELDS:
        assert field == field.lower(), f"{field} would never match"
