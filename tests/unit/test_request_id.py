"""Unit tests for request ID sanitization."""

from doclibrary.middleware.request_id import REQUEST_ID_MAX_LENGTH, sanitize_request_id


def test_safe_id_is_kept() -> None:
    assert sanitize_request_id("abc-123_DEF") == "abc-123_DEF"


def test_missing_id_is_generated() -> None:
    assert sanitize_request_id(None)
    assert sanitize_request_id("   ")


def test_injection_attempt_is_replaced() -> None:
    raw = "abc\r\nX-Admin: true"
    value = sanitize_request_id(raw)
    assert value != raw
    assert "\n" not in value


def test_overlong_id_is_replaced() -> None:
    raw = "a" * (REQUEST_ID_MAX_LENGTH + 1)
    assert sanitize_request_id(raw) != raw
