"""Row -> DTO helpers shared by the Supabase repositories."""

from __future__ import annotations

from typing import Any

UNKNOWN_USER_NAME = "Unknown User"
UNKNOWN_USER_EMAIL = "unknown@example.com"

# payment_methods.details key -> reporting metadata key
_METHOD_DETAIL_KEYS = {
    "brand": "cardBrand",
    "last4": "cardLast4",
    "provider": "provider",
    "phone_number": "mobileNumber",
    "bank_name": "bankName",
    "reference": "bankReference",
}


def first_row(rows: list[dict[str, Any]] | None) -> dict[str, Any] | None:
    return rows[0] if rows else None


def joined_user(row: dict[str, Any]) -> tuple[str, str]:
    """(user name, email) from the embedded users row; name is the email local part."""
    email = (row.get("users") or {}).get("email")
    if not email:
        return UNKNOWN_USER_NAME, UNKNOWN_USER_EMAIL
    return email.split("@")[0] or UNKNOWN_USER_NAME, email


def joined_payment_method(row: dict[str, Any]) -> tuple[str | None, dict[str, Any]]:
    """(method type, detail metadata) from the embedded payment_methods row."""
    method = row.get("payment_methods") or {}
    details = method.get("details") or {}
    metadata = {
        out_key: details[key]
        for key, out_key in _METHOD_DETAIL_KEYS.items()
        if details.get(key) is not None
    }
    return method.get("type"), metadata
