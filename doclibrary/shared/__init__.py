"""Shared utilities: session context, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from doclibrary.shared.context import SessionContext
from doclibrary.shared.utils import (
    ensure_utc,
    generate_cuid,
    generate_object_name,
    parse_timestamp,
    to_iso,
    utc_now,
)

__all__ = [
    "SessionContext",
    "generate_cuid",
    "generate_object_name",
    "utc_now",
    "ensure_utc",
    "parse_timestamp",
    "to_iso",
]
