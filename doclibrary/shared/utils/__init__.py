"""Shared utilities: datetime and generators."""

from doclibrary.shared.utils.datetime import (
    ensure_utc,
    parse_timestamp,
    to_iso,
    utc_now,
)
from doclibrary.shared.utils.generators import generate_cuid, generate_object_name

__all__ = [
    "generate_cuid",
    "generate_object_name",
    "utc_now",
    "ensure_utc",
    "parse_timestamp",
    "to_iso",
]
