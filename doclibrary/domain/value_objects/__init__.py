"""Domain value objects and shared value types."""

from doclibrary.domain.value_objects.core import (
    DEFAULT_DURATION,
    MobileMoneyPayer,
    Plan,
    compute_end_date,
    duration_for,
)
from doclibrary.domain.value_objects.metadata import DocumentMetadata, merge_metadata
from doclibrary.domain.value_objects.query import DateRange, DocumentFilter, DocumentSort

__all__ = [
    "DEFAULT_DURATION",
    "DateRange",
    "DocumentFilter",
    "DocumentMetadata",
    "DocumentSort",
    "MobileMoneyPayer",
    "Plan",
    "compute_end_date",
    "duration_for",
    "merge_metadata",
]
