"""Document list query value objects: filter options and sort order."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal, Protocol

from doclibrary.core.constants import METADATA_SORT_PREFIX, SORTABLE_COLUMNS
from doclibrary.domain.exceptions import ValidationException
from doclibrary.shared.utils.datetime import ensure_utc


class FilterableDocument(Protocol):
    """Attributes DocumentFilter.matches_keywords reads."""

    title: str
    metadata: Mapping[str, Any]


@dataclass(frozen=True)
class DateRange:
    """Inclusive bounds on created_at; either side may be open."""

    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self) -> None:
        start, end = ensure_utc(self.start), ensure_utc(self.end)
        if start and end and start > end:
            raise ValidationException(
                "dateRange.start must not be after dateRange.end", field="dateRange"
            )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)


@dataclass(frozen=True)
class DocumentFilter:
    """Recognized document list filters. Unset options do not constrain results."""

    category: str | None = None
    subcategory: str | None = None
    status: str | None = None
    date_range: DateRange | None = None
    types: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()

    @property
    def has_keywords(self) -> bool:
        return any(k.strip() for k in self.keywords)

    def matches_keywords(self, document: FilterableDocument) -> bool:
        """Any keyword is a case-insensitive substring of the title or one of metadata.keywords."""
        wanted = [k.strip().lower() for k in self.keywords if k.strip()]
        if not wanted:
            return True
        title = (document.title or "").lower()
        raw = (document.metadata or {}).get("keywords") or []
        if isinstance(raw, str):
            raw = [raw]
        tagged = {str(k).lower() for k in raw}
        return any(k in title or k in tagged for k in wanted)


@dataclass(frozen=True)
class DocumentSort:
    """Sort order. Fields named ``metadata.<key>`` order by that metadata key."""

    field: str = "created_at"
    direction: Literal["asc", "desc"] = "desc"

    def __post_init__(self) -> None:
        if self.direction not in ("asc", "desc"):
            raise ValidationException(
                "Sort direction must be 'asc' or 'desc'", field="direction"
            )
        if self.is_metadata_field:
            if not self.metadata_key or not self.metadata_key.isidentifier():
                raise ValidationException(
                    f"Invalid metadata sort field: {self.field!r}", field="sort"
                )
        elif self.field not in SORTABLE_COLUMNS:
            raise ValidationException(
                f"Cannot sort by unknown field: {self.field!r}", field="sort"
            )

    @property
    def is_metadata_field(self) -> bool:
        return self.field.startswith(METADATA_SORT_PREFIX)

    @property
    def metadata_key(self) -> str:
        return self.field[len(METADATA_SORT_PREFIX):]

    @property
    def ascending(self) -> bool:
        return self.direction == "asc"
