"""Document metadata value object and the single merge rule used by every metadata write.

Metadata is stored as a JSON column with camelCase keys. DocumentMetadata gives
the known keys explicit types and validates status/accessLevel at write time;
unknown keys are preserved in ``extra`` so nothing stored is ever dropped.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from doclibrary.domain.enums import AccessLevel, DocumentStatus
from doclibrary.domain.exceptions import ValidationException

# python attribute -> stored JSON key
_WIRE_KEYS: dict[str, str] = {
    "size": "size",
    "type": "type",
    "last_modified": "lastModified",
    "status": "status",
    "version": "version",
    "uploaded_by": "uploadedBy",
    "upload_date": "uploadDate",
    "keywords": "keywords",
    "description": "description",
    "attendees": "attendees",
    "case_number": "caseNumber",
    "judge": "judge",
    "act_number": "actNumber",
    "notice_type": "noticeType",
    "access_level": "accessLevel",
    "last_modified_by": "lastModifiedBy",
    "last_modified_at": "lastModifiedAt",
    "archived_at": "archivedAt",
    "restored_at": "restoredAt",
}
_ATTRS_BY_WIRE_KEY = {wire: attr for attr, wire in _WIRE_KEYS.items()}


@dataclass(frozen=True)
class DocumentMetadata:
    """Typed view over a document's metadata map."""

    size: int | None = None
    type: str | None = None
    last_modified: int | None = None
    status: DocumentStatus | None = None
    version: str | None = None
    uploaded_by: str | None = None
    upload_date: str | None = None
    keywords: tuple[str, ...] = ()
    description: str | None = None
    attendees: Any = None
    case_number: str | None = None
    judge: str | None = None
    act_number: str | None = None
    notice_type: str | None = None
    access_level: AccessLevel | None = None
    last_modified_by: str | None = None
    last_modified_at: str | None = None
    archived_at: str | None = None
    restored_at: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> DocumentMetadata:
        """Build from a stored metadata map. Raises ValidationException on bad status/accessLevel."""
        if not data:
            return cls()
        kwargs: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in data.items():
            attr = _ATTRS_BY_WIRE_KEY.get(key)
            if attr is None:
                extra[key] = value
                continue
            kwargs[attr] = value

        status = kwargs.get("status")
        if status is not None:
            if status not in DocumentStatus.values():
                raise ValidationException(
                    f"Invalid document status: {status!r}", field="metadata.status"
                )
            kwargs["status"] = DocumentStatus(status)

        access_level = kwargs.get("access_level")
        if access_level is not None:
            if access_level not in AccessLevel.values():
                raise ValidationException(
                    f"Invalid access level: {access_level!r}",
                    field="metadata.accessLevel",
                )
            kwargs["access_level"] = AccessLevel(access_level)

        keywords = kwargs.get("keywords")
        if keywords is None:
            kwargs.pop("keywords", None)
        elif isinstance(keywords, str):
            kwargs["keywords"] = (keywords,)
        else:
            kwargs["keywords"] = tuple(str(k) for k in keywords)

        return cls(**kwargs, extra=extra)

    def to_dict(self) -> dict[str, Any]:
        """Return the stored (camelCase) representation; unset fields are omitted."""
        out: dict[str, Any] = dict(self.extra)
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name == "keywords":
                if not value:
                    continue
                value = list(value)
            elif isinstance(value, (DocumentStatus, AccessLevel)):
                value = value.value
            out[_WIRE_KEYS[f.name]] = value
        return out

    @property
    def effective_access_level(self) -> AccessLevel:
        """Access level used for gating; documents without one are public."""
        return self.access_level or AccessLevel.PUBLIC


def merge_metadata(
    stored: Mapping[str, Any] | None,
    changes: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Deep-merge changes over the stored metadata and return a new map.

    Nested mappings merge recursively; lists and scalars in changes replace
    the stored value. Keys absent from changes are kept as stored.
    """
    merged: dict[str, Any] = dict(stored or {})
    for key, value in (changes or {}).items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_metadata(current, value)
        else:
            merged[key] = value
    return merged
