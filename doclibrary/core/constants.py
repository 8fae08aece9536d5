"""Core constants: storage buckets, document types, and shared literal values.

Single source of truth for the category → bucket routing and the
extension → MIME type table used by the upload pipeline.
"""

# Category display name -> storage bucket id. Categories without a bucket are rejected at upload.
BUCKET_MAP: dict[str, str] = {
    "Hansards": "hansards",
    "Courts of Record": "judgements",
    "Acts of Parliament": "acts",
    "Statutory Instruments": "statutory",
    "Gazettes": "gazettes",
    "7th Revised Edition": "revised",
    "Archival Materials": "archival_materials",
}

# MIME type -> allowed file extensions.
DOCUMENT_TYPES: dict[str, tuple[str, ...]] = {
    "application/pdf": (".pdf",),
    "application/msword": (".doc",),
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": (".docx",),
    "text/plain": (".txt",),
    "application/rtf": (".rtf",),
    "application/vnd.ms-excel": (".xls",),
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": (".xlsx",),
}

DEFAULT_MIME_TYPE = "application/octet-stream"

# Storage upload Cache-Control max-age (seconds)
STORAGE_CACHE_CONTROL = "3600"

# Initial metadata version for newly uploaded documents
INITIAL_DOCUMENT_VERSION = "1.0"

# Top-level columns that may be used for ordering; metadata.<field> is always allowed.
SORTABLE_COLUMNS = frozenset(
    {"title", "category", "subcategory", "created_at", "updated_at"}
)
METADATA_SORT_PREFIX = "metadata."

# Mobile money phone numbers: exactly ten digits
MOBILE_NUMBER_PATTERN = r"^[0-9]{10}$"


def get_document_type_from_extension(filename: str) -> str:
    """Return the MIME type for filename's extension, or DEFAULT_MIME_TYPE if unknown."""
    if "." not in filename:
        return DEFAULT_MIME_TYPE
    extension = "." + filename.rsplit(".", 1)[-1].lower()
    for mime_type, extensions in DOCUMENT_TYPES.items():
        if extension in extensions:
            return mime_type
    return DEFAULT_MIME_TYPE


def is_valid_document_type(mime_type: str) -> bool:
    """Return True if mime_type is on the upload allow-list."""
    return mime_type in DOCUMENT_TYPES
