"""ID and value generators (e.g. CUID, storage object names)."""

from datetime import datetime

from cuid2 import cuid_wrapper

from doclibrary.shared.utils.datetime import utc_now

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_object_name(extension: str, now: datetime | None = None) -> str:
    """Return a storage object name ``{timestamp}-{cuid}.{ext}``.

    The timestamp is the UTC time with all non-digits stripped
    (YYYYMMDDHHMMSSffffff), so names sort by upload time.
    """
    ts = (now or utc_now()).strftime("%Y%m%d%H%M%S%f")
    ext = extension.lstrip(".").lower()
    if not ext:
        raise ValueError("File extension is required for storage object name")
    return f"{ts}-{generate_cuid()}.{ext}"
