"""Download proxy: stream a stored file through this origin as an attachment."""

import logging
from typing import Annotated
from urllib.parse import quote, urlparse

import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from doclibrary.api.v1.dependencies import get_http_client
from doclibrary.core.config import get_settings
from doclibrary.core.constants import DEFAULT_MIME_TYPE
from doclibrary.domain.exceptions import RemoteException, ValidationException

logger = logging.getLogger(__name__)

router = APIRouter()


def _allowed_host(url: str) -> bool:
    """Only files on the configured Supabase host may be proxied."""
    target = urlparse(url)
    storage = urlparse(get_settings().supabase_url)
    return (
        target.scheme in ("http", "https")
        and bool(target.hostname)
        and target.hostname == storage.hostname
    )


def _content_disposition(name: str) -> str:
    fallback = "".join(c for c in name if c.isprintable() and c not in '"\\;') or "download"
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(name)}"


@router.get("")
async def download(
    url: Annotated[str, Query(min_length=1)],
    name: Annotated[str, Query(min_length=1, max_length=255)],
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> StreamingResponse:
    """Stream url back with Content-Disposition: attachment; filename=name."""
    if not _allowed_host(url):
        raise ValidationException("URL host is not allowed for download", field="url")

    try:
        upstream = await http_client.send(http_client.build_request("GET", url), stream=True)
    except httpx.HTTPError as e:
        logger.error("Download of %s failed: %s", url, e)
        raise RemoteException(f"Download failed: {e}", service="storage") from e
    if upstream.status_code >= 400:
        await upstream.aclose()
        logger.error("Download of %s failed: status=%d", url, upstream.status_code)
        raise RemoteException(
            f"Download failed: HTTP {upstream.status_code}",
            status_code=upstream.status_code,
            service="storage",
        )

    return StreamingResponse(
        upstream.aiter_bytes(),
        media_type=upstream.headers.get("content-type", DEFAULT_MIME_TYPE),
        headers={"Content-Disposition": _content_disposition(name)},
        background=BackgroundTask(upstream.aclose),
    )
