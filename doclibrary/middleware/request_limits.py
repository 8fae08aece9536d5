"""Request body size limit.

Uploads are read into memory, so an oversized Content-Length is refused
before the body is read. There is no overall request deadline: remote calls
are bounded by the HTTP client timeout, and a handler is never cut off
between the two steps of a write.
"""

from typing import Callable

from doclibrary.middleware._asgi import get_header, send_json_error

# Multipart framing around the file itself
_MULTIPART_OVERHEAD_BYTES = 64 * 1024


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reply 413 when Content-Length exceeds max_bytes plus multipart overhead. Raw ASGI."""
    limit = max_bytes + _MULTIPART_OVERHEAD_BYTES

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] == "http":
            declared = get_header(scope, "content-length")
            if declared and declared.isdigit() and int(declared) > limit:
                await send_json_error(
                    send,
                    413,
                    "PAYLOAD_TOO_LARGE",
                    f"Request body must be at most {max_bytes} bytes",
                    {"max_bytes": max_bytes, "content_length": int(declared)},
                )
                return
        await app(scope, receive, send)

    return asgi_app
