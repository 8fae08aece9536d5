"""Request ID middleware.

Forwards a client-supplied request ID or generates one, exposes it to
handlers as ``request.state.request_id`` and echoes it on the response.
Client values are sanitized (length + character set) to prevent log injection.
"""

import re
from typing import Callable

from doclibrary.middleware._asgi import get_header
from doclibrary.shared.utils.generators import generate_cuid

REQUEST_ID_MAX_LENGTH = 64
REQUEST_ID_ALLOWED_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


def sanitize_request_id(raw: str | None) -> str:
    """Return raw if it is a safe ID; otherwise a fresh one."""
    value = (raw or "").strip()
    if (
        not value
        or len(value) > REQUEST_ID_MAX_LENGTH
        or not REQUEST_ID_ALLOWED_PATTERN.match(value)
    ):
        return generate_cuid()
    return value


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Tag every HTTP request and response with a request ID. Raw ASGI."""
    header_bytes = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = sanitize_request_id(get_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_request_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = [
                    (k, v) for k, v in message.get("headers", []) if k.lower() != header_bytes
                ]
                headers.append((header_bytes, request_id.encode()))
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_with_request_id)

    return asgi_app
