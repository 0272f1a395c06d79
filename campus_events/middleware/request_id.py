"""Request ID middleware.

Forwards a safe client-supplied request id or generates one, exposes it on
request.state and in log records for the duration of the request, and
echoes it on the response. Raw ASGI (no BaseHTTPMiddleware).
"""

import re
import uuid
from typing import Callable

from campus_events.shared.telemetry.logging import request_id_var

REQUEST_ID_MAX_LENGTH = 64
REQUEST_ID_ALLOWED_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{1,64}$")


def _header_value(scope: dict, name: str) -> str | None:
    want = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == want:
            return value.decode("utf-8", errors="replace")
    return None


def resolve_request_id(raw: str | None) -> str:
    """Return raw when it is a short token of [a-zA-Z0-9_-]; otherwise a new UUID4."""
    candidate = (raw or "").strip()
    if REQUEST_ID_ALLOWED_PATTERN.match(candidate):
        return candidate
    return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Bind a request id to each HTTP request and its log records."""
    encoded_header = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(_header_value(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        token = request_id_var.set(request_id)

        async def send_with_request_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (encoded_header, request_id.encode()),
                ]
            await send(message)

        try:
            await app(scope, receive, send_with_request_id)
        finally:
            request_id_var.reset(token)

    return asgi_app
