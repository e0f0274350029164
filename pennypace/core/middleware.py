"""Middleware: request correlation IDs and the per-request access log."""

import hashlib
import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from pennypace.dependencies import USER_ID_HEADER

logger = logging.getLogger("pennypace.access")

REQUEST_ID_HEADER = "X-Request-ID"


def _incoming_request_id(request: Request) -> str | None:
    """The caller's X-Request-ID, if it is a UUID."""
    raw = request.headers.get(REQUEST_ID_HEADER)
    if not raw:
        return None
    try:
        return str(uuid.UUID(raw))
    except ValueError:
        return None


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag every request with an ID and echo it back.

    A client that already sent a UUID in X-Request-ID keeps it, so the app's
    entries line up with its own logs. Anything else gets a fresh ID.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _incoming_request_id(request) or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _log_user(request: Request) -> str:
    # routes that resolved the user set request.state.user_id; others
    # (404s, /health) fall back to the raw header
    user_id = getattr(request.state, "user_id", None) or request.headers.get(USER_ID_HEADER)
    return hash_user_id(user_id) if user_id else "-"


class AccessLogMiddleware(BaseHTTPMiddleware):
    """One line per request. Server errors are logged at ERROR."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        elapsed_ms = (time.monotonic() - start) * 1000

        level = logging.ERROR if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "request_id=%s user=%s method=%s path=%s status=%d elapsed_ms=%.1f",
            getattr(request.state, "request_id", "-"),
            _log_user(request),
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


def hash_user_id(uid: str) -> str:
    """First 12 hex chars of SHA-256, so logs never carry raw user ids."""
    return hashlib.sha256(str(uid).encode()).hexdigest()[:12]
