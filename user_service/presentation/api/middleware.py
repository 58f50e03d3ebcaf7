"""HTTP middleware: request correlation for structured logs."""

import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from user_service.config import bind_request_context, clear_request_context

REQUEST_ID_HEADER = "X-Request-ID"

# Client-supplied IDs longer than this are replaced
MAX_REQUEST_ID_LENGTH = 128


def resolve_request_id(header_value: str | None) -> str:
    """Reuse the caller's request ID when sane, otherwise generate one."""
    if header_value and len(header_value) <= MAX_REQUEST_ID_LENGTH and header_value.isprintable():
        return header_value
    return str(uuid.uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind request_id / path / method to every log line of the request.

    The request ID is echoed back in the X-Request-ID response header.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        bind_request_context(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )

        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_context()
