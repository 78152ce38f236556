"""
OurNotes — Request ID Middleware
==================================

What:  Gives every request a short correlation ID and returns it in the
       X-Request-ID response header.
How:   Uses the client's X-Request-ID when sent, otherwise the first 8
       characters of a UUID4. The ID is stored in a ContextVar so loggers and
       exception handlers can read it without the request object.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns and echoes the X-Request-ID of each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
