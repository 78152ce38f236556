"""
OurNotes — Request Logging Middleware
=======================================

What:  One access-log line per HTTP request.
How:   Times the request from middleware entry to response and logs method,
       path, status, duration and request ID. Note routes also carry the
       note kind and note id as `extra` fields so log pipelines can group by
       collection. Level by status: 5xx ERROR, 4xx WARNING, else INFO.
When:  Runs inside RequestIDMiddleware so the request ID is already set.

Request bodies are never logged (note text is personal data).
"""

import logging
import time
from typing import Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ournotes.kinds import KINDS_BY_SLUG
from ournotes.middleware.request_id import request_id_var

logger = logging.getLogger("ournotes.access")


def describe_note_route(path: str) -> Dict[str, Optional[str]]:
    """Split "/api/<slug>[/<id>]" into kind/note_id; empty for other paths."""
    parts = path.strip("/").split("/")
    if len(parts) < 2 or parts[0] != "api" or parts[1] not in KINDS_BY_SLUG:
        return {}
    return {
        "note_kind": KINDS_BY_SLUG[parts[1]].label,
        "note_id": parts[2] if len(parts) > 2 else None,
    }


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its status code and duration."""

    # Probed every few seconds by orchestrators
    QUIET_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        rid = request_id_var.get("")
        logger.log(
            level_for_status(response.status_code),
            "%s %s -> %d in %.1fms [%s]",
            request.method,
            path,
            response.status_code,
            elapsed_ms,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": request.client.host if request.client else "unknown",
                **describe_note_route(path),
            },
        )
        return response
