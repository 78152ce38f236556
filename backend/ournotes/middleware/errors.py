"""
OurNotes — Unhandled Error Middleware
=======================================

What:  Turns any exception no handler claimed into 500 {"error": "Internal
       server error"}.
How:   Sits innermost, below CORS, so the 500 still passes through CORS,
       request logging and request ID on the way out. Starlette runs an
       app-level `Exception` handler from its outermost ServerErrorMiddleware,
       which would skip all three.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ournotes.middleware.request_id import request_id_var

logger = logging.getLogger("ournotes.main")


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unexpected error: %s",
                request_id_var.get(""),
                str(exc),
                exc_info=True,
            )
            return JSONResponse(status_code=500, content={"error": "Internal server error"})
