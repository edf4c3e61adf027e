"""Outermost interceptor: turns any escaped exception into a generic 500.

The exception text and traceback are logged server-side only.  The client
always receives the same opaque body, and the exception is not re-raised,
so one failing request never takes the worker down.
"""

from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = {"error": "Internal server error."}


class ErrorTrapMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(
                "Unhandled error: %s",
                exc,
                extra={"method": request.method, "path": request.url.path},
            )
            return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)
