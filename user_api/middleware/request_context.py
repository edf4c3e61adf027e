"""Request logger.

Every request gets an id, taken from the client's ``X-Request-ID`` header
or freshly generated.  The id is stored in a ContextVar so that any log
line emitted while the request is in flight carries it, whichever module
logs it.  Requests on the same event loop run concurrently on one thread,
which is why this is a ContextVar and not a thread-local.

Once the downstream chain returns, one summary line is logged:

  GET /users/3 => 404 (0.4ms)

If the downstream chain raises, no summary line is written here; the
error trap further out logs the failure instead.
"""

from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class _RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("-")  # type: ignore[attr-defined]
        return True


def install_request_context_filter() -> None:
    # Filters on the root logger only see records logged to the root logger
    # itself, so attach to the handlers as well.
    root = logging.getLogger()
    for target in (root, *root.handlers):
        if not any(isinstance(f, _RequestContextFilter) for f in target.filters):
            target.addFilter(_RequestContextFilter())


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        method = request.method
        path = request.url.path

        req_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        token = request_id_var.set(req_id)

        try:
            start = time.monotonic()
            response = await call_next(request)
            duration_ms = round((time.monotonic() - start) * 1000, 1)

            logger.info(
                "%s %s => %d (%.1fms)",
                method,
                path,
                response.status_code,
                duration_ms,
                extra={
                    "request_id": req_id,
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = req_id
        return response
