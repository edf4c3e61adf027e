"""Bearer token gate.

Runs before routing, so a request without a valid token is rejected
whatever path it targets, including paths that don't exist.  The only
accepted credential is the single shared token from settings; there are
no users or scopes behind it.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

MISSING_TOKEN = "Unauthorized: Missing or invalid token."
INVALID_TOKEN = "Unauthorized: Invalid token."


def _unauthorized(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={"error": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


class TokenGateMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        *,
        token: str,
        open_paths: Iterable[str] = (),
    ) -> None:
        super().__init__(app)
        if not token:
            raise ValueError("token must be non-empty")
        self._token = token
        self._open_paths = frozenset(open_paths)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self._open_paths:
            return await call_next(request)

        auth_header = request.headers.get("authorization")
        if auth_header is None or not auth_header.startswith(BEARER_PREFIX):
            logger.warning("Missing or malformed Authorization header")
            return _unauthorized(MISSING_TOKEN)

        presented = auth_header[len(BEARER_PREFIX) :].strip()
        if not secrets.compare_digest(
            presented.encode("utf-8"), self._token.encode("utf-8")
        ):
            logger.warning("Invalid bearer token rejected")
            return _unauthorized(INVALID_TOKEN)

        return await call_next(request)
