from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware import Middleware

from user_api.api.health import router as health_router
from user_api.api.metrics_endpoint import router as metrics_router
from user_api.api.users import router as users_router
from user_api.core.config import SETTINGS, Settings
from user_api.core.logging import setup_logging
from user_api.core.metrics import USERS_STORED
from user_api.middleware.errors import ErrorTrapMiddleware
from user_api.middleware.metrics import MetricsMiddleware
from user_api.middleware.request_context import (
    RequestContextMiddleware,
    install_request_context_filter,
)
from user_api.middleware.token_gate import TokenGateMiddleware
from user_api.repos.user_repo import InMemoryUserRepo, UserRepo

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
install_request_context_filter()

logger = logging.getLogger(__name__)

# Liveness/readiness probes that must work without a token.  /metrics is
# gated: it exposes the users_stored gauge.
OPEN_PATHS = ("/health", "/ready")


async def _invalid_request(request: Request, exc: Exception) -> JSONResponse:
    logger.warning("Malformed request %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"message": "Invalid request."})


def create_app(
    settings: Settings | None = None,
    repo: UserRepo | None = None,
) -> FastAPI:
    settings = settings or SETTINGS

    # First entry is the outermost layer:
    # error trap → request logger → metrics → token gate → routes
    middleware = [
        Middleware(ErrorTrapMiddleware),
        Middleware(RequestContextMiddleware),
        Middleware(MetricsMiddleware),
        Middleware(
            TokenGateMiddleware,
            token=settings.api_token,
            open_paths=OPEN_PATHS,
        ),
    ]

    app = FastAPI(
        title="user-api",
        middleware=middleware,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.user_repo = repo if repo is not None else InMemoryUserRepo()
    # The gauge is process-global; reflect this app's store from the start.
    USERS_STORED.set(app.state.user_repo.count())
    app.add_exception_handler(RequestValidationError, _invalid_request)

    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(users_router)
    return app


app = create_app()


def run() -> None:
    logger.info(
        "user-api starting  env=%s log_level=%s host=%s port=%d",
        SETTINGS.app_env,
        SETTINGS.log_level,
        SETTINGS.host,
        SETTINGS.port,
    )
    # log_config=None keeps uvicorn from replacing our handlers.
    uvicorn.run(
        "user_api.main:app",
        host=SETTINGS.host,
        port=SETTINGS.port,
        log_config=None,
    )
