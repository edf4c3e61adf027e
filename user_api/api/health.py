"""Liveness and readiness probes.

Both are exempt from the token gate so orchestrators can call them
without credentials.  Neither touches the user store: an unauthenticated
caller learns only that the process is up.
"""

from __future__ import annotations

from fastapi import APIRouter, Response

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.get("/ready")
async def ready() -> Response:
    # Nothing external to wait for; if we can answer, we're ready.
    return Response(status_code=200)
