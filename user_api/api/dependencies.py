from __future__ import annotations

from fastapi import Request

from user_api.repos.user_repo import UserRepo


def get_user_repo(request: Request) -> UserRepo:
    """Return the store attached to the running app by ``create_app``."""
    return request.app.state.user_repo
