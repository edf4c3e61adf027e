from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from user_api.api.dependencies import get_user_repo
from user_api.core.metrics import USERS_STORED
from user_api.models.user import User
from user_api.repos.user_repo import UserRepo
from user_api.services.validation import validate_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])

Repo = Annotated[UserRepo, Depends(get_user_repo)]

# Ids are 32-bit signed integers; anything outside fails binding with a 400.
UserId = Annotated[int, Path(ge=-(2**31), le=2**31 - 1)]


class UserOut(BaseModel):
    id: int
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> UserOut:
        return cls(id=user.id, name=user.name, email=user.email)


class UserIn(BaseModel):
    # Missing or null fields are treated as empty and fail validation with
    # the usual message.  Unknown keys, including "id", are dropped.
    name: str | None = None
    email: str | None = None


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _not_found(user_id: int) -> JSONResponse:
    logger.warning("User not found id=%d", user_id)
    return _message(status.HTTP_404_NOT_FOUND, f"User with ID {user_id} not found.")


@router.get("/users", response_model=list[UserOut])
def list_users(repo: Repo) -> list[UserOut]:
    return [UserOut.from_user(u) for u in repo.list()]


@router.get("/users/{user_id}", response_model=UserOut)
def get_user(user_id: UserId, repo: Repo) -> UserOut | JSONResponse:
    user = repo.get_by_id(user_id)
    if user is None:
        return _not_found(user_id)
    return UserOut.from_user(user)


@router.post("/users", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserIn, repo: Repo, response: Response
) -> UserOut | JSONResponse:
    name, email = payload.name or "", payload.email or ""
    result = validate_user(name, email)
    if not result.valid:
        logger.warning("Rejected user payload: %s", result.message)
        return _message(status.HTTP_400_BAD_REQUEST, result.message)

    user = repo.add(name, email)
    USERS_STORED.set(repo.count())
    logger.info("Created user id=%d", user.id)

    response.headers["Location"] = f"/users/{user.id}"
    return UserOut.from_user(user)


@router.put(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def update_user(user_id: UserId, payload: UserIn, repo: Repo) -> Response:
    name, email = payload.name or "", payload.email or ""
    result = validate_user(name, email)
    if not result.valid:
        logger.warning("Rejected update for id=%d: %s", user_id, result.message)
        return _message(status.HTTP_400_BAD_REQUEST, result.message)

    if repo.update(user_id, name, email) is None:
        return _not_found(user_id)

    logger.info("Updated user id=%d", user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_user(user_id: UserId, repo: Repo) -> Response:
    if not repo.delete(user_id):
        return _not_found(user_id)

    USERS_STORED.set(repo.count())
    logger.info("Deleted user id=%d", user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
