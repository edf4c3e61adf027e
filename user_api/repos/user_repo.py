from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Protocol

from user_api.models.user import User

logger = logging.getLogger(__name__)


class UserRepo(Protocol):
    def list(self) -> list[User]: ...
    def get_by_id(self, user_id: int) -> User | None: ...
    def add(self, name: str, email: str) -> User: ...
    def update(self, user_id: int, name: str, email: str) -> User | None: ...
    def delete(self, user_id: int) -> bool: ...
    def count(self) -> int: ...


class InMemoryUserRepo:
    """Process-lifetime user store.

    Users are kept in insertion order.  Ids come from a counter that starts
    at 1 and only moves forward, so a deleted id is never handed out again.
    ``User`` is frozen, so the values returned here can't be used to mutate
    the store; updates swap in a new value at the same position.
    """

    def __init__(self) -> None:
        self._users: list[User] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def list(self) -> list[User]:
        with self._lock:
            return list(self._users)

    def get_by_id(self, user_id: int) -> User | None:
        with self._lock:
            return self._find(user_id)[1]

    def add(self, name: str, email: str) -> User:
        with self._lock:
            user = User(id=self._next_id, name=name, email=email)
            self._next_id += 1
            self._users.append(user)
        logger.debug("Stored user id=%d", user.id)
        return user

    def update(self, user_id: int, name: str, email: str) -> User | None:
        with self._lock:
            index, existing = self._find(user_id)
            if existing is None:
                return None
            updated = replace(existing, name=name, email=email)
            self._users[index] = updated
        return updated

    def delete(self, user_id: int) -> bool:
        with self._lock:
            index, existing = self._find(user_id)
            if existing is None:
                return False
            del self._users[index]
        return True

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def _find(self, user_id: int) -> tuple[int, User | None]:
        # Caller holds the lock.
        for index, user in enumerate(self._users):
            if user.id == user_id:
                return index, user
        return -1, None
