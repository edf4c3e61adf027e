"""Shared builders for tests that construct their own app."""

from __future__ import annotations

from user_api.core.config import Settings

TEST_TOKEN = "test-token"


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "app_env": "test",
        "log_level": "info",
        "log_json": False,
        "host": "127.0.0.1",
        "port": 8000,
        "api_token": TEST_TOKEN,
    }
    values.update(overrides)
    return Settings(**values)  # type: ignore[arg-type]
