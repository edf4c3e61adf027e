"""Tests for the outermost error trap."""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient


@pytest.fixture
def failing_app(app: FastAPI) -> FastAPI:
    @app.get("/boom")
    def boom() -> dict:
        raise RuntimeError("database on fire")

    return app


def test_unhandled_exception_returns_generic_500(
    failing_app: FastAPI, auth_headers: dict[str, str]
) -> None:
    client = TestClient(failing_app)
    resp = client.get("/boom", headers=auth_headers)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error."}
    assert resp.headers["content-type"] == "application/json"
    assert "database on fire" not in resp.text


def test_unhandled_exception_is_logged_with_detail(
    failing_app: FastAPI,
    auth_headers: dict[str, str],
    caplog: pytest.LogCaptureFixture,
) -> None:
    client = TestClient(failing_app)
    with caplog.at_level(logging.ERROR, logger="user_api.middleware.errors"):
        client.get("/boom", headers=auth_headers)

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert errors
    assert "database on fire" in errors[0].getMessage()
    assert errors[0].exc_info is not None


def test_service_keeps_serving_after_a_fault(
    failing_app: FastAPI, auth_headers: dict[str, str]
) -> None:
    client = TestClient(failing_app)
    assert client.get("/boom", headers=auth_headers).status_code == 500
    resp = client.get("/users", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == []
