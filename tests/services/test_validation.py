from __future__ import annotations

import pytest

from user_api.services.validation import (
    INVALID_EMAIL,
    NAME_REQUIRED,
    ValidationResult,
    validate_user,
)


def test_valid_user() -> None:
    assert validate_user("Alice", "alice@example.com") == ValidationResult(
        valid=True, message=""
    )


@pytest.mark.parametrize("name", ["", " ", "\t\n"])
def test_blank_name_rejected(name: str) -> None:
    result = validate_user(name, "alice@example.com")
    assert result.valid is False
    assert result.message == NAME_REQUIRED == "Name cannot be empty."


def test_name_checked_before_email() -> None:
    assert validate_user("", "not-an-email").message == NAME_REQUIRED


@pytest.mark.parametrize(
    "email",
    [
        "",
        "   ",
        "alice",
        "alice@",
        "@example.com",
        "alice@example",
        "alice@@example.com",
        "al ice@example.com",
        "alice@exa mple.com",
        "alice@example.",
        "alice@example.com\n",
    ],
)
def test_bad_email_rejected(email: str) -> None:
    result = validate_user("Alice", email)
    assert result.valid is False
    assert result.message == INVALID_EMAIL == "Invalid email address."


@pytest.mark.parametrize(
    "email", ["a@b.co", "first.last@sub.example.org", "x+tag@mail.example.io"]
)
def test_good_email_accepted(email: str) -> None:
    assert validate_user("Alice", email).valid is True
