from __future__ import annotations

import re
from dataclasses import dataclass

# One "@", then at least one "." in the domain part.  No RFC parsing.
_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")

NAME_REQUIRED = "Name cannot be empty."
INVALID_EMAIL = "Invalid email address."


@dataclass(frozen=True, slots=True)
class ValidationResult:
    valid: bool
    message: str = ""


def validate_user(name: str, email: str) -> ValidationResult:
    if not name or not name.strip():
        return ValidationResult(valid=False, message=NAME_REQUIRED)

    if not email or not email.strip() or not _EMAIL_RE.fullmatch(email):
        return ValidationResult(valid=False, message=INVALID_EMAIL)

    return ValidationResult(valid=True)
