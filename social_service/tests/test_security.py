from __future__ import annotations

import json

import pytest

from common.middleware.request_trace import redact_body
from social_service.app.exceptions import ValidationError
from social_service.app.security import PasswordHasher, check_password_strength


def test_password_strength_checks_trimmed_value_but_keeps_input() -> None:
    assert check_password_strength("  Password123 ") == "  Password123 "
    with pytest.raises(ValidationError):
        check_password_strength("  Pass1  ")


@pytest.mark.parametrize("password", ["Pass1", "passwordonly", "12345678", "        "])
def test_password_strength_rejects(password: str) -> None:
    with pytest.raises(ValidationError):
        check_password_strength(password)


def test_hasher_round_trip() -> None:
    hasher = PasswordHasher(rounds=4)

    hashed = hasher.hash("Password123")

    assert hashed != "Password123"
    assert hasher.verify("Password123", hashed)
    assert not hasher.verify("Password124", hashed)


def test_padded_password_verifies_as_typed() -> None:
    hasher = PasswordHasher(rounds=4)
    typed = "  Password123  "

    stored = hasher.hash(check_password_strength(typed))

    assert hasher.verify(typed, stored)
    assert not hasher.verify("Password123", stored)


def test_redact_body_masks_password() -> None:
    body = json.dumps({"email": "a@example.com", "password": "Password123"})

    assert json.loads(redact_body(body)) == {"email": "a@example.com", "password": "***"}
    assert redact_body("not json") == "not json"
    assert redact_body('{"name": "x"}') == '{"name": "x"}'
