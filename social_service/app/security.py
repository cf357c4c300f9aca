"""비밀번호 해시/검증 (passlib bcrypt)."""

from __future__ import annotations

import re
from functools import lru_cache

from passlib.context import CryptContext

from .exceptions import ValidationError


MIN_PASSWORD_LENGTH = 8

_LETTER_RE = re.compile(r"[a-zA-Z]")
_DIGIT_RE = re.compile(r"\d")


class PasswordHasher:
    def __init__(self, rounds: int = 8) -> None:
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__default_rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        return self._context.verify(password, hashed)


def check_password_strength(password: str) -> str:
    """비밀번호 규칙을 검사하고, 입력값을 그대로 반환한다.

    규칙 검사는 앞뒤 공백을 제외한 값으로 하지만, 해시 대상은 사용자가 입력한 원문이다.

    - 최소 8자
    - 영문자와 숫자를 각각 하나 이상 포함
    """

    value = password.strip()
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if not _LETTER_RE.search(value) or not _DIGIT_RE.search(value):
        raise ValidationError(
            "password must contain at least one letter and one number"
        )
    return password


@lru_cache(maxsize=4)
def get_password_hasher_for_rounds(rounds: int) -> PasswordHasher:
    return PasswordHasher(rounds=rounds)
