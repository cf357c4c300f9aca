from __future__ import annotations

import pytest

from social_service.app.exceptions import IdGenerationExhaustedError
from social_service.app.utils import id_generator
from social_service.app.utils.id_generator import generate_user_id, has_repeated_run


def test_generated_ids_are_ten_digits_without_triple_runs() -> None:
    for _ in range(500):
        user_id = generate_user_id()

        assert len(user_id) == 10
        assert user_id.isdigit()
        assert not has_repeated_run(user_id)


@pytest.mark.parametrize(
    "candidate, expected",
    [
        ("1234567890", False),
        ("1123456789", False),
        ("1112345678", True),
        ("1234567999", True),
        ("1212121212", False),
    ],
)
def test_has_repeated_run(candidate: str, expected: bool) -> None:
    assert has_repeated_run(candidate) is expected


def test_rejected_candidates_are_redrawn(monkeypatch: pytest.MonkeyPatch) -> None:
    draws = iter(["0001234567", "5553334441", "1357924680"])
    monkeypatch.setattr(id_generator, "_draw", lambda length: next(draws))

    assert generate_user_id(max_attempts=5) == "1357924680"


def test_exhausted_attempts_raise(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[int] = []

    def always_rejected(length: int) -> str:
        calls.append(length)
        return "9991234567"

    monkeypatch.setattr(id_generator, "_draw", always_rejected)

    with pytest.raises(IdGenerationExhaustedError):
        generate_user_id(max_attempts=3)
    assert len(calls) == 3


def test_non_positive_attempts_are_rejected() -> None:
    with pytest.raises(ValueError):
        generate_user_id(max_attempts=0)
