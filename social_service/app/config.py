from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(slots=True, frozen=True)
class ServiceConfig:
    """social-service 설정 루트. 모든 값은 환경 변수에서 읽는다."""

    port: int = 8003
    user_id_max_attempts: int = 100
    user_id_insert_retries: int = 3
    password_hash_rounds: int = 8
    seed_file: str = "seed.yaml"


def _read_int(name: str, default: int, *, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"invalid {name}: {raw!r}") from exc
    if value < minimum:
        raise RuntimeError(f"{name} must be >= {minimum} (got {value})")
    return value


def load_config() -> ServiceConfig:
    return ServiceConfig(
        port=_read_int("SOCIAL_SERVICE_PORT", 8003),
        user_id_max_attempts=_read_int("USER_ID_MAX_ATTEMPTS", 100),
        user_id_insert_retries=_read_int("USER_ID_INSERT_RETRIES", 3),
        # passlib bcrypt 는 4..31 라운드만 허용한다.
        password_hash_rounds=_read_int("PASSWORD_HASH_ROUNDS", 8, minimum=4),
        seed_file=os.getenv("SEED_FILE", "seed.yaml"),
    )


@lru_cache(maxsize=1)
def get_config() -> ServiceConfig:
    return load_config()
