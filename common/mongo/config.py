from __future__ import annotations

import os
from dataclasses import dataclass


MONGO_URI_ENV = "MONGO_URI"
MONGO_DB_NAME_ENV = "MONGO_DB_NAME"
MONGO_TIMEOUT_MS_ENV = "MONGO_SERVER_SELECTION_TIMEOUT_MS"


@dataclass(slots=True, frozen=True)
class MongoConfig:
    uri: str
    db_name: str | None = None
    server_selection_timeout_ms: int = 5000


def get_mongo_uri() -> str:
    """MongoDB 연결 URI 를 환경 변수에서 읽는다.

    설정되지 않은 경우 애플리케이션이 기동 단계에서 바로 실패하도록 RuntimeError 를 발생시킨다.
    """

    value = os.getenv(MONGO_URI_ENV, "").strip()
    if not value:
        raise RuntimeError(
            f"{MONGO_URI_ENV} environment variable is required for MongoDB",
        )
    return value


def get_mongo_db_name() -> str | None:
    """MONGO_DB_NAME 이 비어 있으면 None 을 반환하고, URI 의 기본 DB 를 사용하게 한다."""

    value = os.getenv(MONGO_DB_NAME_ENV, "").strip()
    return value or None


def load_mongo_config() -> MongoConfig:
    raw_timeout = os.getenv(MONGO_TIMEOUT_MS_ENV, "5000")
    try:
        timeout_ms = int(raw_timeout)
    except ValueError as exc:
        raise RuntimeError(
            f"invalid {MONGO_TIMEOUT_MS_ENV}: {raw_timeout!r}",
        ) from exc

    return MongoConfig(
        uri=get_mongo_uri(),
        db_name=get_mongo_db_name(),
        server_selection_timeout_ms=timeout_ms,
    )
