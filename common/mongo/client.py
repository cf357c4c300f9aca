from __future__ import annotations

import logging
from typing import Callable

from fastapi import Request
from pymongo import MongoClient
from pymongo.database import Database

from .config import MongoConfig, load_mongo_config


logger = logging.getLogger(__name__)


IndexInitializer = Callable[[Database], None]


class MongoConnection:
    """MongoClient 와 기본 Database 핸들을 묶어서 관리한다.

    - 프로세스 전역 싱글톤 대신 앱 lifespan 에서 생성해 app.state 에 보관한다.
    - connect() 시점에 ping 으로 연결을 검증하고, 주어진 인덱스 초기화 함수를 실행한다.
    """

    def __init__(self, config: MongoConfig) -> None:
        self._config = config
        self._client: MongoClient | None = None
        self._db: Database | None = None

    @classmethod
    def from_env(cls) -> "MongoConnection":
        return cls(load_mongo_config())

    @property
    def database(self) -> Database:
        if self._db is None:
            raise RuntimeError("MongoDB connection is not initialized")
        return self._db

    def connect(self, ensure_indexes: IndexInitializer | None = None) -> Database:
        if self._db is not None:
            return self._db

        client: MongoClient = MongoClient(
            self._config.uri,
            serverSelectionTimeoutMS=self._config.server_selection_timeout_ms,
            tz_aware=True,
        )

        try:
            client.admin.command("ping")
        except Exception as exc:  # noqa: BLE001
            client.close()
            raise RuntimeError(f"failed to connect to MongoDB: {exc}") from exc

        # MONGO_DB_NAME 우선, 없으면 URI 의 기본 DB
        try:
            if self._config.db_name:
                db = client[self._config.db_name]
            else:
                db = client.get_default_database()
        except Exception as exc:  # noqa: BLE001
            client.close()
            raise RuntimeError(
                "MongoDB database name must be specified via MONGO_DB_NAME or in MONGO_URI (mongodb://.../db_name)",
            ) from exc

        if ensure_indexes is not None:
            try:
                ensure_indexes(db)
            except Exception as exc:  # noqa: BLE001
                logger.error("failed to ensure MongoDB indexes: %s", exc)
                client.close()
                raise

        self._client = client
        self._db = db
        logger.info("MongoDB connected and indexes ensured (db=%s)", db.name)
        return db

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB connection closed")
        self._client = None
        self._db = None


def get_database(request: Request) -> Database:
    """FastAPI DI 용: lifespan 에서 app.state.mongo 에 등록된 Database 를 반환한다."""

    connection: MongoConnection = request.app.state.mongo
    return connection.database
