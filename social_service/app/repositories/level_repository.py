from __future__ import annotations

from datetime import datetime, timezone

from pymongo.database import Database

from ..models.level import LevelThreshold
from .documents.level_document import LevelThresholdDocument
from .interfaces import LevelRepositoryInterface


class LevelRepository(LevelRepositoryInterface):
    """level_system 컬렉션(레벨별 fame/rich 기준치) 조회."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["level_system"]

    def find_next(self, level: int) -> LevelThreshold | None:
        doc = self._col.find_one({"level": {"$gt": level}}, sort=[("level", 1)])
        if not doc:
            return None
        return LevelThresholdDocument.model_validate(doc).to_domain()

    def upsert(self, threshold: LevelThreshold) -> None:
        """level 기준으로 기준치를 덮어쓴다. (시드 데이터 적재용)"""

        now = datetime.now(timezone.utc)
        self._col.update_one(
            {"level": threshold.level},
            {
                "$set": {
                    "fame_threshold": threshold.fame_threshold,
                    "rich_threshold": threshold.rich_threshold,
                    "updated_at": now,
                },
                "$setOnInsert": {"created_at": now},
            },
            upsert=True,
        )
