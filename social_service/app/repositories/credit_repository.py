"""크레딧 변동 이력 레포지토리 구현체."""

from __future__ import annotations

from datetime import datetime, timezone

from pymongo.database import Database

from common.mongo.types import to_object_id

from ..models.credit import CreditsHistory
from .documents.credit_document import CreditsHistoryDocument
from .interfaces import CreditsHistoryRepositoryInterface


class CreditsHistoryRepository(CreditsHistoryRepositoryInterface):
    """credits_history 컬렉션에 대한 MongoDB 접근 레이어 (append-only)."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["credits_history"]

    def create(self, entry: CreditsHistory) -> CreditsHistory:
        now = datetime.now(timezone.utc)
        entry.created_at = now
        entry.updated_at = now

        payload = CreditsHistoryDocument.from_domain(entry).to_mongo_record()
        result = self._col.insert_one(payload)
        payload["_id"] = result.inserted_id
        return CreditsHistoryDocument.model_validate(payload).to_domain()

    def list_by_user(
        self, user_ref: str, page: int, limit: int
    ) -> tuple[list[CreditsHistory], int]:
        """유저의 크레딧 이력을 최신순으로 조회한다."""

        filter_doc = {"user": to_object_id(user_ref)}
        skip = (page - 1) * limit

        total = self._col.count_documents(filter_doc)
        cursor = self._col.find(
            filter_doc,
            sort=[("date", -1), ("_id", -1)],
            skip=skip,
            limit=limit,
        )

        items = [CreditsHistoryDocument.model_validate(raw).to_domain() for raw in cursor]
        return items, total
