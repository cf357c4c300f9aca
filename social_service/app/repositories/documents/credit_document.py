"""credits_history MongoDB 도큐먼트."""

from __future__ import annotations

from typing import Optional

from common.mongo.types import BaseDocument, MongoDateTime, PyObjectId

from ...models.credit import CreditOperation, CreditsHistory


class CreditsHistoryDocument(BaseDocument):
    """MongoDB credits_history 컬렉션 도큐먼트 모델 (append-only)."""

    user: PyObjectId
    amount: int
    type: CreditOperation
    item: Optional[PyObjectId] = None
    date: MongoDateTime

    @classmethod
    def from_domain(cls, entry: CreditsHistory) -> "CreditsHistoryDocument":
        return cls.model_validate(entry.model_dump())

    def to_domain(self) -> CreditsHistory:
        return CreditsHistory.model_validate(self.to_plain())
