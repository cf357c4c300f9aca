from __future__ import annotations

from typing import Optional

from common.mongo.types import BaseDocument, MongoDateTime, PyObjectId

from ...models.analytics import PointAnalytics


class PointAnalyticsDocument(BaseDocument):
    """MongoDB point_analytics 컬렉션 도큐먼트 모델."""

    user: PyObjectId
    fame_points: int = 0
    rich_points: int = 0
    timestamp: MongoDateTime
    room_id: Optional[PyObjectId] = None

    @classmethod
    def from_domain(cls, event: PointAnalytics) -> "PointAnalyticsDocument":
        return cls.model_validate(event.model_dump())

    def to_domain(self) -> PointAnalytics:
        return PointAnalytics.model_validate(self.to_plain())
