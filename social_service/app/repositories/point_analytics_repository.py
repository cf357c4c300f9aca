from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pymongo.database import Database

from common.mongo.types import to_object_id

from ..models.analytics import AnalyticsInterval, PointAnalytics
from .documents.point_analytics_document import PointAnalyticsDocument
from .interfaces import PointAnalyticsRepositoryInterface


# interval 별 $group _id 구성. all-time 은 그룹 키 없이 전체 합계.
_GROUP_KEYS: dict[AnalyticsInterval, dict[str, Any]] = {
    AnalyticsInterval.DAILY: {
        "year": {"$year": "$timestamp"},
        "period": {"$dayOfYear": "$timestamp"},
    },
    AnalyticsInterval.WEEKLY: {
        "year": {"$isoWeekYear": "$timestamp"},
        "period": {"$isoWeek": "$timestamp"},
    },
    AnalyticsInterval.MONTHLY: {
        "year": {"$year": "$timestamp"},
        "period": {"$month": "$timestamp"},
    },
}


def build_analytics_pipeline(
    user_ref: str,
    interval: AnalyticsInterval,
    room_id: str | None = None,
) -> list[dict[str, Any]]:
    """point_analytics 집계 파이프라인을 만든다.

    - $match: user (+ room_id)
    - $group: interval 에 따른 (year, period) 키 또는 전체(_id=None)
    - $sort: (year, period) 오름차순
    """

    match: dict[str, Any] = {"user": to_object_id(user_ref)}
    if room_id:
        match["room_id"] = to_object_id(room_id)

    group_key = _GROUP_KEYS.get(interval)
    pipeline: list[dict[str, Any]] = [
        {"$match": match},
        {
            "$group": {
                "_id": group_key,
                "total_fame_points": {"$sum": "$fame_points"},
                "total_rich_points": {"$sum": "$rich_points"},
            }
        },
    ]
    if group_key is not None:
        pipeline.append({"$sort": {"_id.year": 1, "_id.period": 1}})
    return pipeline


class PointAnalyticsRepository(PointAnalyticsRepositoryInterface):
    """point_analytics 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["point_analytics"]

    def insert(self, event: PointAnalytics) -> PointAnalytics:
        now = datetime.now(timezone.utc)
        event.created_at = now
        event.updated_at = now

        payload = PointAnalyticsDocument.from_domain(event).to_mongo_record()
        result = self._col.insert_one(payload)
        payload["_id"] = result.inserted_id
        return PointAnalyticsDocument.model_validate(payload).to_domain()

    def aggregate(self, pipeline: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return list(self._col.aggregate(pipeline))
