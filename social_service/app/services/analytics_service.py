from __future__ import annotations

from fastapi import Depends
from pymongo.database import Database

from common.mongo.client import get_database

from ..models.analytics import AnalyticsBucket, AnalyticsInterval, UserAnalytics
from ..repositories.interfaces import (
    PointAnalyticsRepositoryInterface,
    UserRepositoryInterface,
)
from ..repositories.point_analytics_repository import (
    PointAnalyticsRepository,
    build_analytics_pipeline,
)
from .lookup import require_object_id, require_user
from .users_service import get_user_repository


class AnalyticsService:
    """fame/rich 포인트 이벤트를 기간 단위로 합산한다."""

    def __init__(
        self,
        analytics_repo: PointAnalyticsRepositoryInterface,
        user_repo: UserRepositoryInterface,
    ) -> None:
        self._analytics_repo = analytics_repo
        self._user_repo = user_repo

    def get_user_analytics(
        self,
        user_id: str,
        interval: AnalyticsInterval | str | None,
        room_id: str | None = None,
    ) -> UserAnalytics:
        """interval 이 daily/weekly/monthly 이면 (year, period) 별 버킷, 그 외에는 전체 합계 버킷 하나를 반환한다.

        이벤트가 없으면 합계 0, 빈 버킷 목록이다.
        """

        if not isinstance(interval, AnalyticsInterval):
            interval = AnalyticsInterval.parse(interval)
        user = require_user(self._user_repo, user_id)
        if room_id:
            require_object_id(room_id, "room")

        rows = self._analytics_repo.aggregate(
            build_analytics_pipeline(user.id, interval, room_id or None)
        )

        buckets: list[AnalyticsBucket] = []
        total_fame = 0
        total_rich = 0
        for row in rows:
            fame = int(row.get("total_fame_points") or 0)
            rich = int(row.get("total_rich_points") or 0)
            total_fame += fame
            total_rich += rich
            key = row.get("_id") or {}
            buckets.append(
                AnalyticsBucket(
                    year=key.get("year"),
                    period=key.get("period"),
                    total_fame_points=fame,
                    total_rich_points=rich,
                )
            )

        buckets.sort(key=lambda b: (b.year or 0, b.period or 0))
        return UserAnalytics(
            interval=interval,
            total_fame_points=total_fame,
            total_rich_points=total_rich,
            buckets=buckets,
        )


def get_point_analytics_repository(
    db: Database = Depends(get_database),
) -> PointAnalyticsRepositoryInterface:
    return PointAnalyticsRepository(db)


def get_analytics_service(
    analytics_repo: PointAnalyticsRepositoryInterface = Depends(
        get_point_analytics_repository
    ),
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
) -> AnalyticsService:
    """FastAPI DI용 AnalyticsService 팩토리."""

    return AnalyticsService(analytics_repo=analytics_repo, user_repo=user_repo)
