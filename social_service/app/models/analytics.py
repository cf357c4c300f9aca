from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class AnalyticsInterval(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    ALL_TIME = "all-time"

    @classmethod
    def parse(cls, value: str | None) -> "AnalyticsInterval":
        """알 수 없는 값(또는 None)은 all-time 으로 취급한다."""
        if value is None:
            return cls.ALL_TIME
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.ALL_TIME


class PointAnalytics(BaseModel):
    """방 활동으로 적립된 fame/rich 포인트 이벤트 (append-only)."""

    id: str | None = None
    user: str
    fame_points: int = 0
    rich_points: int = 0
    timestamp: datetime
    room_id: str | None = None
    created_at: datetime
    updated_at: datetime


class AnalyticsBucket(BaseModel):
    year: int | None = None
    period: int | None = None  # dayOfYear / isoWeek / month, all-time 이면 None
    total_fame_points: int = 0
    total_rich_points: int = 0


class UserAnalytics(BaseModel):
    interval: AnalyticsInterval
    total_fame_points: int = 0
    total_rich_points: int = 0
    buckets: list[AnalyticsBucket] = Field(default_factory=list)
