from __future__ import annotations

from pydantic import BaseModel

from ...models.analytics import UserAnalytics


class AnalyticsBucketResponse(BaseModel):
    year: int | None = None
    period: int | None = None
    total_fame_points: int
    total_rich_points: int


class UserAnalyticsResponse(BaseModel):
    interval: str
    total_fame_points: int
    total_rich_points: int
    buckets: list[AnalyticsBucketResponse]

    @classmethod
    def from_domain(cls, analytics: UserAnalytics) -> "UserAnalyticsResponse":
        return cls(
            interval=analytics.interval.value,
            total_fame_points=analytics.total_fame_points,
            total_rich_points=analytics.total_rich_points,
            buckets=[
                AnalyticsBucketResponse.model_validate(b.model_dump())
                for b in analytics.buckets
            ],
        )
