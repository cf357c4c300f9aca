from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...services.analytics_service import AnalyticsService, get_analytics_service
from ..deps import get_current_user_id
from ..schemas.analytics import UserAnalyticsResponse

router = APIRouter()


@router.get(
    "/user",
    response_model=UserAnalyticsResponse,
    summary="fame/rich 포인트 집계",
    description=(
        "요청 유저의 포인트 이벤트를 interval(daily/weekly/monthly/all-time) 단위로 합산한다. "
        "알 수 없는 interval 은 all-time 으로 처리한다."
    ),
)
async def get_user_analytics(
    interval: Optional[str] = Query(default=None),
    room_id: Optional[str] = Query(default=None, alias="roomId"),
    current_user_id: str = Depends(get_current_user_id),
    service: AnalyticsService = Depends(get_analytics_service),
) -> UserAnalyticsResponse:
    analytics = service.get_user_analytics(current_user_id, interval, room_id)
    return UserAnalyticsResponse.from_domain(analytics)
