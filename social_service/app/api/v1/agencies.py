from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...services.agencies_service import AgenciesService, get_agencies_service
from ..deps import get_current_user_id
from ..schemas.agencies import (
    AgencyCreateRequest,
    AgencyCreditRequest,
    AgencyMemberRequest,
    AgencyResponse,
)

router = APIRouter()


@router.post(
    "",
    response_model=AgencyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="에이전시 생성 (요청 유저가 admin)",
)
async def create_agency(
    body: AgencyCreateRequest,
    current_user_id: str = Depends(get_current_user_id),
    service: AgenciesService = Depends(get_agencies_service),
) -> AgencyResponse:
    return AgencyResponse.from_domain(service.create_agency(current_user_id, body.name))


@router.get("/{agency_id}", response_model=AgencyResponse, summary="에이전시 조회")
async def get_agency(
    agency_id: str,
    service: AgenciesService = Depends(get_agencies_service),
) -> AgencyResponse:
    return AgencyResponse.from_domain(service.get_agency(agency_id))


@router.put(
    "/{agency_id}/members",
    response_model=AgencyResponse,
    summary="멤버 추가/갱신",
)
async def upsert_member(
    agency_id: str,
    body: AgencyMemberRequest,
    service: AgenciesService = Depends(get_agencies_service),
) -> AgencyResponse:
    agency = service.upsert_member(
        agency_id,
        body.user_id,
        day_target=body.day_target,
        month_target=body.month_target,
        credit=body.credit,
        expected_salary=body.expected_salary,
    )
    return AgencyResponse.from_domain(agency)


@router.post(
    "/{agency_id}/credits",
    response_model=AgencyResponse,
    summary="에이전시 크레딧 변동 기록",
)
async def record_credit(
    agency_id: str,
    body: AgencyCreditRequest,
    service: AgenciesService = Depends(get_agencies_service),
) -> AgencyResponse:
    agency = service.record_credit(agency_id, body.amount, body.user_id)
    return AgencyResponse.from_domain(agency)
