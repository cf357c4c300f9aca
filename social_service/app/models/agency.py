from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class AgencyMember(BaseModel):
    user: str
    day_target: int = 0
    month_target: int = 0
    credit: int = 0
    expected_salary: int = 0


class AgencyHistoryEntry(BaseModel):
    date: datetime
    amount: int
    user: str | None = None


class Agency(BaseModel):
    """호스트들을 관리자 아래로 묶는 에이전시 도메인 모델."""

    id: str | None = None
    name: str
    balance: int = 0
    admin: str
    members: list[AgencyMember] = Field(default_factory=list)
    history: list[AgencyHistoryEntry] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class CreditsAgency(BaseModel):
    """관리자 시점의 에이전시 크레딧 현황."""

    agency_id: str
    name: str
    balance: int
    history: list[AgencyHistoryEntry]


class HostAgencyData(BaseModel):
    """호스트 시점의 소속 에이전시 정보와 본인 멤버 항목."""

    agency_id: str
    name: str
    admin: str
    member: AgencyMember | None
