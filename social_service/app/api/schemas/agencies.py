from __future__ import annotations

from pydantic import BaseModel, Field

from common.types.fields import UtcDateTime

from ...models.agency import Agency, AgencyMember
from .profile import AgencyHistoryResponse


class AgencyCreateRequest(BaseModel):
    name: str = Field(min_length=1)


class AgencyMemberRequest(BaseModel):
    """멤버 추가/갱신 요청. user_id 는 공개 10자리 ID."""

    user_id: str
    day_target: int = Field(default=0, ge=0)
    month_target: int = Field(default=0, ge=0)
    credit: int = 0
    expected_salary: int = Field(default=0, ge=0)


class AgencyCreditRequest(BaseModel):
    amount: int
    user_id: str | None = None


class AgencyResponse(BaseModel):
    id: str | None
    name: str
    balance: int
    admin: str
    members: list[AgencyMember]
    history: list[AgencyHistoryResponse]
    created_at: UtcDateTime
    updated_at: UtcDateTime

    @classmethod
    def from_domain(cls, agency: Agency) -> "AgencyResponse":
        return cls.model_validate(agency.model_dump())
