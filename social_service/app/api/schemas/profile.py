"""프로필 라우터 응답 스키마.

목록 응답은 기존 클라이언트 호환을 위해 friends_list / followers_list 같은 래퍼 키를 사용한다.
"""

from __future__ import annotations

from pydantic import BaseModel

from common.types.fields import UtcDateTime

from ...models.agency import AgencyHistoryEntry, AgencyMember
from ...models.level import UserLevel
from ...models.profile import (
    ChargeLevel,
    Gender,
    MainProfile,
    Profile,
    ProfileInfo,
    BadgeSummary,
    GiftSummary,
)
from .users import UserSummaryResponse


class ProfileResponse(BaseModel):
    id: str | None
    user: str
    country: str
    charge_level: ChargeLevel
    gender: Gender | None = None
    age: int | None = None
    charisma: int
    level: int
    group_name: str
    info: ProfileInfo
    gifts: GiftSummary
    badges: BadgeSummary
    current_room: str | None = None
    vip_level: int
    pro_expiration_date: UtcDateTime | None = None
    created_at: UtcDateTime
    updated_at: UtcDateTime

    @classmethod
    def from_domain(cls, profile: Profile) -> "ProfileResponse":
        return cls.model_validate(profile.model_dump())


class MainProfileResponse(BaseModel):
    profile: ProfileResponse
    user: UserSummaryResponse
    email: str

    @classmethod
    def from_domain(cls, main: MainProfile) -> "MainProfileResponse":
        return cls(
            profile=ProfileResponse.from_domain(main.profile),
            user=UserSummaryResponse.from_domain(main.user),
            email=main.email,
        )


class ProfileUpdateRequest(BaseModel):
    country: str | None = None
    charge_level: ChargeLevel | None = None
    gender: Gender | None = None
    age: int | None = None
    charisma: int | None = None
    group_name: str | None = None
    info: ProfileInfo | None = None
    current_room: str | None = None


class PublicProfileResponse(BaseModel):
    user_id: str
    name: str
    avatar: str
    level: int
    credits: int
    charisma: int
    country: str


class FriendsListResponse(BaseModel):
    friends_list: list[UserSummaryResponse]


class FollowersListResponse(BaseModel):
    followers_list: list[UserSummaryResponse]


class FollowingListResponse(BaseModel):
    following_list: list[UserSummaryResponse]


class BlockedListResponse(BaseModel):
    user: str
    blocked_list: list[UserSummaryResponse]


class SearchListResponse(BaseModel):
    search_list: list[UserSummaryResponse]


class JoinRequestsResponse(BaseModel):
    users: list[UserSummaryResponse]


class VipLevelResponse(BaseModel):
    vip_level: int


class ProExpirationResponse(BaseModel):
    expiration_date: UtcDateTime | None = None


class UserLevelResponse(BaseModel):
    user_id: str
    level: int
    fame_points: int
    rich_points: int
    next_level: int | None = None
    next_fame_threshold: int | None = None
    next_rich_threshold: int | None = None

    @classmethod
    def from_domain(cls, level: UserLevel) -> "UserLevelResponse":
        return cls.model_validate(level.model_dump())


class AgencyHistoryResponse(BaseModel):
    date: UtcDateTime
    amount: int
    user: str | None = None

    @classmethod
    def from_domain(cls, entry: AgencyHistoryEntry) -> "AgencyHistoryResponse":
        return cls.model_validate(entry.model_dump())


class CreditsAgencyResponse(BaseModel):
    agency_id: str
    name: str
    balance: int
    history: list[AgencyHistoryResponse]


class HostAgencyDataResponse(BaseModel):
    agency_id: str
    name: str
    admin: str
    member: AgencyMember | None = None


class FollowActionResponse(BaseModel):
    message: str
