from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from common.types.fields import UtcDateTime

from ...models.user import User, UserRole, UserSummary


class UserCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str
    avatar: str = ""
    frame: str = ""
    role: UserRole = "user"


class UserUpdateRequest(BaseModel):
    name: str | None = None
    email: EmailStr | None = None
    password: str | None = None
    avatar: str | None = None
    frame: str | None = None
    role: UserRole | None = None
    is_email_verified: bool | None = None
    current_room: str | None = None


class UserResponse(BaseModel):
    """유저 응답 DTO. password 해시는 절대 포함하지 않는다."""

    id: str | None
    user_id: str
    name: str
    email: str
    avatar: str
    frame: str
    role: str
    is_email_verified: bool
    friends: list[str]
    followers: list[str]
    following: list[str]
    blocked_users: list[str]
    groups: list[str]
    host_agency: str | None = None
    credits: int
    fame_points: int
    rich_points: int
    level: int
    is_host: bool
    current_room: str | None = None
    created_at: UtcDateTime
    updated_at: UtcDateTime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls.model_validate(user.model_dump(exclude={"password"}))


class ListUsersResponse(BaseModel):
    items: list[UserResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class UserSummaryResponse(BaseModel):
    id: str
    user_id: str
    name: str
    avatar: str
    level: int
    credits: int

    @classmethod
    def from_domain(cls, summary: UserSummary) -> "UserSummaryResponse":
        return cls.model_validate(summary.model_dump())


class FollowToggleResponse(BaseModel):
    following: bool
