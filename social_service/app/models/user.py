"""유저 도메인 모델.

- Mongo users 컬렉션과 1:1 로 매핑된다.
- 외부(API)에는 10자리 숫자 user_id 로 노출하고, 관계 배열(friends/followers/...)에는
  내부 ObjectId 문자열(id)을 저장한다.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


UserRole = Literal["user", "admin"]


class User(BaseModel):
    id: str | None = None
    user_id: str
    name: str
    email: str
    password: str  # bcrypt 해시
    avatar: str = ""
    frame: str = ""
    role: UserRole = "user"
    is_email_verified: bool = False
    friends: list[str] = Field(default_factory=list)
    followers: list[str] = Field(default_factory=list)
    following: list[str] = Field(default_factory=list)
    blocked_users: list[str] = Field(default_factory=list)
    groups: list[str] = Field(default_factory=list)
    host_agency: str | None = None
    credits: int = 0
    fame_points: int = 0
    rich_points: int = 0
    level: int = 1
    is_host: bool = False
    current_room: str | None = None
    created_at: datetime
    updated_at: datetime


class UserCreateInput(BaseModel):
    name: str
    email: str
    password: str
    avatar: str = ""
    frame: str = ""
    role: UserRole = "user"


class UserUpdateInput(BaseModel):
    """부분 업데이트 입력. None 인 필드는 변경하지 않는다."""

    name: str | None = None
    email: str | None = None
    password: str | None = None
    avatar: str | None = None
    frame: str | None = None
    role: UserRole | None = None
    is_email_verified: bool | None = None
    current_room: str | None = None


class UserFilter(BaseModel):
    name: str | None = None
    role: UserRole | None = None


class UserSummary(BaseModel):
    """관계 목록/검색 결과에 쓰이는 축약 모델."""

    id: str
    user_id: str
    name: str
    avatar: str = ""
    level: int = 1
    credits: int = 0


class Ignorance(BaseModel):
    """차단 목록 조회 뷰. User.blocked_users 에서 파생된다."""

    user: str
    blocked_users: list[UserSummary]
