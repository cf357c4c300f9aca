from __future__ import annotations

from typing import Optional

from pydantic import Field

from common.mongo.types import BaseDocument, PyObjectId

from ...models.user import User, UserRole


class UserDocument(BaseDocument):
    """MongoDB users 컬렉션 도큐먼트 모델. 관계 배열은 ObjectId 로 저장한다."""

    user_id: str
    name: str
    email: str
    password: str
    avatar: str = ""
    frame: str = ""
    role: UserRole = "user"
    is_email_verified: bool = False
    friends: list[PyObjectId] = Field(default_factory=list)
    followers: list[PyObjectId] = Field(default_factory=list)
    following: list[PyObjectId] = Field(default_factory=list)
    blocked_users: list[PyObjectId] = Field(default_factory=list)
    groups: list[PyObjectId] = Field(default_factory=list)
    host_agency: Optional[PyObjectId] = None
    credits: int = 0
    fame_points: int = 0
    rich_points: int = 0
    level: int = 1
    is_host: bool = False
    current_room: str | None = None

    @classmethod
    def from_domain(cls, user: User) -> "UserDocument":
        return cls.model_validate(user.model_dump())

    def to_domain(self) -> User:
        return User.model_validate(self.to_plain())
