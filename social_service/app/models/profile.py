from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from .user import UserSummary


Gender = Literal["male", "female"]


class ChargeLevel(BaseModel):
    level: int = 1
    stars: float = Field(default=0.0, ge=0, le=11)


class ProfileInfo(BaseModel):
    about: str = ""
    album: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)


class ImageRef(BaseModel):
    image: str


class GiftSummary(BaseModel):
    total_gifts: int = 0
    top_gifts: list[ImageRef] = Field(default_factory=list)


class BadgeSummary(BaseModel):
    total_badges: int = 0
    top_badges: list[ImageRef] = Field(default_factory=list)


class Profile(BaseModel):
    """유저당 하나씩 존재하는 프로필 도메인 모델 (user 는 User.id)."""

    id: str | None = None
    user: str
    country: str = ""
    charge_level: ChargeLevel = Field(default_factory=ChargeLevel)
    gender: Gender | None = None
    age: int | None = None
    charisma: int = 0
    level: int = 1
    group_name: str = ""
    info: ProfileInfo = Field(default_factory=ProfileInfo)
    gifts: GiftSummary = Field(default_factory=GiftSummary)
    badges: BadgeSummary = Field(default_factory=BadgeSummary)
    current_room: str | None = None
    vip_level: int = 0
    pro_expiration_date: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ProfileUpdateInput(BaseModel):
    country: str | None = None
    charge_level: ChargeLevel | None = None
    gender: Gender | None = None
    age: int | None = Field(default=None, ge=0)
    charisma: int | None = None
    group_name: str | None = None
    info: ProfileInfo | None = None
    current_room: str | None = None


class MainProfile(BaseModel):
    """본인 프로필 조회 결과 (프로필 + 유저 요약)."""

    profile: Profile
    user: UserSummary
    email: str


class PublicProfile(BaseModel):
    user_id: str
    name: str
    avatar: str
    level: int
    credits: int
    charisma: int
    country: str
