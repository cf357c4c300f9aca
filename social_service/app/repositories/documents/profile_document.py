from __future__ import annotations

from pydantic import Field

from common.mongo.types import BaseDocument, MongoDateTime, PyObjectId

from ...models.profile import (
    BadgeSummary,
    ChargeLevel,
    Gender,
    GiftSummary,
    Profile,
    ProfileInfo,
)


class ProfileDocument(BaseDocument):
    """MongoDB profiles 컬렉션 도큐먼트 모델 (user 필드 unique)."""

    user: PyObjectId
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
    pro_expiration_date: MongoDateTime | None = None

    @classmethod
    def from_domain(cls, profile: Profile) -> "ProfileDocument":
        return cls.model_validate(profile.model_dump())

    def to_domain(self) -> Profile:
        return Profile.model_validate(self.to_plain())
