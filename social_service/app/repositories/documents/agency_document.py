from __future__ import annotations

from typing import Optional

from pydantic import Field

from common.mongo.types import (
    BaseDocument,
    EmbeddedDocument,
    MongoDateTime,
    PyObjectId,
)

from ...models.agency import Agency


class AgencyMemberDocument(EmbeddedDocument):
    user: PyObjectId
    day_target: int = 0
    month_target: int = 0
    credit: int = 0
    expected_salary: int = 0


class AgencyHistoryDocument(EmbeddedDocument):
    date: MongoDateTime
    amount: int
    user: Optional[PyObjectId] = None


class AgencyDocument(BaseDocument):
    """MongoDB agencies 컬렉션 도큐먼트 모델."""

    name: str
    balance: int = 0
    admin: PyObjectId
    members: list[AgencyMemberDocument] = Field(default_factory=list)
    history: list[AgencyHistoryDocument] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, agency: Agency) -> "AgencyDocument":
        return cls.model_validate(agency.model_dump())

    def to_domain(self) -> Agency:
        return Agency.model_validate(self.to_plain())
