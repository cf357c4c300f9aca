from __future__ import annotations

from typing import Optional

from pydantic import Field

from common.mongo.types import (
    BaseDocument,
    EmbeddedDocument,
    MongoDateTime,
    PyObjectId,
)

from ...models.group import Group, GroupRole, InvitationStatus


class GroupMemberDocument(EmbeddedDocument):
    user: PyObjectId
    joined_at: MongoDateTime
    role: GroupRole = "member"


class GroupInvitationDocument(EmbeddedDocument):
    user: PyObjectId
    invited_at: MongoDateTime
    status: InvitationStatus = "pending"


class GroupDocument(BaseDocument):
    """MongoDB groups 컬렉션 도큐먼트 모델."""

    name: str
    description: str = ""
    admin: PyObjectId
    members: list[GroupMemberDocument] = Field(default_factory=list)
    invitations: list[GroupInvitationDocument] = Field(default_factory=list)
    group_room: Optional[PyObjectId] = None

    @classmethod
    def from_domain(cls, group: Group) -> "GroupDocument":
        return cls.model_validate(group.model_dump())

    def to_domain(self) -> Group:
        return Group.model_validate(self.to_plain())
