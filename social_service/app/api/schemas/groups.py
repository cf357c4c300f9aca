from __future__ import annotations

from pydantic import BaseModel, Field

from common.types.fields import UtcDateTime

from ...models.group import Group, GroupRole, InvitationStatus


class GroupCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""


class GroupInviteRequest(BaseModel):
    user_id: str


class InvitationResponseRequest(BaseModel):
    status: InvitationStatus


class GroupMemberResponse(BaseModel):
    user: str
    joined_at: UtcDateTime
    role: GroupRole


class GroupInvitationResponse(BaseModel):
    user: str
    invited_at: UtcDateTime
    status: InvitationStatus


class GroupResponse(BaseModel):
    id: str | None
    name: str
    description: str
    admin: str
    members: list[GroupMemberResponse]
    invitations: list[GroupInvitationResponse]
    group_room: str | None = None
    created_at: UtcDateTime
    updated_at: UtcDateTime

    @classmethod
    def from_domain(cls, group: Group) -> "GroupResponse":
        return cls.model_validate(group.model_dump())
