from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


GroupRole = Literal["member", "moderator"]
InvitationStatus = Literal["pending", "accepted", "declined"]


class GroupMember(BaseModel):
    user: str
    joined_at: datetime
    role: GroupRole = "member"


class GroupInvitation(BaseModel):
    user: str
    invited_at: datetime
    status: InvitationStatus = "pending"


class Group(BaseModel):
    id: str | None = None
    name: str
    description: str = ""
    admin: str
    members: list[GroupMember] = Field(default_factory=list)
    invitations: list[GroupInvitation] = Field(default_factory=list)
    group_room: str | None = None
    created_at: datetime
    updated_at: datetime
