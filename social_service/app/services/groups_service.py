from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends
from pymongo.database import Database

from common.mongo.client import get_database

from ..exceptions import ConflictError, NotFoundError, ValidationError
from ..models.group import Group, GroupInvitation, GroupMember, InvitationStatus
from ..repositories.group_repository import GroupRepository
from ..repositories.interfaces import GroupRepositoryInterface, UserRepositoryInterface
from .lookup import require_object_id, require_user
from .users_service import get_user_repository


logger = logging.getLogger(__name__)


class GroupsService:
    """그룹 생성과 초대/수락 흐름.

    - 그룹 생성자는 admin 이면서 moderator 멤버로 등록된다.
    - 같은 유저에게 pending 초대가 이미 있으면 새 초대는 ConflictError.
    - 초대 상태는 전이 규칙 없이 그대로 덮어쓴다. accepted 이면 멤버로 추가한다.
    """

    def __init__(
        self,
        group_repo: GroupRepositoryInterface,
        user_repo: UserRepositoryInterface,
    ) -> None:
        self._group_repo = group_repo
        self._user_repo = user_repo

    def create_group(
        self, admin_user_id: str, name: str, description: str = ""
    ) -> Group:
        name = name.strip()
        if not name:
            raise ValidationError("group name is required")
        admin = require_user(self._user_repo, admin_user_id)

        now = datetime.now(timezone.utc)
        group = self._group_repo.insert(
            Group(
                name=name,
                description=description,
                admin=admin.id,
                members=[GroupMember(user=admin.id, joined_at=now, role="moderator")],
                created_at=now,
                updated_at=now,
            )
        )
        self._user_repo.add_relation(admin.id, "groups", group.id)
        logger.info("group created (group_id=%s, admin=%s)", group.id, admin.user_id)
        return group

    def get_group(self, group_id: str) -> Group:
        require_object_id(group_id, "group")
        group = self._group_repo.find_by_id(group_id)
        if group is None:
            raise NotFoundError(f"group not found (id={group_id})")
        return group

    def invite(self, group_id: str, invitee_user_id: str) -> Group:
        group = self.get_group(group_id)
        invitee = require_user(self._user_repo, invitee_user_id)

        if any(m.user == invitee.id for m in group.members):
            raise ConflictError(f"user {invitee_user_id} is already a member")

        added = self._group_repo.add_invitation(
            group_id,
            GroupInvitation(user=invitee.id, invited_at=datetime.now(timezone.utc)),
        )
        if not added:
            raise ConflictError(
                f"user {invitee_user_id} already has a pending invitation"
            )
        return self.get_group(group_id)

    def respond_invitation(
        self, group_id: str, invitee_user_id: str, status: InvitationStatus
    ) -> Group:
        self.get_group(group_id)
        invitee = require_user(self._user_repo, invitee_user_id)

        updated = self._group_repo.set_invitation_status(group_id, invitee.id, status)
        if updated is None:
            raise NotFoundError(
                f"invitation not found (group_id={group_id}, user_id={invitee_user_id})"
            )

        if status == "accepted":
            self._group_repo.add_member(
                group_id,
                GroupMember(user=invitee.id, joined_at=datetime.now(timezone.utc)),
            )
            self._user_repo.add_relation(invitee.id, "groups", group_id)
            return self.get_group(group_id)
        return updated


def get_group_repository(
    db: Database = Depends(get_database),
) -> GroupRepositoryInterface:
    return GroupRepository(db)


def get_groups_service(
    group_repo: GroupRepositoryInterface = Depends(get_group_repository),
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
) -> GroupsService:
    """FastAPI DI용 GroupsService 팩토리."""

    return GroupsService(group_repo=group_repo, user_repo=user_repo)
