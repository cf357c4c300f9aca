from __future__ import annotations

from datetime import datetime, timezone

from pymongo import ReturnDocument
from pymongo.database import Database

from common.mongo.types import to_object_id

from ..models.group import Group, GroupInvitation, GroupMember, InvitationStatus
from .documents.group_document import (
    GroupDocument,
    GroupInvitationDocument,
    GroupMemberDocument,
)
from .interfaces import GroupRepositoryInterface


class GroupRepository(GroupRepositoryInterface):
    """groups 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["groups"]

    @staticmethod
    def _from_document(doc: dict) -> Group:
        return GroupDocument.model_validate(doc).to_domain()

    def insert(self, group: Group) -> Group:
        now = datetime.now(timezone.utc)
        group.created_at = now
        group.updated_at = now

        payload = GroupDocument.from_domain(group).to_mongo_record()
        result = self._col.insert_one(payload)
        payload["_id"] = result.inserted_id
        return self._from_document(payload)

    def find_by_id(self, id_value: str) -> Group | None:
        doc = self._col.find_one({"_id": to_object_id(id_value)})
        if not doc:
            return None
        return self._from_document(doc)

    def list_by_admin(self, admin_ref: str) -> list[Group]:
        cursor = self._col.find(
            {"admin": to_object_id(admin_ref)}, sort=[("created_at", 1)]
        )
        return [self._from_document(doc) for doc in cursor]

    def add_invitation(self, group_id: str, invitation: GroupInvitation) -> bool:
        record = GroupInvitationDocument.model_validate(invitation.model_dump()).model_dump()
        result = self._col.update_one(
            {
                "_id": to_object_id(group_id),
                "invitations": {
                    "$not": {
                        "$elemMatch": {"user": record["user"], "status": "pending"}
                    }
                },
            },
            {
                "$push": {"invitations": record},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
        )
        return result.modified_count > 0

    def set_invitation_status(
        self, group_id: str, user_ref: str, status: InvitationStatus
    ) -> Group | None:
        # 유저의 초대 상태를 그대로 덮어쓴다. 상태 전이 규칙은 검증하지 않는다.
        doc = self._col.find_one_and_update(
            {
                "_id": to_object_id(group_id),
                "invitations": {
                    "$elemMatch": {"user": to_object_id(user_ref)}
                },
            },
            {
                "$set": {
                    "invitations.$.status": status,
                    "updated_at": datetime.now(timezone.utc),
                }
            },
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        return self._from_document(doc)

    def add_member(self, group_id: str, member: GroupMember) -> bool:
        record = GroupMemberDocument.model_validate(member.model_dump()).model_dump()
        result = self._col.update_one(
            {"_id": to_object_id(group_id), "members.user": {"$ne": record["user"]}},
            {
                "$push": {"members": record},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
        )
        return result.modified_count > 0
