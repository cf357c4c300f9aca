from __future__ import annotations

from datetime import datetime, timezone

from pymongo import ReturnDocument
from pymongo.database import Database

from common.mongo.types import to_object_id

from ..models.agency import Agency, AgencyHistoryEntry, AgencyMember
from .documents.agency_document import (
    AgencyDocument,
    AgencyHistoryDocument,
    AgencyMemberDocument,
)
from .interfaces import AgencyRepositoryInterface


class AgencyRepository(AgencyRepositoryInterface):
    """agencies 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["agencies"]

    @staticmethod
    def _from_document(doc: dict) -> Agency:
        return AgencyDocument.model_validate(doc).to_domain()

    def insert(self, agency: Agency) -> Agency:
        now = datetime.now(timezone.utc)
        agency.created_at = now
        agency.updated_at = now

        payload = AgencyDocument.from_domain(agency).to_mongo_record()
        result = self._col.insert_one(payload)
        payload["_id"] = result.inserted_id
        return self._from_document(payload)

    def find_by_id(self, id_value: str) -> Agency | None:
        doc = self._col.find_one({"_id": to_object_id(id_value)})
        if not doc:
            return None
        return self._from_document(doc)

    def find_by_admin(self, admin_ref: str) -> Agency | None:
        doc = self._col.find_one(
            {"admin": to_object_id(admin_ref)}, sort=[("created_at", 1)]
        )
        if not doc:
            return None
        return self._from_document(doc)

    def upsert_member(self, agency_id: str, member: AgencyMember) -> Agency | None:
        """같은 user 의 멤버 항목이 있으면 교체하고, 없으면 추가한다."""

        now = datetime.now(timezone.utc)
        member_record = AgencyMemberDocument.model_validate(member.model_dump()).model_dump()
        agency_oid = to_object_id(agency_id)

        doc = self._col.find_one_and_update(
            {"_id": agency_oid, "members.user": member_record["user"]},
            {"$set": {"members.$": member_record, "updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )
        if doc:
            return self._from_document(doc)

        doc = self._col.find_one_and_update(
            {"_id": agency_oid, "members.user": {"$ne": member_record["user"]}},
            {"$push": {"members": member_record}, "$set": {"updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        return self._from_document(doc)

    def record_history(
        self, agency_id: str, entry: AgencyHistoryEntry
    ) -> Agency | None:
        """잔액을 amount 만큼 증감하고 history 에 기록한다. (단일 도큐먼트 연산)"""

        entry_record = AgencyHistoryDocument.model_validate(entry.model_dump()).model_dump()
        doc = self._col.find_one_and_update(
            {"_id": to_object_id(agency_id)},
            {
                "$inc": {"balance": entry.amount},
                "$push": {"history": entry_record},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        return self._from_document(doc)
