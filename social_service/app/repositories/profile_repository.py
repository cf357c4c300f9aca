from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pymongo import ReturnDocument
from pymongo.database import Database

from common.mongo.types import to_object_id

from ..models.profile import Profile
from .documents.profile_document import ProfileDocument
from .interfaces import ProfileRepositoryInterface


class ProfileRepository(ProfileRepositoryInterface):
    """profiles 컬렉션에 대한 MongoDB 접근 레이어. user(ObjectId) 로 1:1 조회한다."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["profiles"]

    @staticmethod
    def _from_document(doc: dict) -> Profile:
        return ProfileDocument.model_validate(doc).to_domain()

    def insert(self, profile: Profile) -> Profile:
        now = datetime.now(timezone.utc)
        profile.created_at = now
        profile.updated_at = now

        payload = ProfileDocument.from_domain(profile).to_mongo_record()
        result = self._col.insert_one(payload)
        payload["_id"] = result.inserted_id
        return self._from_document(payload)

    def find_by_user(self, user_ref: str) -> Profile | None:
        doc = self._col.find_one({"user": to_object_id(user_ref)})
        if not doc:
            return None
        return self._from_document(doc)

    def update_fields(self, user_ref: str, fields: dict[str, Any]) -> Profile | None:
        set_doc: dict[str, Any] = dict(fields)
        set_doc["updated_at"] = datetime.now(timezone.utc)
        doc = self._col.find_one_and_update(
            {"user": to_object_id(user_ref)},
            {"$set": set_doc},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        return self._from_document(doc)

    def delete_by_user(self, user_ref: str) -> bool:
        result = self._col.delete_one({"user": to_object_id(user_ref)})
        return result.deleted_count > 0
