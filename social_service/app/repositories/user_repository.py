from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

from pymongo import ReturnDocument
from pymongo.database import Database

from common.mongo.types import from_object_id, to_object_id, to_object_ids

from ..models.user import User, UserFilter, UserSummary
from .documents.user_document import UserDocument
from .interfaces import RELATION_FIELDS, UserRepositoryInterface


# 관계 목록/검색 결과에 필요한 필드만 읽는다.
SUMMARY_PROJECTION = {
    "user_id": 1,
    "name": 1,
    "avatar": 1,
    "level": 1,
    "credits": 1,
}


class UserRepository(UserRepositoryInterface):
    """users 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["users"]

    @staticmethod
    def _from_document(doc: dict) -> User:
        return UserDocument.model_validate(doc).to_domain()

    @staticmethod
    def _to_summary(doc: dict) -> UserSummary:
        return UserSummary(
            id=str(doc["_id"]),
            user_id=doc.get("user_id", ""),
            name=doc.get("name", ""),
            avatar=doc.get("avatar") or "",
            level=doc.get("level", 1),
            credits=doc.get("credits", 0),
        )

    @staticmethod
    def _check_relation_field(field: str) -> None:
        if field not in RELATION_FIELDS:
            raise ValueError(f"unsupported relation field: {field}")

    # --- commands ----------------------------------------------------------------
    def insert(self, user: User) -> User:
        """유저를 삽입한다. email / user_id 중복 시 DuplicateKeyError 가 그대로 전파된다."""

        now = datetime.now(timezone.utc)
        user.created_at = now
        user.updated_at = now

        payload = UserDocument.from_domain(user).to_mongo_record()
        result = self._col.insert_one(payload)
        payload["_id"] = result.inserted_id
        return self._from_document(payload)

    def update_fields(self, id_value: str, fields: dict[str, Any]) -> User | None:
        set_doc: dict[str, Any] = dict(fields)
        if set_doc.get("host_agency") is not None:
            set_doc["host_agency"] = to_object_id(set_doc["host_agency"])
        set_doc["updated_at"] = datetime.now(timezone.utc)
        doc = self._col.find_one_and_update(
            {"_id": to_object_id(id_value)},
            {"$set": set_doc},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        return self._from_document(doc)

    def delete_by_id(self, id_value: str) -> bool:
        result = self._col.delete_one({"_id": to_object_id(id_value)})
        return result.deleted_count > 0

    def add_relation(self, id_value: str, field: str, target_id: str) -> bool:
        self._check_relation_field(field)
        result = self._col.update_one(
            {"_id": to_object_id(id_value)},
            {
                "$addToSet": {field: to_object_id(target_id)},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
        )
        return result.matched_count > 0

    def remove_relation(self, id_value: str, field: str, target_id: str) -> bool:
        self._check_relation_field(field)
        result = self._col.update_one(
            {"_id": to_object_id(id_value)},
            {
                "$pull": {field: to_object_id(target_id)},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
        )
        return result.matched_count > 0

    def increment_credits(self, id_value: str, amount: int) -> User | None:
        doc = self._col.find_one_and_update(
            {"_id": to_object_id(id_value)},
            {
                "$inc": {"credits": amount},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        return self._from_document(doc)

    def deduct_credits(self, id_value: str, amount: int) -> User | None:
        # 잔액 확인과 차감을 하나의 도큐먼트 연산으로 처리한다.
        doc = self._col.find_one_and_update(
            {"_id": to_object_id(id_value), "credits": {"$gte": amount}},
            {
                "$inc": {"credits": -amount},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        return self._from_document(doc)

    # --- queries -----------------------------------------------------------------
    def find_by_id(self, id_value: str) -> User | None:
        doc = self._col.find_one({"_id": to_object_id(id_value)})
        if not doc:
            return None
        return self._from_document(doc)

    def find_by_user_id(self, user_id: str) -> User | None:
        doc = self._col.find_one({"user_id": user_id})
        if not doc:
            return None
        return self._from_document(doc)

    def is_email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        filter_doc: dict[str, Any] = {"email": email}
        if exclude_id is not None:
            filter_doc["_id"] = {"$ne": to_object_id(exclude_id)}
        return self._col.find_one(filter_doc, {"_id": 1}) is not None

    def list(
        self,
        flt: UserFilter,
        sort: list[tuple[str, int]],
        page: int,
        limit: int,
    ) -> tuple[list[User], int]:
        """name / role 일치 조건과 정렬/페이지네이션으로 유저 목록과 총 개수를 반환한다."""

        filter_doc: dict[str, Any] = {}
        if flt.name:
            filter_doc["name"] = flt.name
        if flt.role:
            filter_doc["role"] = flt.role

        skip = (page - 1) * limit
        total = self._col.count_documents(filter_doc)
        cursor = self._col.find(
            filter_doc,
            sort=sort or [("created_at", 1), ("_id", 1)],
            skip=skip,
            limit=limit,
        )
        return [self._from_document(doc) for doc in cursor], total

    def search(self, query: str, page: int, limit: int) -> tuple[list[User], int]:
        """이름 부분 일치(대소문자 무시) 또는 user_id 완전 일치로 검색한다."""

        pattern = re.compile(re.escape(query), re.IGNORECASE)
        filter_doc = {"$or": [{"name": pattern}, {"user_id": query}]}

        skip = (page - 1) * limit
        total = self._col.count_documents(filter_doc)
        cursor = self._col.find(
            filter_doc,
            sort=[("name", 1), ("_id", 1)],
            skip=skip,
            limit=limit,
        )
        return [self._from_document(doc) for doc in cursor], total

    def find_summaries(self, ids: list[str]) -> list[UserSummary]:
        """ids 순서를 유지한 채 요약 정보를 반환한다. 삭제된 유저는 건너뛴다."""

        if not ids:
            return []

        object_ids = to_object_ids(ids)
        cursor = self._col.find({"_id": {"$in": object_ids}}, SUMMARY_PROJECTION)
        by_id = {from_object_id(doc["_id"]): self._to_summary(doc) for doc in cursor}
        return [by_id[v] for v in ids if v in by_id]
