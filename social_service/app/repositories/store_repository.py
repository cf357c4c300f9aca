from __future__ import annotations

from datetime import datetime, timezone

from pymongo import ReturnDocument
from pymongo.database import Database

from common.mongo.types import from_object_id, to_object_id, to_object_ids

from ..models.store import Item, StoreSection
from .documents.store_document import ItemDocument, StoreSectionDocument
from .interfaces import StoreRepositoryInterface


class StoreRepository(StoreRepositoryInterface):
    """items / stores 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._items = database["items"]
        self._sections = database["stores"]

    # --- items -------------------------------------------------------------------
    def insert_item(self, item: Item) -> Item:
        now = datetime.now(timezone.utc)
        item.created_at = now
        item.updated_at = now

        payload = ItemDocument.from_domain(item).to_mongo_record()
        result = self._items.insert_one(payload)
        payload["_id"] = result.inserted_id
        return ItemDocument.model_validate(payload).to_domain()

    def find_item(self, id_value: str) -> Item | None:
        doc = self._items.find_one({"_id": to_object_id(id_value)})
        if not doc:
            return None
        return ItemDocument.model_validate(doc).to_domain()

    def find_items(self, ids: list[str]) -> list[Item]:
        """ids 순서를 유지한다. 삭제된 아이템은 건너뛴다."""

        if not ids:
            return []
        cursor = self._items.find({"_id": {"$in": to_object_ids(ids)}})
        by_id = {
            from_object_id(doc["_id"]): ItemDocument.model_validate(doc).to_domain()
            for doc in cursor
        }
        return [by_id[v] for v in ids if v in by_id]

    # --- sections ----------------------------------------------------------------
    def insert_section(self, section: StoreSection) -> StoreSection:
        """섹션 이름 중복 시 DuplicateKeyError 가 그대로 전파된다."""

        now = datetime.now(timezone.utc)
        section.created_at = now
        section.updated_at = now

        payload = StoreSectionDocument.from_domain(section).to_mongo_record()
        result = self._sections.insert_one(payload)
        payload["_id"] = result.inserted_id
        return StoreSectionDocument.model_validate(payload).to_domain()

    def find_section(self, section_name: str) -> StoreSection | None:
        doc = self._sections.find_one({"section_name": section_name})
        if not doc:
            return None
        return StoreSectionDocument.model_validate(doc).to_domain()

    def add_item_to_section(
        self, section_name: str, item_id: str
    ) -> StoreSection | None:
        doc = self._sections.find_one_and_update(
            {"section_name": section_name},
            {
                "$addToSet": {"items": to_object_id(item_id)},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        return StoreSectionDocument.model_validate(doc).to_domain()

    def list_sections(self) -> list[StoreSection]:
        cursor = self._sections.find({}, sort=[("section_name", 1)])
        return [StoreSectionDocument.model_validate(doc).to_domain() for doc in cursor]
