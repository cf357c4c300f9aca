from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from common.mongo.client import get_database

from ..exceptions import ConflictError, NotFoundError, ValidationError
from ..models.store import Item, ItemType, StoreSection, StoreSectionView
from ..models.user import User
from ..repositories.interfaces import StoreRepositoryInterface
from ..repositories.store_repository import StoreRepository
from .credit_service import CreditService, get_credit_service
from .lookup import require_object_id


logger = logging.getLogger(__name__)


class StoreService:
    """상점 아이템/섹션 관리와 아이템 구매."""

    def __init__(
        self,
        store_repo: StoreRepositoryInterface,
        credit_service: CreditService,
    ) -> None:
        self._store_repo = store_repo
        self._credit_service = credit_service

    def create_item(self, name: str, item_type: ItemType, price: int, image: str) -> Item:
        name = name.strip()
        if not name:
            raise ValidationError("item name is required")
        if price < 0:
            raise ValidationError("price must not be negative")

        now = datetime.now(timezone.utc)
        return self._store_repo.insert_item(
            Item(
                name=name,
                type=item_type,
                price=price,
                image=image,
                created_at=now,
                updated_at=now,
            )
        )

    def get_item(self, item_id: str) -> Item:
        require_object_id(item_id, "item")
        item = self._store_repo.find_item(item_id)
        if item is None:
            raise NotFoundError(f"item not found (id={item_id})")
        return item

    def create_section(self, section_name: str) -> StoreSection:
        section_name = section_name.strip()
        if not section_name:
            raise ValidationError("section name is required")
        if self._store_repo.find_section(section_name) is not None:
            raise ConflictError(f"store section already exists: {section_name}")

        now = datetime.now(timezone.utc)
        try:
            return self._store_repo.insert_section(
                StoreSection(section_name=section_name, created_at=now, updated_at=now)
            )
        except DuplicateKeyError as exc:
            raise ConflictError(
                f"store section already exists: {section_name}"
            ) from exc

    def add_item_to_section(self, section_name: str, item_id: str) -> StoreSection:
        self.get_item(item_id)
        section = self._store_repo.add_item_to_section(section_name, item_id)
        if section is None:
            raise NotFoundError(f"store section not found: {section_name}")
        return section

    def list_sections(self) -> list[StoreSectionView]:
        return [
            StoreSectionView(
                section_name=section.section_name,
                items=self._store_repo.find_items(section.items),
            )
            for section in self._store_repo.list_sections()
        ]

    def purchase_item(self, user_id: str, item_id: str) -> User:
        """아이템 가격만큼 크레딧을 차감하고 purchase 이력을 남긴다."""

        item = self.get_item(item_id)
        user = self._credit_service.deduct_credits(
            user_id, item.price, operation="purchase", item_id=item.id
        )
        logger.info("item purchased (user_id=%s, item_id=%s)", user_id, item.id)
        return user


def get_store_repository(
    db: Database = Depends(get_database),
) -> StoreRepositoryInterface:
    return StoreRepository(db)


def get_store_service(
    store_repo: StoreRepositoryInterface = Depends(get_store_repository),
    credit_service: CreditService = Depends(get_credit_service),
) -> StoreService:
    """FastAPI DI용 StoreService 팩토리."""

    return StoreService(store_repo=store_repo, credit_service=credit_service)
