from __future__ import annotations

from pydantic import Field

from common.mongo.types import BaseDocument, PyObjectId

from ...models.store import Item, ItemType, StoreSection


class ItemDocument(BaseDocument):
    """MongoDB items 컬렉션 도큐먼트 모델."""

    name: str
    type: ItemType
    price: int
    image: str

    @classmethod
    def from_domain(cls, item: Item) -> "ItemDocument":
        return cls.model_validate(item.model_dump())

    def to_domain(self) -> Item:
        return Item.model_validate(self.to_plain())


class StoreSectionDocument(BaseDocument):
    """MongoDB stores 컬렉션 도큐먼트 모델 (section_name unique)."""

    section_name: str
    items: list[PyObjectId] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, section: StoreSection) -> "StoreSectionDocument":
        return cls.model_validate(section.model_dump())

    def to_domain(self) -> StoreSection:
        return StoreSection.model_validate(self.to_plain())
