from __future__ import annotations

from pydantic import BaseModel, Field

from common.types.fields import UtcDateTime

from ...models.store import Item, ItemType, StoreSection, StoreSectionView


class ItemCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    type: ItemType
    price: int = Field(ge=0)
    image: str


class SectionCreateRequest(BaseModel):
    section_name: str = Field(min_length=1)


class SectionItemRequest(BaseModel):
    item_id: str


class ItemResponse(BaseModel):
    id: str | None
    name: str
    type: str
    price: int
    image: str
    created_at: UtcDateTime
    updated_at: UtcDateTime

    @classmethod
    def from_domain(cls, item: Item) -> "ItemResponse":
        return cls.model_validate(item.model_dump())


class StoreSectionResponse(BaseModel):
    id: str | None
    section_name: str
    items: list[str]

    @classmethod
    def from_domain(cls, section: StoreSection) -> "StoreSectionResponse":
        return cls(id=section.id, section_name=section.section_name, items=section.items)


class StoreSectionViewResponse(BaseModel):
    section_name: str
    items: list[ItemResponse]

    @classmethod
    def from_domain(cls, view: StoreSectionView) -> "StoreSectionViewResponse":
        return cls(
            section_name=view.section_name,
            items=[ItemResponse.from_domain(i) for i in view.items],
        )


class StoreSectionsResponse(BaseModel):
    sections: list[StoreSectionViewResponse]


class PurchaseResponse(BaseModel):
    item_id: str
    credits: int
