from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


ItemType = Literal["frame", "color", "gift", "badge", "other"]


class Item(BaseModel):
    id: str | None = None
    name: str
    type: ItemType
    price: int = Field(ge=0)
    image: str
    created_at: datetime
    updated_at: datetime


class StoreSection(BaseModel):
    """상점 섹션. items 는 Item.id 의 순서 있는 목록(중복 없음)."""

    id: str | None = None
    section_name: str
    items: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class StoreSectionView(BaseModel):
    section_name: str
    items: list[Item]
