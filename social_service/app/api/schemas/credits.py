from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from common.types.fields import UtcDateTime

from ...models.credit import CreditsHistory


class ManageCreditsRequest(BaseModel):
    """크레딧 증감 요청."""

    type: Literal["add", "deduct"]
    amount: int = Field(gt=0)


class CreditBalanceResponse(BaseModel):
    user_id: str
    credits: int


class CreditsHistoryResponse(BaseModel):
    id: str | None
    amount: int
    type: str
    item: str | None = None
    date: UtcDateTime

    @classmethod
    def from_domain(cls, entry: CreditsHistory) -> "CreditsHistoryResponse":
        return cls(
            id=entry.id,
            amount=entry.amount,
            type=entry.type,
            item=entry.item,
            date=entry.date,
        )


class ListCreditsHistoryResponse(BaseModel):
    items: list[CreditsHistoryResponse]
    total: int
    page: int
    limit: int
    total_pages: int
