"""크레딧 도메인 모델.

유저 잔액은 users.credits 단일 필드로 관리하고, 변동 내역은 credits_history 에 append-only 로 남긴다.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


CreditOperation = Literal["add", "deduct", "purchase"]


class CreditsHistory(BaseModel):
    id: str | None = None
    user: str
    amount: int
    type: CreditOperation
    item: str | None = None
    date: datetime
    created_at: datetime
    updated_at: datetime


class CreditBalance(BaseModel):
    user_id: str
    credits: int
