from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class LevelThreshold(BaseModel):
    id: str | None = None
    level: int
    fame_threshold: int
    rich_threshold: int
    created_at: datetime
    updated_at: datetime


class UserLevel(BaseModel):
    user_id: str
    level: int
    fame_points: int
    rich_points: int
    next_level: int | None = None
    next_fame_threshold: int | None = None
    next_rich_threshold: int | None = None
