"""페이지네이션 공통 스키마."""

from __future__ import annotations

import math
from typing import Generic, TypeVar

from pydantic import BaseModel


T = TypeVar("T")

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100


def normalize_page(page: int, limit: int) -> tuple[int, int]:
    """page 는 1 이상으로, limit 은 0 이하면 기본값, 최대치를 넘으면 MAX_PAGE_LIMIT 로 보정한다."""

    if page <= 0:
        page = 1
    if limit <= 0:
        limit = DEFAULT_PAGE_LIMIT
    return page, min(limit, MAX_PAGE_LIMIT)


class PageResponse(BaseModel, Generic[T]):
    """페이지네이션 응답 공통 스키마."""

    items: list[T]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(
        cls, items: list[T], total: int, page: int, limit: int
    ) -> "PageResponse[T]":
        total_pages = math.ceil(total / limit) if limit > 0 else 0
        return cls(
            items=items, total=total, page=page, limit=limit, total_pages=total_pages
        )
