from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...services.store_service import StoreService, get_store_service
from ..deps import get_current_user_id
from ..schemas.store import (
    ItemCreateRequest,
    ItemResponse,
    PurchaseResponse,
    SectionCreateRequest,
    SectionItemRequest,
    StoreSectionResponse,
    StoreSectionsResponse,
    StoreSectionViewResponse,
)

router = APIRouter()


@router.post(
    "/items",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="아이템 생성",
)
async def create_item(
    body: ItemCreateRequest,
    service: StoreService = Depends(get_store_service),
) -> ItemResponse:
    item = service.create_item(body.name, body.type, body.price, body.image)
    return ItemResponse.from_domain(item)


@router.post(
    "/items/{item_id}/purchase",
    response_model=PurchaseResponse,
    summary="아이템 구매",
    description="아이템 가격만큼 요청 유저의 크레딧을 차감한다. 잔액 부족 시 402.",
)
async def purchase_item(
    item_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: StoreService = Depends(get_store_service),
) -> PurchaseResponse:
    user = service.purchase_item(current_user_id, item_id)
    return PurchaseResponse(item_id=item_id, credits=user.credits)


@router.get(
    "/sections",
    response_model=StoreSectionsResponse,
    summary="상점 섹션 목록 (아이템 포함)",
)
async def list_sections(
    service: StoreService = Depends(get_store_service),
) -> StoreSectionsResponse:
    return StoreSectionsResponse(
        sections=[
            StoreSectionViewResponse.from_domain(v) for v in service.list_sections()
        ]
    )


@router.post(
    "/sections",
    response_model=StoreSectionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="상점 섹션 생성",
)
async def create_section(
    body: SectionCreateRequest,
    service: StoreService = Depends(get_store_service),
) -> StoreSectionResponse:
    return StoreSectionResponse.from_domain(service.create_section(body.section_name))


@router.post(
    "/sections/{section_name}/items",
    response_model=StoreSectionResponse,
    summary="섹션에 아이템 추가",
)
async def add_item_to_section(
    section_name: str,
    body: SectionItemRequest,
    service: StoreService = Depends(get_store_service),
) -> StoreSectionResponse:
    section = service.add_item_to_section(section_name, body.item_id)
    return StoreSectionResponse.from_domain(section)
