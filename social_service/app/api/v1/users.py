from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from common.schemas.pagination import PageResponse, normalize_page

from ...models.user import UserCreateInput, UserFilter, UserRole, UserUpdateInput
from ...services.credit_service import CreditService, get_credit_service
from ...services.relationships_service import (
    RelationshipsService,
    get_relationships_service,
)
from ...services.users_service import UsersService, get_users_service
from ..deps import get_current_user_id
from ..schemas.credits import (
    CreditBalanceResponse,
    CreditsHistoryResponse,
    ListCreditsHistoryResponse,
    ManageCreditsRequest,
)
from ..schemas.users import (
    FollowToggleResponse,
    ListUsersResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter()


def _to_list_response(users, total: int, page: int, limit: int) -> ListUsersResponse:
    page_model = PageResponse[UserResponse].build(
        [UserResponse.from_domain(u) for u in users], total, page, limit
    )
    return ListUsersResponse.model_validate(page_model.model_dump())


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="회원 가입",
)
async def create_user(
    body: UserCreateRequest,
    service: UsersService = Depends(get_users_service),
) -> UserResponse:
    user = service.create_user(UserCreateInput(**body.model_dump()))
    return UserResponse.from_domain(user)


@router.get(
    "",
    response_model=ListUsersResponse,
    summary="유저 목록 조회",
    description="name / role 필터와 sortBy(field:asc|desc) 정렬, 페이지네이션을 지원한다.",
)
async def list_users(
    name: Optional[str] = Query(default=None, description="이름 (정확 일치)"),
    role: Optional[UserRole] = Query(default=None),
    sort_by: Optional[str] = Query(
        default=None, alias="sortBy", description="예: name:desc,created_at:asc"
    ),
    limit: int = Query(10),
    page: int = Query(1),
    service: UsersService = Depends(get_users_service),
) -> ListUsersResponse:
    users, total, page, limit = service.query_users(
        UserFilter(name=name, role=role), sort_by, page, limit
    )
    return _to_list_response(users, total, page, limit)


@router.get(
    "/search",
    response_model=ListUsersResponse,
    summary="유저 검색",
    description="이름 부분 일치(대소문자 무시) 또는 user_id 완전 일치.",
)
async def search_users(
    q: Optional[str] = Query(default=None),
    page: int = Query(1),
    limit: int = Query(10),
    service: UsersService = Depends(get_users_service),
) -> ListUsersResponse:
    users, total, page, limit = service.search_users(q, page, limit)
    return _to_list_response(users, total, page, limit)


@router.get("/me", response_model=UserResponse, summary="내 계정 조회")
async def get_me(
    current_user_id: str = Depends(get_current_user_id),
    service: UsersService = Depends(get_users_service),
) -> UserResponse:
    return UserResponse.from_domain(service.get_user(current_user_id))


@router.patch("/me", response_model=UserResponse, summary="내 계정 수정")
async def update_me(
    body: UserUpdateRequest,
    current_user_id: str = Depends(get_current_user_id),
    service: UsersService = Depends(get_users_service),
) -> UserResponse:
    user = service.update_user(
        current_user_id, UserUpdateInput(**body.model_dump(exclude_none=True))
    )
    return UserResponse.from_domain(user)


@router.get(
    "/me/credits", response_model=CreditBalanceResponse, summary="내 크레딧 잔액"
)
async def get_my_credits(
    current_user_id: str = Depends(get_current_user_id),
    service: UsersService = Depends(get_users_service),
) -> CreditBalanceResponse:
    user = service.get_user(current_user_id)
    return CreditBalanceResponse(user_id=user.user_id, credits=user.credits)


@router.post(
    "/me/credits", response_model=CreditBalanceResponse, summary="내 크레딧 증감"
)
async def manage_my_credits(
    body: ManageCreditsRequest,
    current_user_id: str = Depends(get_current_user_id),
    credit_service: CreditService = Depends(get_credit_service),
) -> CreditBalanceResponse:
    user = credit_service.manage_credits(current_user_id, body.type, body.amount)
    return CreditBalanceResponse(user_id=user.user_id, credits=user.credits)


@router.get(
    "/me/credits/history",
    response_model=ListCreditsHistoryResponse,
    summary="내 크레딧 변동 이력",
)
async def get_my_credits_history(
    page: int = Query(1),
    limit: int = Query(10),
    current_user_id: str = Depends(get_current_user_id),
    credit_service: CreditService = Depends(get_credit_service),
) -> ListCreditsHistoryResponse:
    page, limit = normalize_page(page, limit)
    entries, total = credit_service.get_history(current_user_id, page, limit)
    page_model = PageResponse[CreditsHistoryResponse].build(
        [CreditsHistoryResponse.from_domain(e) for e in entries], total, page, limit
    )
    return ListCreditsHistoryResponse.model_validate(page_model.model_dump())


@router.post(
    "/me/friends/{friend_id}", response_model=UserResponse, summary="친구 추가"
)
async def add_friend(
    friend_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: RelationshipsService = Depends(get_relationships_service),
) -> UserResponse:
    return UserResponse.from_domain(service.add_friend(current_user_id, friend_id))


@router.post(
    "/{user_id}/follow/toggle",
    response_model=FollowToggleResponse,
    summary="팔로우 토글",
)
async def toggle_follow(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: RelationshipsService = Depends(get_relationships_service),
) -> FollowToggleResponse:
    following = service.toggle_follow(current_user_id, user_id)
    return FollowToggleResponse(following=following)


@router.get("/{user_id}", response_model=UserResponse, summary="유저 조회")
async def get_user(
    user_id: str,
    service: UsersService = Depends(get_users_service),
) -> UserResponse:
    return UserResponse.from_domain(service.get_user(user_id))


@router.patch("/{user_id}", response_model=UserResponse, summary="유저 수정")
async def update_user(
    user_id: str,
    body: UserUpdateRequest,
    service: UsersService = Depends(get_users_service),
) -> UserResponse:
    user = service.update_user(
        user_id, UserUpdateInput(**body.model_dump(exclude_none=True))
    )
    return UserResponse.from_domain(user)


@router.delete(
    "/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="유저 삭제"
)
async def delete_user(
    user_id: str,
    service: UsersService = Depends(get_users_service),
) -> Response:
    service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
