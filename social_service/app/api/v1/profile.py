from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from common.schemas.pagination import PageResponse, normalize_page

from ...models.profile import ProfileUpdateInput
from ...services.credit_service import CreditService, get_credit_service
from ...services.profile_service import ProfileService, get_profile_service, to_summary
from ...services.relationships_service import (
    RelationshipsService,
    get_relationships_service,
)
from ...services.users_service import UsersService, get_users_service
from ..deps import get_current_user_id
from ..schemas.credits import CreditsHistoryResponse, ListCreditsHistoryResponse
from ..schemas.profile import (
    AgencyHistoryResponse,
    BlockedListResponse,
    CreditsAgencyResponse,
    FollowActionResponse,
    FollowersListResponse,
    FollowingListResponse,
    FriendsListResponse,
    HostAgencyDataResponse,
    JoinRequestsResponse,
    MainProfileResponse,
    ProExpirationResponse,
    ProfileUpdateRequest,
    PublicProfileResponse,
    SearchListResponse,
    UserLevelResponse,
    VipLevelResponse,
)
from ..schemas.store import StoreSectionsResponse, StoreSectionViewResponse
from ..schemas.users import UserSummaryResponse

router = APIRouter()


# -------- 내 프로필 --------


@router.get("/me", response_model=MainProfileResponse, summary="내 프로필 조회")
async def get_my_profile(
    current_user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> MainProfileResponse:
    return MainProfileResponse.from_domain(service.get_main_profile(current_user_id))


@router.put("/me", response_model=MainProfileResponse, summary="내 프로필 수정")
async def update_my_profile(
    body: ProfileUpdateRequest,
    current_user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> MainProfileResponse:
    main = service.update_main_profile(
        current_user_id, ProfileUpdateInput(**body.model_dump(exclude_none=True))
    )
    return MainProfileResponse.from_domain(main)


# -------- 검색 (/{user_id} 보다 먼저 선언) --------


@router.get(
    "/search/{param}",
    response_model=SearchListResponse,
    summary="유저 검색 (목록)",
    description="이름 부분 일치 또는 user_id 완전 일치. 페이지 없이 상위 50건.",
)
async def search_profiles(
    param: str,
    service: UsersService = Depends(get_users_service),
) -> SearchListResponse:
    users = service.search_users_list(param)
    return SearchListResponse(
        search_list=[UserSummaryResponse.from_domain(to_summary(u)) for u in users]
    )


# -------- 공개 프로필 / 관계 목록 --------


@router.get(
    "/{user_id}", response_model=PublicProfileResponse, summary="공개 프로필 조회"
)
async def get_public_profile(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> PublicProfileResponse:
    public = service.get_public_profile(user_id)
    return PublicProfileResponse.model_validate(public.model_dump())


@router.get("/{user_id}/friends", response_model=FriendsListResponse)
async def list_friends(
    user_id: str,
    service: RelationshipsService = Depends(get_relationships_service),
) -> FriendsListResponse:
    return FriendsListResponse(
        friends_list=[
            UserSummaryResponse.from_domain(s) for s in service.list_friends(user_id)
        ]
    )


@router.get("/{user_id}/followers", response_model=FollowersListResponse)
async def list_followers(
    user_id: str,
    service: RelationshipsService = Depends(get_relationships_service),
) -> FollowersListResponse:
    return FollowersListResponse(
        followers_list=[
            UserSummaryResponse.from_domain(s)
            for s in service.list_followers(user_id)
        ]
    )


@router.get("/{user_id}/following", response_model=FollowingListResponse)
async def list_following(
    user_id: str,
    service: RelationshipsService = Depends(get_relationships_service),
) -> FollowingListResponse:
    return FollowingListResponse(
        following_list=[
            UserSummaryResponse.from_domain(s)
            for s in service.list_following(user_id)
        ]
    )


@router.get("/{user_id}/blocked", response_model=BlockedListResponse)
async def list_blocked(
    user_id: str,
    service: RelationshipsService = Depends(get_relationships_service),
) -> BlockedListResponse:
    ignorance = service.get_blocked(user_id)
    return BlockedListResponse(
        user=ignorance.user,
        blocked_list=[
            UserSummaryResponse.from_domain(s) for s in ignorance.blocked_users
        ],
    )


# -------- 관계 변경 (요청 유저 → user_id) --------


@router.post("/{user_id}/follow", response_model=FollowActionResponse)
async def follow(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: RelationshipsService = Depends(get_relationships_service),
) -> FollowActionResponse:
    service.follow(current_user_id, user_id)
    return FollowActionResponse(message="followed")


@router.post("/{user_id}/unfollow", response_model=FollowActionResponse)
async def unfollow(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: RelationshipsService = Depends(get_relationships_service),
) -> FollowActionResponse:
    service.unfollow(current_user_id, user_id)
    return FollowActionResponse(message="unfollowed")


@router.post("/{user_id}/block", response_model=FollowActionResponse)
async def block(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: RelationshipsService = Depends(get_relationships_service),
) -> FollowActionResponse:
    service.block(current_user_id, user_id)
    return FollowActionResponse(message="blocked")


@router.post("/{user_id}/unblock", response_model=FollowActionResponse)
async def unblock(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: RelationshipsService = Depends(get_relationships_service),
) -> FollowActionResponse:
    service.unblock(current_user_id, user_id)
    return FollowActionResponse(message="unblocked")


# -------- 프로필 부가 정보 --------


@router.get("/{user_id}/vipLevel", response_model=VipLevelResponse)
async def get_vip_level(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> VipLevelResponse:
    return VipLevelResponse(vip_level=service.get_vip_level(user_id))


@router.get("/{user_id}/proExpiration", response_model=ProExpirationResponse)
async def get_pro_expiration(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProExpirationResponse:
    return ProExpirationResponse(expiration_date=service.get_pro_expiration(user_id))


@router.get("/{user_id}/storeSections", response_model=StoreSectionsResponse)
async def get_store_sections(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> StoreSectionsResponse:
    return StoreSectionsResponse(
        sections=[
            StoreSectionViewResponse.from_domain(v)
            for v in service.get_store_sections(user_id)
        ]
    )


@router.get("/{user_id}/level", response_model=UserLevelResponse)
async def get_level(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> UserLevelResponse:
    return UserLevelResponse.from_domain(service.get_user_level(user_id))


@router.get("/{user_id}/creditsHistory", response_model=ListCreditsHistoryResponse)
async def get_credits_history(
    user_id: str,
    page: int = Query(1),
    limit: int = Query(10),
    credit_service: CreditService = Depends(get_credit_service),
) -> ListCreditsHistoryResponse:
    page, limit = normalize_page(page, limit)
    entries, total = credit_service.get_history(user_id, page, limit)
    page_model = PageResponse[CreditsHistoryResponse].build(
        [CreditsHistoryResponse.from_domain(e) for e in entries], total, page, limit
    )
    return ListCreditsHistoryResponse.model_validate(page_model.model_dump())


@router.get(
    "/{user_id}/creditsAgency", response_model=Optional[CreditsAgencyResponse]
)
async def get_credits_agency(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> Optional[CreditsAgencyResponse]:
    agency = service.get_credits_agency(user_id)
    if agency is None:
        return None
    return CreditsAgencyResponse(
        agency_id=agency.agency_id,
        name=agency.name,
        balance=agency.balance,
        history=[AgencyHistoryResponse.from_domain(h) for h in agency.history],
    )


@router.get(
    "/{user_id}/hostAgencyData", response_model=Optional[HostAgencyDataResponse]
)
async def get_host_agency_data(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> Optional[HostAgencyDataResponse]:
    data = service.get_host_agency_data(user_id)
    if data is None:
        return None
    return HostAgencyDataResponse.model_validate(data.model_dump())


@router.get("/{user_id}/joinRequests", response_model=JoinRequestsResponse)
async def get_join_requests(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> JoinRequestsResponse:
    return JoinRequestsResponse(
        users=[
            UserSummaryResponse.from_domain(s)
            for s in service.get_join_requests(user_id)
        ]
    )
