from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...services.groups_service import GroupsService, get_groups_service
from ..deps import get_current_user_id
from ..schemas.groups import (
    GroupCreateRequest,
    GroupInviteRequest,
    GroupResponse,
    InvitationResponseRequest,
)

router = APIRouter()


@router.post(
    "",
    response_model=GroupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="그룹 생성 (요청 유저가 admin)",
)
async def create_group(
    body: GroupCreateRequest,
    current_user_id: str = Depends(get_current_user_id),
    service: GroupsService = Depends(get_groups_service),
) -> GroupResponse:
    group = service.create_group(current_user_id, body.name, body.description)
    return GroupResponse.from_domain(group)


@router.get("/{group_id}", response_model=GroupResponse, summary="그룹 조회")
async def get_group(
    group_id: str,
    service: GroupsService = Depends(get_groups_service),
) -> GroupResponse:
    return GroupResponse.from_domain(service.get_group(group_id))


@router.post(
    "/{group_id}/invitations",
    response_model=GroupResponse,
    summary="유저 초대",
)
async def invite(
    group_id: str,
    body: GroupInviteRequest,
    service: GroupsService = Depends(get_groups_service),
) -> GroupResponse:
    return GroupResponse.from_domain(service.invite(group_id, body.user_id))


@router.put(
    "/{group_id}/invitations/me",
    response_model=GroupResponse,
    summary="받은 초대 수락/거절",
)
async def respond_invitation(
    group_id: str,
    body: InvitationResponseRequest,
    current_user_id: str = Depends(get_current_user_id),
    service: GroupsService = Depends(get_groups_service),
) -> GroupResponse:
    group = service.respond_invitation(group_id, current_user_id, body.status)
    return GroupResponse.from_domain(group)
