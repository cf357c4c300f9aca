from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import Depends
from pymongo.database import Database

from common.mongo.client import get_database

from ..exceptions import NotFoundError
from ..models.agency import CreditsAgency, HostAgencyData
from ..models.profile import MainProfile, Profile, ProfileUpdateInput, PublicProfile
from ..models.level import UserLevel
from ..models.store import StoreSectionView
from ..models.user import User, UserSummary
from ..repositories.agency_repository import AgencyRepository
from ..repositories.group_repository import GroupRepository
from ..repositories.interfaces import (
    AgencyRepositoryInterface,
    GroupRepositoryInterface,
    LevelRepositoryInterface,
    ProfileRepositoryInterface,
    StoreRepositoryInterface,
    UserRepositoryInterface,
)
from ..repositories.level_repository import LevelRepository
from ..repositories.store_repository import StoreRepository
from .lookup import require_user
from .users_service import get_profile_repository, get_user_repository


def to_summary(user: User) -> UserSummary:
    return UserSummary(
        id=user.id,
        user_id=user.user_id,
        name=user.name,
        avatar=user.avatar,
        level=user.level,
        credits=user.credits,
    )


class ProfileService:
    """프로필 조회/수정과 프로필 화면에 필요한 집계 뷰.

    - 모든 조회는 공개 user_id 기준이며, 유저가 없으면 NotFoundError 를 발생시킨다.
    - 프로필 도큐먼트가 없으면(생성 도중 실패 등) 역시 NotFoundError 로 처리한다.
    """

    def __init__(
        self,
        user_repo: UserRepositoryInterface,
        profile_repo: ProfileRepositoryInterface,
        agency_repo: AgencyRepositoryInterface,
        group_repo: GroupRepositoryInterface,
        store_repo: StoreRepositoryInterface,
        level_repo: LevelRepositoryInterface,
    ) -> None:
        self._user_repo = user_repo
        self._profile_repo = profile_repo
        self._agency_repo = agency_repo
        self._group_repo = group_repo
        self._store_repo = store_repo
        self._level_repo = level_repo

    def _require_profile(self, user: User) -> Profile:
        profile = self._profile_repo.find_by_user(user.id)
        if profile is None:
            raise NotFoundError(f"profile not found (user_id={user.user_id})")
        return profile

    # --- main / public -----------------------------------------------------------
    def get_main_profile(self, user_id: str) -> MainProfile:
        user = require_user(self._user_repo, user_id)
        profile = self._require_profile(user)
        return MainProfile(profile=profile, user=to_summary(user), email=user.email)

    def update_main_profile(
        self, user_id: str, input_model: ProfileUpdateInput
    ) -> MainProfile:
        user = require_user(self._user_repo, user_id)
        profile = self._require_profile(user)

        fields: dict[str, Any] = input_model.model_dump(exclude_none=True)
        if fields:
            updated = self._profile_repo.update_fields(user.id, fields)
            if updated is None:
                raise NotFoundError(f"profile not found (user_id={user_id})")
            profile = updated

        return MainProfile(profile=profile, user=to_summary(user), email=user.email)

    def get_public_profile(self, user_id: str) -> PublicProfile:
        user = require_user(self._user_repo, user_id)
        profile = self._require_profile(user)
        return PublicProfile(
            user_id=user.user_id,
            name=user.name,
            avatar=user.avatar,
            level=user.level,
            credits=user.credits,
            charisma=profile.charisma,
            country=profile.country,
        )

    # --- subscription ------------------------------------------------------------
    def get_vip_level(self, user_id: str) -> int:
        user = require_user(self._user_repo, user_id)
        return self._require_profile(user).vip_level

    def get_pro_expiration(self, user_id: str) -> datetime | None:
        user = require_user(self._user_repo, user_id)
        return self._require_profile(user).pro_expiration_date

    # --- store / level -----------------------------------------------------------
    def get_store_sections(self, user_id: str) -> list[StoreSectionView]:
        require_user(self._user_repo, user_id)
        views: list[StoreSectionView] = []
        for section in self._store_repo.list_sections():
            views.append(
                StoreSectionView(
                    section_name=section.section_name,
                    items=self._store_repo.find_items(section.items),
                )
            )
        return views

    def get_user_level(self, user_id: str) -> UserLevel:
        user = require_user(self._user_repo, user_id)
        next_level = self._level_repo.find_next(user.level)
        return UserLevel(
            user_id=user.user_id,
            level=user.level,
            fame_points=user.fame_points,
            rich_points=user.rich_points,
            next_level=next_level.level if next_level else None,
            next_fame_threshold=next_level.fame_threshold if next_level else None,
            next_rich_threshold=next_level.rich_threshold if next_level else None,
        )

    # --- agency / groups ---------------------------------------------------------
    def get_credits_agency(self, user_id: str) -> CreditsAgency | None:
        """유저가 관리자인 에이전시의 잔액/이력. 없으면 None."""
        user = require_user(self._user_repo, user_id)
        agency = self._agency_repo.find_by_admin(user.id)
        if agency is None:
            return None
        return CreditsAgency(
            agency_id=agency.id,
            name=agency.name,
            balance=agency.balance,
            history=agency.history,
        )

    def get_host_agency_data(self, user_id: str) -> HostAgencyData | None:
        """유저가 소속된 호스트 에이전시와 본인 멤버 항목. 소속이 없으면 None."""
        user = require_user(self._user_repo, user_id)
        if user.host_agency is None:
            return None
        agency = self._agency_repo.find_by_id(user.host_agency)
        if agency is None:
            return None
        member = next((m for m in agency.members if m.user == user.id), None)
        return HostAgencyData(
            agency_id=agency.id,
            name=agency.name,
            admin=agency.admin,
            member=member,
        )

    def get_join_requests(self, user_id: str) -> list[UserSummary]:
        """유저가 관리하는 그룹들의 pending 초대 대상 유저 목록 (중복 제거, 초대 순)."""
        user = require_user(self._user_repo, user_id)

        pending: list[str] = []
        for group in self._group_repo.list_by_admin(user.id):
            for invitation in group.invitations:
                if invitation.status == "pending" and invitation.user not in pending:
                    pending.append(invitation.user)
        return self._user_repo.find_summaries(pending)


def get_profile_service(
    db: Database = Depends(get_database),
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
    profile_repo: ProfileRepositoryInterface = Depends(get_profile_repository),
) -> ProfileService:
    """FastAPI DI용 ProfileService 팩토리."""

    return ProfileService(
        user_repo=user_repo,
        profile_repo=profile_repo,
        agency_repo=AgencyRepository(db),
        group_repo=GroupRepository(db),
        store_repo=StoreRepository(db),
        level_repo=LevelRepository(db),
    )
