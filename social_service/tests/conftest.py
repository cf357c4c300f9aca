"""서비스 테스트 픽스처."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from social_service.app.models.level import LevelThreshold
from social_service.app.services.agencies_service import AgenciesService
from social_service.app.services.credit_service import CreditService
from social_service.app.services.groups_service import GroupsService
from social_service.app.services.profile_service import ProfileService
from social_service.app.services.relationships_service import RelationshipsService
from social_service.app.services.store_service import StoreService
from social_service.app.services.users_service import UsersService
from social_service.tests.fakes import (
    FakeAgencyRepository,
    FakeCreditsHistoryRepository,
    FakeGroupRepository,
    FakeHasher,
    FakeLevelRepository,
    FakePointAnalyticsRepository,
    FakeProfileRepository,
    FakeStoreRepository,
    FakeUserRepository,
)


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def profile_repo() -> FakeProfileRepository:
    return FakeProfileRepository()


@pytest.fixture
def history_repo() -> FakeCreditsHistoryRepository:
    return FakeCreditsHistoryRepository()


@pytest.fixture
def agency_repo() -> FakeAgencyRepository:
    return FakeAgencyRepository()


@pytest.fixture
def group_repo() -> FakeGroupRepository:
    return FakeGroupRepository()


@pytest.fixture
def store_repo() -> FakeStoreRepository:
    return FakeStoreRepository()


@pytest.fixture
def level_repo() -> FakeLevelRepository:
    now = datetime.now(timezone.utc)
    return FakeLevelRepository(
        [
            LevelThreshold(
                level=2, fame_threshold=100, rich_threshold=50, created_at=now, updated_at=now
            ),
            LevelThreshold(
                level=3, fame_threshold=500, rich_threshold=250, created_at=now, updated_at=now
            ),
        ]
    )


@pytest.fixture
def analytics_repo() -> FakePointAnalyticsRepository:
    return FakePointAnalyticsRepository()


@pytest.fixture
def users_service(
    user_repo: FakeUserRepository, profile_repo: FakeProfileRepository
) -> UsersService:
    return UsersService(
        user_repo=user_repo,
        profile_repo=profile_repo,
        hasher=FakeHasher(),  # type: ignore[arg-type]
    )


@pytest.fixture
def relationships_service(user_repo: FakeUserRepository) -> RelationshipsService:
    return RelationshipsService(user_repo)


@pytest.fixture
def credit_service(
    user_repo: FakeUserRepository, history_repo: FakeCreditsHistoryRepository
) -> CreditService:
    return CreditService(user_repo=user_repo, history_repo=history_repo)


@pytest.fixture
def store_service(
    store_repo: FakeStoreRepository, credit_service: CreditService
) -> StoreService:
    return StoreService(store_repo=store_repo, credit_service=credit_service)


@pytest.fixture
def agencies_service(
    agency_repo: FakeAgencyRepository, user_repo: FakeUserRepository
) -> AgenciesService:
    return AgenciesService(agency_repo=agency_repo, user_repo=user_repo)


@pytest.fixture
def groups_service(
    group_repo: FakeGroupRepository, user_repo: FakeUserRepository
) -> GroupsService:
    return GroupsService(group_repo=group_repo, user_repo=user_repo)


@pytest.fixture
def profile_service(
    user_repo: FakeUserRepository,
    profile_repo: FakeProfileRepository,
    agency_repo: FakeAgencyRepository,
    group_repo: FakeGroupRepository,
    store_repo: FakeStoreRepository,
    level_repo: FakeLevelRepository,
) -> ProfileService:
    return ProfileService(
        user_repo=user_repo,
        profile_repo=profile_repo,
        agency_repo=agency_repo,
        group_repo=group_repo,
        store_repo=store_repo,
        level_repo=level_repo,
    )
