"""개발용 시드 데이터 적재 스크립트.

    python -m social_service.app.scripts.seed

- users / profiles 컬렉션을 비우고 SEED_FILE(yaml) 의 유저를 UsersService 로 생성한다.
- 각 프로필에는 VIP 레벨(1~5 랜덤)과 30일 뒤 만료되는 pro 기간을 넣는다.
- 상점 섹션은 이미 있으면 건드리지 않고, 레벨 기준치는 level 기준으로 덮어쓴다.
- point_events 는 email 로 유저를 찾아 days_ago 일 전 시각의 포인트 이벤트로 적재한다.
  point_analytics 컬렉션도 유저와 함께 비운다.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import yaml
from pymongo.database import Database

from common.logger import setup_logger
from common.mongo.client import MongoConnection

from ..config import get_config
from ..models.analytics import PointAnalytics
from ..models.level import LevelThreshold
from ..models.user import UserCreateInput
from ..repositories.credit_repository import CreditsHistoryRepository
from ..repositories.indexes import ensure_indexes
from ..repositories.level_repository import LevelRepository
from ..repositories.point_analytics_repository import PointAnalyticsRepository
from ..repositories.profile_repository import ProfileRepository
from ..repositories.store_repository import StoreRepository
from ..repositories.user_repository import UserRepository
from ..security import get_password_hasher_for_rounds
from ..services.credit_service import CreditService
from ..services.store_service import StoreService
from ..services.users_service import UsersService


logger = logging.getLogger(__name__)

PRO_PERIOD = timedelta(days=30)


@dataclass(slots=True)
class SeedItem:
    name: str
    type: str
    price: int
    image: str


@dataclass(slots=True)
class SeedSection:
    section_name: str
    items: list[SeedItem] = field(default_factory=list)


@dataclass(slots=True)
class SeedPointEvent:
    email: str
    fame_points: int = 0
    rich_points: int = 0
    days_ago: int = 0


@dataclass(slots=True)
class SeedData:
    users: list[UserCreateInput]
    sections: list[SeedSection]
    levels: list[LevelThreshold]
    point_events: list[SeedPointEvent] = field(default_factory=list)


def load_seed_data(path: Path) -> SeedData:
    if not path.is_file():
        raise RuntimeError(f"seed file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    now = datetime.now(timezone.utc)
    users = [UserCreateInput(**raw) for raw in data.get("users") or []]
    sections = [
        SeedSection(
            section_name=str(raw["section_name"]),
            items=[SeedItem(**item) for item in raw.get("items") or []],
        )
        for raw in data.get("store_sections") or []
    ]
    levels = [
        LevelThreshold(created_at=now, updated_at=now, **raw)
        for raw in data.get("levels") or []
    ]
    point_events = [SeedPointEvent(**raw) for raw in data.get("point_events") or []]
    return SeedData(
        users=users, sections=sections, levels=levels, point_events=point_events
    )


def build_point_events(
    user_refs: dict[str, str], events: list[SeedPointEvent], now: datetime
) -> list[PointAnalytics]:
    """email -> 유저 ObjectId 매핑으로 시드 이벤트를 PointAnalytics 로 바꾼다.

    매핑에 없는 email 은 건너뛴다.
    """

    built: list[PointAnalytics] = []
    for event in events:
        user_ref = user_refs.get(event.email)
        if user_ref is None:
            logger.warning("point event skipped, unknown user: %s", event.email)
            continue
        built.append(
            PointAnalytics(
                user=user_ref,
                fame_points=event.fame_points,
                rich_points=event.rich_points,
                timestamp=now - timedelta(days=event.days_ago),
                created_at=now,
                updated_at=now,
            )
        )
    return built


def seed(db: Database, data: SeedData) -> None:
    config = get_config()
    user_repo = UserRepository(db)
    profile_repo = ProfileRepository(db)
    store_repo = StoreRepository(db)
    level_repo = LevelRepository(db)
    analytics_repo = PointAnalyticsRepository(db)

    users_service = UsersService(
        user_repo=user_repo,
        profile_repo=profile_repo,
        hasher=get_password_hasher_for_rounds(config.password_hash_rounds),
        user_id_max_attempts=config.user_id_max_attempts,
        user_id_insert_retries=config.user_id_insert_retries,
    )
    store_service = StoreService(
        store_repo=store_repo,
        credit_service=CreditService(user_repo, CreditsHistoryRepository(db)),
    )

    db["users"].delete_many({})
    db["profiles"].delete_many({})
    db["point_analytics"].delete_many({})
    logger.info("cleared users, profiles and point analytics")

    user_refs: dict[str, str] = {}
    for input_model in data.users:
        user = users_service.create_user(input_model)
        user_refs[user.email] = user.id  # type: ignore[assignment]
        profile_repo.update_fields(
            user.id,
            {
                "vip_level": random.randint(1, 5),
                "pro_expiration_date": datetime.now(timezone.utc) + PRO_PERIOD,
            },
        )
        logger.info("seeded user %s (user_id=%s)", user.email, user.user_id)

    for section in data.sections:
        if store_repo.find_section(section.section_name) is not None:
            logger.info("store section exists, skipping: %s", section.section_name)
            continue
        store_service.create_section(section.section_name)
        for seed_item in section.items:
            item = store_service.create_item(
                seed_item.name, seed_item.type, seed_item.price, seed_item.image  # type: ignore[arg-type]
            )
            store_service.add_item_to_section(section.section_name, item.id)
        logger.info("seeded store section %s", section.section_name)

    for threshold in data.levels:
        level_repo.upsert(threshold)
    if data.levels:
        logger.info("seeded %d level thresholds", len(data.levels))

    for event in build_point_events(
        user_refs, data.point_events, datetime.now(timezone.utc)
    ):
        analytics_repo.insert(event)
    if data.point_events:
        logger.info("seeded %d point events", len(data.point_events))


def main() -> None:
    setup_logger(name="social-service-seed")
    data = load_seed_data(Path(get_config().seed_file))

    connection = MongoConnection.from_env()
    db = connection.connect(ensure_indexes)
    try:
        seed(db, data)
    finally:
        connection.close()


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
