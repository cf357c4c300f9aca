from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from fastapi import Depends
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from common.mongo.client import get_database
from common.schemas.pagination import normalize_page

from ..config import ServiceConfig, get_config
from ..exceptions import ConflictError, IdGenerationExhaustedError, ValidationError
from ..models.profile import Profile
from ..models.user import User, UserCreateInput, UserFilter, UserUpdateInput
from ..repositories.interfaces import (
    ProfileRepositoryInterface,
    UserRepositoryInterface,
)
from ..repositories.profile_repository import ProfileRepository
from ..repositories.user_repository import UserRepository
from ..security import (
    PasswordHasher,
    check_password_strength,
    get_password_hasher_for_rounds,
)
from ..utils.id_generator import generate_user_id
from .lookup import require_user


logger = logging.getLogger(__name__)


SORTABLE_FIELDS: frozenset[str] = frozenset(
    {
        "name",
        "email",
        "user_id",
        "role",
        "level",
        "credits",
        "fame_points",
        "rich_points",
        "created_at",
        "updated_at",
    }
)

SEARCH_LIST_LIMIT = 50


def parse_sort_by(sort_by: str | None) -> list[tuple[str, int]]:
    """'name:desc,created_at:asc' 형식의 정렬 옵션을 pymongo sort 스펙으로 변환한다."""

    if not sort_by:
        return []

    sort: list[tuple[str, int]] = []
    for part in sort_by.split(","):
        part = part.strip()
        if not part:
            continue
        field, _, order = part.partition(":")
        field = field.strip()
        if field not in SORTABLE_FIELDS:
            raise ValidationError(f"unsupported sort field: {field}")
        direction = -1 if order.strip().lower() == "desc" else 1
        sort.append((field, direction))
    return sort


def _duplicate_key_field(exc: DuplicateKeyError) -> str | None:
    details = exc.details or {}
    key_pattern = details.get("keyPattern") or details.get("keyValue") or {}
    if key_pattern:
        return next(iter(key_pattern))
    message = str(exc)
    for field in ("email", "user_id"):
        if field in message:
            return field
    return None


class UsersService:
    """계정 생성/조회/수정/삭제와 유저 검색 비즈니스 로직.

    - 유저와 프로필은 함께 생성/삭제한다.
    - 공개 user_id 는 생성기에서 만들고, unique 인덱스 충돌 시 재생성 후 다시 삽입한다.
    """

    def __init__(
        self,
        user_repo: UserRepositoryInterface,
        profile_repo: ProfileRepositoryInterface,
        hasher: PasswordHasher,
        *,
        id_generator: Callable[[int], str] = generate_user_id,
        user_id_max_attempts: int = 100,
        user_id_insert_retries: int = 3,
    ) -> None:
        self._user_repo = user_repo
        self._profile_repo = profile_repo
        self._hasher = hasher
        self._id_generator = id_generator
        self._user_id_max_attempts = user_id_max_attempts
        self._user_id_insert_retries = user_id_insert_retries

    # --- commands ----------------------------------------------------------------
    def create_user(self, input_model: UserCreateInput) -> User:
        email = input_model.email.strip().lower()
        name = input_model.name.strip()
        if not name:
            raise ValidationError("name is required")
        password = check_password_strength(input_model.password)

        if self._user_repo.is_email_taken(email):
            raise ConflictError("email already taken")

        now = datetime.now(timezone.utc)
        hashed = self._hasher.hash(password)

        user = self._insert_with_unique_user_id(
            lambda user_id: User(
                user_id=user_id,
                name=name,
                email=email,
                password=hashed,
                avatar=input_model.avatar,
                frame=input_model.frame,
                role=input_model.role,
                created_at=now,
                updated_at=now,
            )
        )

        try:
            self._profile_repo.insert(
                Profile(user=user.id, created_at=now, updated_at=now)
            )
        except Exception:
            # 프로필 없이 유저만 남지 않도록 되돌린다.
            logger.exception(
                "profile creation failed, rolling back user (user_id=%s)", user.user_id
            )
            self._user_repo.delete_by_id(user.id)
            raise

        logger.info("user created (user_id=%s)", user.user_id)
        return user

    def _insert_with_unique_user_id(self, build: Callable[[str], User]) -> User:
        for attempt in range(1, self._user_id_insert_retries + 1):
            user_id = self._id_generator(self._user_id_max_attempts)
            try:
                return self._user_repo.insert(build(user_id))
            except DuplicateKeyError as exc:
                field = _duplicate_key_field(exc)
                if field == "email":
                    raise ConflictError("email already taken") from exc
                logger.warning(
                    "user_id collision on insert (attempt=%d/%d)",
                    attempt,
                    self._user_id_insert_retries,
                )

        raise IdGenerationExhaustedError(
            f"user_id collided {self._user_id_insert_retries} times"
        )

    def update_user(self, user_id: str, input_model: UserUpdateInput) -> User:
        user = require_user(self._user_repo, user_id)

        fields: dict[str, Any] = input_model.model_dump(exclude_none=True)

        if "name" in fields:
            fields["name"] = fields["name"].strip()
            if not fields["name"]:
                raise ValidationError("name is required")

        if "email" in fields:
            fields["email"] = fields["email"].strip().lower()
            if self._user_repo.is_email_taken(fields["email"], exclude_id=user.id):
                raise ConflictError("email already taken")

        if "password" in fields:
            fields["password"] = self._hasher.hash(
                check_password_strength(fields["password"])
            )

        if not fields:
            return user

        try:
            updated = self._user_repo.update_fields(user.id, fields)
        except DuplicateKeyError as exc:
            raise ConflictError("email already taken") from exc
        if updated is None:
            return require_user(self._user_repo, user_id)
        return updated

    def delete_user(self, user_id: str) -> None:
        """유저와 프로필을 삭제한다. 다른 도큐먼트의 참조는 정리하지 않는다."""

        user = require_user(self._user_repo, user_id)

        self._user_repo.delete_by_id(user.id)
        self._profile_repo.delete_by_user(user.id)
        logger.info("user deleted (user_id=%s)", user_id)

    # --- queries -----------------------------------------------------------------
    def get_user(self, user_id: str) -> User:
        return require_user(self._user_repo, user_id)

    def query_users(
        self,
        flt: UserFilter,
        sort_by: str | None,
        page: int,
        limit: int,
    ) -> tuple[list[User], int, int, int]:
        """(유저 목록, 총 개수, 보정된 page, 보정된 limit) 을 반환한다."""

        sort = parse_sort_by(sort_by)
        page, limit = normalize_page(page, limit)
        users, total = self._user_repo.list(flt, sort, page, limit)
        return users, total, page, limit

    def search_users(
        self, query: str | None, page: int = 1, limit: int = 10
    ) -> tuple[list[User], int, int, int]:
        """이름 부분 일치 또는 user_id 완전 일치 검색 (페이지네이션)."""

        query = (query or "").strip()
        if not query:
            raise ValidationError("search query is required")
        page, limit = normalize_page(page, limit)
        users, total = self._user_repo.search(query, page, limit)
        return users, total, page, limit

    def search_users_list(self, query: str | None) -> list[User]:
        """페이지 정보 없이 상위 SEARCH_LIST_LIMIT 건만 반환한다."""

        users, _, _, _ = self.search_users(query, page=1, limit=SEARCH_LIST_LIMIT)
        return users


def get_user_repository(
    db: Database = Depends(get_database),
) -> UserRepositoryInterface:
    """FastAPI DI용 UserRepository 팩토리."""

    return UserRepository(db)


def get_profile_repository(
    db: Database = Depends(get_database),
) -> ProfileRepositoryInterface:
    """FastAPI DI용 ProfileRepository 팩토리."""

    return ProfileRepository(db)


def get_password_hasher(
    config: ServiceConfig = Depends(get_config),
) -> PasswordHasher:
    return get_password_hasher_for_rounds(config.password_hash_rounds)


def get_users_service(
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
    profile_repo: ProfileRepositoryInterface = Depends(get_profile_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    config: ServiceConfig = Depends(get_config),
) -> UsersService:
    """FastAPI DI용 UsersService 팩토리."""

    return UsersService(
        user_repo=user_repo,
        profile_repo=profile_repo,
        hasher=hasher,
        user_id_max_attempts=config.user_id_max_attempts,
        user_id_insert_retries=config.user_id_insert_retries,
    )
