"""서비스 공통 조회 헬퍼."""

from __future__ import annotations

from common.mongo.types import is_object_id

from ..exceptions import NotFoundError
from ..models.user import User
from ..repositories.interfaces import UserRepositoryInterface


def require_user(user_repo: UserRepositoryInterface, user_id: str) -> User:
    """공개 user_id 로 유저를 조회한다. 없으면 NotFoundError."""

    user = user_repo.find_by_user_id(user_id)
    if user is None:
        raise NotFoundError(f"user not found (user_id={user_id})")
    return user


def require_object_id(value: str, entity: str) -> str:
    """경로 파라미터 등으로 받은 ObjectId 문자열 형식을 확인한다. 형식이 틀리면 NotFoundError."""

    if not is_object_id(value):
        raise NotFoundError(f"{entity} not found (id={value})")
    return value
