from __future__ import annotations

import logging
from typing import Callable

from fastapi import Depends
from pymongo.errors import PyMongoError

from ..exceptions import NotFoundError, RelationshipUpdateError, ValidationError
from ..models.user import Ignorance, User, UserSummary
from ..repositories.interfaces import UserRepositoryInterface
from .lookup import require_user
from .users_service import get_user_repository


logger = logging.getLogger(__name__)


class RelationshipsService:
    """유저 간 관계(follow/block/friend) 변경과 관계 목록 조회.

    - 각 배열 변경은 $addToSet / $pull 단일 도큐먼트 연산이라 중복 없이 멱등이다.
    - follow/unfollow 는 actor → target 순서의 2단계 갱신이다. 두 번째 갱신이 실패하면
      첫 번째 갱신을 되돌리고 RelationshipUpdateError 를 발생시킨다.
    - block / friend 는 actor 쪽만 갱신한다.
    """

    def __init__(self, user_repo: UserRepositoryInterface) -> None:
        self._user_repo = user_repo

    # --- follow ------------------------------------------------------------------
    def follow(self, actor_user_id: str, target_user_id: str) -> None:
        actor, target = self._resolve_pair(actor_user_id, target_user_id)

        already_following = target.id in actor.following
        if already_following and actor.id in target.followers:
            return

        self._apply_pair(
            actor,
            target,
            apply_actor=lambda: self._user_repo.add_relation(
                actor.id, "following", target.id
            ),
            apply_target=lambda: self._user_repo.add_relation(
                target.id, "followers", actor.id
            ),
            revert_actor=None
            if already_following
            else lambda: self._user_repo.remove_relation(
                actor.id, "following", target.id
            ),
        )
        logger.info("user %s followed %s", actor.user_id, target.user_id)

    def unfollow(self, actor_user_id: str, target_user_id: str) -> None:
        actor, target = self._resolve_pair(actor_user_id, target_user_id)

        was_following = target.id in actor.following
        if not was_following and actor.id not in target.followers:
            return

        self._apply_pair(
            actor,
            target,
            apply_actor=lambda: self._user_repo.remove_relation(
                actor.id, "following", target.id
            ),
            apply_target=lambda: self._user_repo.remove_relation(
                target.id, "followers", actor.id
            ),
            revert_actor=lambda: self._user_repo.add_relation(
                actor.id, "following", target.id
            )
            if was_following
            else None,
        )
        logger.info("user %s unfollowed %s", actor.user_id, target.user_id)

    def toggle_follow(self, actor_user_id: str, target_user_id: str) -> bool:
        """팔로우 중이면 언팔로우, 아니면 팔로우한다. 변경 후 팔로우 여부를 반환한다."""

        actor = require_user(self._user_repo, actor_user_id)
        target = require_user(self._user_repo, target_user_id)
        if target.id in actor.following:
            self.unfollow(actor_user_id, target_user_id)
            return False
        self.follow(actor_user_id, target_user_id)
        return True

    # --- block / friend ----------------------------------------------------------
    def block(self, actor_user_id: str, target_user_id: str) -> None:
        actor, target = self._resolve_pair(actor_user_id, target_user_id)
        if target.id in actor.blocked_users:
            return
        if not self._user_repo.add_relation(actor.id, "blocked_users", target.id):
            raise NotFoundError(f"user not found (user_id={actor_user_id})")
        logger.info("user %s blocked %s", actor.user_id, target.user_id)

    def unblock(self, actor_user_id: str, target_user_id: str) -> None:
        actor, target = self._resolve_pair(actor_user_id, target_user_id)
        if target.id not in actor.blocked_users:
            return
        if not self._user_repo.remove_relation(actor.id, "blocked_users", target.id):
            raise NotFoundError(f"user not found (user_id={actor_user_id})")
        logger.info("user %s unblocked %s", actor.user_id, target.user_id)

    def add_friend(self, actor_user_id: str, friend_user_id: str) -> User:
        """actor 의 friends 에만 추가한다. (상대 쪽 friends 는 변경하지 않음)"""

        actor, friend = self._resolve_pair(actor_user_id, friend_user_id)
        if friend.id not in actor.friends:
            if not self._user_repo.add_relation(actor.id, "friends", friend.id):
                raise NotFoundError(f"user not found (user_id={actor_user_id})")
        return require_user(self._user_repo, actor_user_id)

    # --- lists -------------------------------------------------------------------
    def list_friends(self, user_id: str) -> list[UserSummary]:
        user = require_user(self._user_repo, user_id)
        return self._user_repo.find_summaries(user.friends)

    def list_followers(self, user_id: str) -> list[UserSummary]:
        user = require_user(self._user_repo, user_id)
        return self._user_repo.find_summaries(user.followers)

    def list_following(self, user_id: str) -> list[UserSummary]:
        user = require_user(self._user_repo, user_id)
        return self._user_repo.find_summaries(user.following)

    def get_blocked(self, user_id: str) -> Ignorance:
        user = require_user(self._user_repo, user_id)
        return Ignorance(
            user=user.user_id,
            blocked_users=self._user_repo.find_summaries(user.blocked_users),
        )

    # --- helpers -----------------------------------------------------------------
    def _resolve_pair(
        self, actor_user_id: str, target_user_id: str
    ) -> tuple[User, User]:
        if actor_user_id == target_user_id:
            raise ValidationError("cannot target yourself")
        actor = require_user(self._user_repo, actor_user_id)
        target = require_user(self._user_repo, target_user_id)
        return actor, target

    def _apply_pair(
        self,
        actor: User,
        target: User,
        *,
        apply_actor: Callable[[], bool],
        apply_target: Callable[[], bool],
        revert_actor: Callable[[], bool] | None,
    ) -> None:
        if not apply_actor():
            raise NotFoundError(f"user not found (user_id={actor.user_id})")

        try:
            target_matched = apply_target()
        except PyMongoError as exc:
            self._compensate(actor, revert_actor)
            raise RelationshipUpdateError(
                f"failed to update relationship of user {target.user_id}"
            ) from exc

        if not target_matched:
            # target 이 그 사이에 삭제된 경우
            self._compensate(actor, revert_actor)
            raise NotFoundError(f"user not found (user_id={target.user_id})")

    @staticmethod
    def _compensate(actor: User, revert_actor: Callable[[], bool] | None) -> None:
        if revert_actor is None:
            return
        try:
            revert_actor()
        except PyMongoError:
            logger.exception(
                "failed to compensate relationship update (user_id=%s)", actor.user_id
            )
            raise


def get_relationships_service(
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
) -> RelationshipsService:
    """FastAPI DI용 RelationshipsService 팩토리."""

    return RelationshipsService(user_repo)
