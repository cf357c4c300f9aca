"""크레딧 서비스.

잔액 증감(users.credits)과 변동 이력(credits_history) 기록을 처리한다.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends
from pymongo.database import Database

from common.mongo.client import get_database

from ..exceptions import InsufficientFundsError, ValidationError
from ..models.credit import CreditOperation, CreditsHistory
from ..models.user import User
from ..repositories.credit_repository import CreditsHistoryRepository
from ..repositories.interfaces import (
    CreditsHistoryRepositoryInterface,
    UserRepositoryInterface,
)
from .lookup import require_user
from .users_service import get_user_repository


logger = logging.getLogger(__name__)


class CreditService:
    """크레딧 관련 비즈니스 로직."""

    def __init__(
        self,
        user_repo: UserRepositoryInterface,
        history_repo: CreditsHistoryRepositoryInterface,
    ) -> None:
        self._user_repo = user_repo
        self._history_repo = history_repo

    def add_credits(self, user_id: str, amount: int) -> User:
        """잔액을 무조건 증가시키고 add 이력을 남긴다."""
        self._check_amount(amount)
        user = require_user(self._user_repo, user_id)

        updated = self._user_repo.increment_credits(user.id, amount)
        if updated is None:
            # 조회 이후 삭제된 경우
            return require_user(self._user_repo, user_id)

        self._record(updated, amount, "add")
        return updated

    def deduct_credits(
        self,
        user_id: str,
        amount: int,
        *,
        operation: CreditOperation = "deduct",
        item_id: str | None = None,
    ) -> User:
        """잔액이 amount 이상일 때만 차감한다. 부족하면 InsufficientFundsError (잔액 불변)."""
        self._check_amount(amount, allow_zero=operation == "purchase")
        user = require_user(self._user_repo, user_id)

        updated = self._user_repo.deduct_credits(user.id, amount)
        if updated is None:
            # 조건 불충족과 미존재를 구분한다.
            current = require_user(self._user_repo, user_id)
            raise InsufficientFundsError(
                f"not enough credits (balance={current.credits}, required={amount})"
            )

        self._record(updated, amount, operation, item_id=item_id)
        return updated

    def manage_credits(self, user_id: str, operation: str, amount: int) -> User:
        if operation == "add":
            return self.add_credits(user_id, amount)
        if operation == "deduct":
            return self.deduct_credits(user_id, amount)
        raise ValidationError(f"unsupported credit operation: {operation}")

    def get_history(
        self, user_id: str, page: int = 1, limit: int = 20
    ) -> tuple[list[CreditsHistory], int]:
        """크레딧 변동 이력 조회 (최신순)."""
        user = require_user(self._user_repo, user_id)
        return self._history_repo.list_by_user(user.id, page, limit)

    def _record(
        self,
        user: User,
        amount: int,
        operation: CreditOperation,
        *,
        item_id: str | None = None,
    ) -> None:
        now = datetime.now(timezone.utc)
        self._history_repo.create(
            CreditsHistory(
                user=user.id,
                amount=amount,
                type=operation,
                item=item_id,
                date=now,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            "credits %s (user_id=%s, amount=%d, balance=%d)",
            operation,
            user.user_id,
            amount,
            user.credits,
        )

    @staticmethod
    def _check_amount(amount: int, *, allow_zero: bool = False) -> None:
        if amount < 0 or (amount == 0 and not allow_zero):
            raise ValidationError("amount must be a positive integer")


def get_credits_history_repository(
    db: Database = Depends(get_database),
) -> CreditsHistoryRepositoryInterface:
    """FastAPI DI용 CreditsHistoryRepository 팩토리."""

    return CreditsHistoryRepository(db)


def get_credit_service(
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
    history_repo: CreditsHistoryRepositoryInterface = Depends(
        get_credits_history_repository
    ),
) -> CreditService:
    """FastAPI DI용 CreditService 팩토리."""

    return CreditService(user_repo=user_repo, history_repo=history_repo)
