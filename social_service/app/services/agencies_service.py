from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends
from pymongo.database import Database

from common.mongo.client import get_database

from ..exceptions import NotFoundError, ValidationError
from ..models.agency import Agency, AgencyHistoryEntry, AgencyMember
from ..repositories.agency_repository import AgencyRepository
from ..repositories.interfaces import AgencyRepositoryInterface, UserRepositoryInterface
from .lookup import require_object_id, require_user
from .users_service import get_user_repository


logger = logging.getLogger(__name__)


class AgenciesService:
    """에이전시 생성, 멤버(호스트) 관리, 크레딧 변동 기록."""

    def __init__(
        self,
        agency_repo: AgencyRepositoryInterface,
        user_repo: UserRepositoryInterface,
    ) -> None:
        self._agency_repo = agency_repo
        self._user_repo = user_repo

    def create_agency(self, admin_user_id: str, name: str) -> Agency:
        name = name.strip()
        if not name:
            raise ValidationError("agency name is required")
        admin = require_user(self._user_repo, admin_user_id)

        now = datetime.now(timezone.utc)
        agency = self._agency_repo.insert(
            Agency(name=name, admin=admin.id, created_at=now, updated_at=now)
        )
        logger.info("agency created (agency_id=%s, admin=%s)", agency.id, admin.user_id)
        return agency

    def get_agency(self, agency_id: str) -> Agency:
        require_object_id(agency_id, "agency")
        agency = self._agency_repo.find_by_id(agency_id)
        if agency is None:
            raise NotFoundError(f"agency not found (id={agency_id})")
        return agency

    def upsert_member(
        self,
        agency_id: str,
        member_user_id: str,
        *,
        day_target: int = 0,
        month_target: int = 0,
        credit: int = 0,
        expected_salary: int = 0,
    ) -> Agency:
        """멤버 항목을 추가하거나 교체하고, 해당 유저를 이 에이전시의 호스트로 표시한다."""

        self.get_agency(agency_id)
        member_user = require_user(self._user_repo, member_user_id)

        updated = self._agency_repo.upsert_member(
            agency_id,
            AgencyMember(
                user=member_user.id,
                day_target=day_target,
                month_target=month_target,
                credit=credit,
                expected_salary=expected_salary,
            ),
        )
        if updated is None:
            raise NotFoundError(f"agency not found (id={agency_id})")

        self._user_repo.update_fields(
            member_user.id, {"host_agency": agency_id, "is_host": True}
        )
        return updated

    def record_credit(
        self, agency_id: str, amount: int, user_id: str | None = None
    ) -> Agency:
        """잔액을 amount 만큼 증감하고 날짜가 찍힌 이력을 남긴다. (음수 허용)"""

        self.get_agency(agency_id)
        user_ref: str | None = None
        if user_id is not None:
            user_ref = require_user(self._user_repo, user_id).id

        updated = self._agency_repo.record_history(
            agency_id,
            AgencyHistoryEntry(
                date=datetime.now(timezone.utc), amount=amount, user=user_ref
            ),
        )
        if updated is None:
            raise NotFoundError(f"agency not found (id={agency_id})")
        logger.info(
            "agency credit recorded (agency_id=%s, amount=%d, balance=%d)",
            agency_id,
            amount,
            updated.balance,
        )
        return updated


def get_agency_repository(
    db: Database = Depends(get_database),
) -> AgencyRepositoryInterface:
    return AgencyRepository(db)


def get_agencies_service(
    agency_repo: AgencyRepositoryInterface = Depends(get_agency_repository),
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
) -> AgenciesService:
    """FastAPI DI용 AgenciesService 팩토리."""

    return AgenciesService(agency_repo=agency_repo, user_repo=user_repo)
