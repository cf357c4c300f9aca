from __future__ import annotations

from typing import Any, Protocol

from ..models.agency import Agency, AgencyHistoryEntry, AgencyMember
from ..models.analytics import PointAnalytics
from ..models.credit import CreditsHistory
from ..models.group import Group, GroupInvitation, GroupMember, InvitationStatus
from ..models.level import LevelThreshold
from ..models.profile import Profile
from ..models.store import Item, StoreSection
from ..models.user import User, UserFilter, UserSummary


# 관계 배열 필드 이름
RelationField = str
RELATION_FIELDS: frozenset[str] = frozenset(
    {"friends", "followers", "following", "blocked_users", "groups"}
)


class UserRepositoryInterface(Protocol):
    """UserRepository가 따라야 할 최소한의 계약.

    Service 레이어는 이 인터페이스에만 의존하고, 구체 구현(Mongo 등)은 몰라도 된다.
    id 인자는 내부 ObjectId 문자열, user_id 인자는 10자리 공개 ID 이다.
    """

    def insert(self, user: User) -> User:  # pragma: no cover - Protocol
        ...

    def find_by_id(self, id_value: str) -> User | None:  # pragma: no cover - Protocol
        ...

    def find_by_user_id(
        self, user_id: str
    ) -> User | None:  # pragma: no cover - Protocol
        ...

    def is_email_taken(
        self, email: str, exclude_id: str | None = None
    ) -> bool:  # pragma: no cover - Protocol
        ...

    def update_fields(
        self, id_value: str, fields: dict[str, Any]
    ) -> User | None:  # pragma: no cover - Protocol
        ...

    def delete_by_id(self, id_value: str) -> bool:  # pragma: no cover - Protocol
        ...

    def list(
        self,
        flt: UserFilter,
        sort: list[tuple[str, int]],
        page: int,
        limit: int,
    ) -> tuple[list[User], int]:  # pragma: no cover - Protocol
        ...

    def search(
        self, query: str, page: int, limit: int
    ) -> tuple[list[User], int]:  # pragma: no cover - Protocol
        ...

    def add_relation(
        self, id_value: str, field: RelationField, target_id: str
    ) -> bool:  # pragma: no cover - Protocol
        """$addToSet. 도큐먼트가 존재하면 True (이미 있던 값이어도 True)."""
        ...

    def remove_relation(
        self, id_value: str, field: RelationField, target_id: str
    ) -> bool:  # pragma: no cover - Protocol
        """$pull. 도큐먼트가 존재하면 True (없던 값이어도 True)."""
        ...

    def find_summaries(
        self, ids: list[str]
    ) -> list[UserSummary]:  # pragma: no cover - Protocol
        ...

    def increment_credits(
        self, id_value: str, amount: int
    ) -> User | None:  # pragma: no cover - Protocol
        ...

    def deduct_credits(
        self, id_value: str, amount: int
    ) -> User | None:  # pragma: no cover - Protocol
        """잔액이 amount 이상일 때만 차감한다. 조건 불충족/미존재 시 None."""
        ...


class ProfileRepositoryInterface(Protocol):
    def insert(self, profile: Profile) -> Profile:  # pragma: no cover - Protocol
        ...

    def find_by_user(
        self, user_ref: str
    ) -> Profile | None:  # pragma: no cover - Protocol
        ...

    def update_fields(
        self, user_ref: str, fields: dict[str, Any]
    ) -> Profile | None:  # pragma: no cover - Protocol
        ...

    def delete_by_user(self, user_ref: str) -> bool:  # pragma: no cover - Protocol
        ...


class AgencyRepositoryInterface(Protocol):
    def insert(self, agency: Agency) -> Agency:  # pragma: no cover - Protocol
        ...

    def find_by_id(self, id_value: str) -> Agency | None:  # pragma: no cover - Protocol
        ...

    def find_by_admin(
        self, admin_ref: str
    ) -> Agency | None:  # pragma: no cover - Protocol
        ...

    def upsert_member(
        self, agency_id: str, member: AgencyMember
    ) -> Agency | None:  # pragma: no cover - Protocol
        ...

    def record_history(
        self, agency_id: str, entry: AgencyHistoryEntry
    ) -> Agency | None:  # pragma: no cover - Protocol
        ...


class GroupRepositoryInterface(Protocol):
    def insert(self, group: Group) -> Group:  # pragma: no cover - Protocol
        ...

    def find_by_id(self, id_value: str) -> Group | None:  # pragma: no cover - Protocol
        ...

    def list_by_admin(
        self, admin_ref: str
    ) -> list[Group]:  # pragma: no cover - Protocol
        ...

    def add_invitation(
        self, group_id: str, invitation: GroupInvitation
    ) -> bool:  # pragma: no cover - Protocol
        """같은 유저의 pending 초대가 없을 때만 추가한다. 추가되면 True."""
        ...

    def set_invitation_status(
        self, group_id: str, user_ref: str, status: InvitationStatus
    ) -> Group | None:  # pragma: no cover - Protocol
        ...

    def add_member(
        self, group_id: str, member: GroupMember
    ) -> bool:  # pragma: no cover - Protocol
        ...


class StoreRepositoryInterface(Protocol):
    def insert_item(self, item: Item) -> Item:  # pragma: no cover - Protocol
        ...

    def find_item(self, id_value: str) -> Item | None:  # pragma: no cover - Protocol
        ...

    def find_items(self, ids: list[str]) -> list[Item]:  # pragma: no cover - Protocol
        ...

    def insert_section(
        self, section: StoreSection
    ) -> StoreSection:  # pragma: no cover - Protocol
        ...

    def find_section(
        self, section_name: str
    ) -> StoreSection | None:  # pragma: no cover - Protocol
        ...

    def add_item_to_section(
        self, section_name: str, item_id: str
    ) -> StoreSection | None:  # pragma: no cover - Protocol
        ...

    def list_sections(self) -> list[StoreSection]:  # pragma: no cover - Protocol
        ...


class CreditsHistoryRepositoryInterface(Protocol):
    def create(
        self, entry: CreditsHistory
    ) -> CreditsHistory:  # pragma: no cover - Protocol
        ...

    def list_by_user(
        self, user_ref: str, page: int, limit: int
    ) -> tuple[list[CreditsHistory], int]:  # pragma: no cover - Protocol
        ...


class PointAnalyticsRepositoryInterface(Protocol):
    def insert(
        self, event: PointAnalytics
    ) -> PointAnalytics:  # pragma: no cover - Protocol
        ...

    def aggregate(
        self, pipeline: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:  # pragma: no cover - Protocol
        ...


class LevelRepositoryInterface(Protocol):
    def find_next(
        self, level: int
    ) -> LevelThreshold | None:  # pragma: no cover - Protocol
        """level 보다 큰 가장 작은 레벨 기준을 반환한다."""
        ...
