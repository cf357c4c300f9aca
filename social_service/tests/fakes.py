"""서비스 테스트용 인메모리 가짜 레포지토리."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from social_service.app.models.agency import Agency, AgencyHistoryEntry, AgencyMember
from social_service.app.models.analytics import PointAnalytics
from social_service.app.models.credit import CreditsHistory
from social_service.app.models.group import (
    Group,
    GroupInvitation,
    GroupMember,
    InvitationStatus,
)
from social_service.app.models.level import LevelThreshold
from social_service.app.models.profile import Profile
from social_service.app.models.store import Item, StoreSection
from social_service.app.models.user import User, UserFilter, UserSummary


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(ObjectId())


def build_user(
    user_id: str,
    name: str,
    *,
    email: str | None = None,
    credits: int = 0,
    **fields: Any,
) -> User:
    now = _now()
    return User(
        user_id=user_id,
        name=name,
        email=email or f"{name.lower().replace(' ', '.')}@example.com",
        password="hashed",
        credits=credits,
        created_at=now,
        updated_at=now,
        **fields,
    )


class FakeHasher:
    def hash(self, password: str) -> str:
        return f"hashed::{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed::{password}"


class FakeUserRepository:
    """UserRepositoryInterface 의 인메모리 구현.

    relation_failures 에 (id, field) 를 넣으면 해당 관계 갱신에서 예외를 발생시킨다.
    """

    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.relation_failures: dict[tuple[str, str], Exception] = {}
        self.reserved_user_ids: set[str] = set()
        self.deleted_ids: list[str] = []

    def add(self, user: User) -> User:
        return self.insert(user)

    def insert(self, user: User) -> User:
        if any(u.email == user.email for u in self.users.values()):
            raise DuplicateKeyError(
                "E11000 duplicate key error (email)",
                code=11000,
                details={"keyPattern": {"email": 1}},
            )
        if user.user_id in self.reserved_user_ids or any(
            u.user_id == user.user_id for u in self.users.values()
        ):
            raise DuplicateKeyError(
                "E11000 duplicate key error (user_id)",
                code=11000,
                details={"keyPattern": {"user_id": 1}},
            )
        stored = user.model_copy(deep=True, update={"id": _new_id()})
        self.users[stored.id] = stored  # type: ignore[index]
        return stored.model_copy(deep=True)

    def find_by_id(self, id_value: str) -> User | None:
        user = self.users.get(id_value)
        return user.model_copy(deep=True) if user else None

    def find_by_user_id(self, user_id: str) -> User | None:
        for user in self.users.values():
            if user.user_id == user_id:
                return user.model_copy(deep=True)
        return None

    def is_email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        return any(
            u.email == email and u.id != exclude_id for u in self.users.values()
        )

    def update_fields(self, id_value: str, fields: dict[str, Any]) -> User | None:
        user = self.users.get(id_value)
        if user is None:
            return None
        updated = user.model_copy(update={**fields, "updated_at": _now()})
        self.users[id_value] = updated
        return updated.model_copy(deep=True)

    def delete_by_id(self, id_value: str) -> bool:
        self.deleted_ids.append(id_value)
        return self.users.pop(id_value, None) is not None

    def list(
        self,
        flt: UserFilter,
        sort: list[tuple[str, int]],
        page: int,
        limit: int,
    ) -> tuple[list[User], int]:
        users = [
            u
            for u in self.users.values()
            if (not flt.name or u.name == flt.name)
            and (not flt.role or u.role == flt.role)
        ]
        for field, direction in reversed(sort):
            users.sort(key=lambda u: getattr(u, field), reverse=direction == -1)
        skip = (page - 1) * limit
        return [u.model_copy(deep=True) for u in users[skip : skip + limit]], len(users)

    def search(self, query: str, page: int, limit: int) -> tuple[list[User], int]:
        pattern = re.compile(re.escape(query), re.IGNORECASE)
        users = sorted(
            (
                u
                for u in self.users.values()
                if pattern.search(u.name) or u.user_id == query
            ),
            key=lambda u: u.name,
        )
        skip = (page - 1) * limit
        return [u.model_copy(deep=True) for u in users[skip : skip + limit]], len(users)

    def _check_failure(self, id_value: str, field: str) -> None:
        exc = self.relation_failures.get((id_value, field))
        if exc is not None:
            raise exc

    def add_relation(self, id_value: str, field: str, target_id: str) -> bool:
        self._check_failure(id_value, field)
        user = self.users.get(id_value)
        if user is None:
            return False
        values = getattr(user, field)
        if target_id not in values:
            values.append(target_id)
        return True

    def remove_relation(self, id_value: str, field: str, target_id: str) -> bool:
        self._check_failure(id_value, field)
        user = self.users.get(id_value)
        if user is None:
            return False
        setattr(user, field, [v for v in getattr(user, field) if v != target_id])
        return True

    def find_summaries(self, ids: list[str]) -> list[UserSummary]:
        result: list[UserSummary] = []
        for id_value in ids:
            user = self.users.get(id_value)
            if user is None:
                continue
            result.append(
                UserSummary(
                    id=id_value,
                    user_id=user.user_id,
                    name=user.name,
                    avatar=user.avatar,
                    level=user.level,
                    credits=user.credits,
                )
            )
        return result

    def increment_credits(self, id_value: str, amount: int) -> User | None:
        user = self.users.get(id_value)
        if user is None:
            return None
        user.credits += amount
        return user.model_copy(deep=True)

    def deduct_credits(self, id_value: str, amount: int) -> User | None:
        user = self.users.get(id_value)
        if user is None or user.credits < amount:
            return None
        user.credits -= amount
        return user.model_copy(deep=True)


class FakeProfileRepository:
    def __init__(self) -> None:
        self.profiles: dict[str, Profile] = {}
        self.fail_insert: Exception | None = None

    def insert(self, profile: Profile) -> Profile:
        if self.fail_insert is not None:
            raise self.fail_insert
        stored = profile.model_copy(deep=True, update={"id": _new_id()})
        self.profiles[profile.user] = stored
        return stored.model_copy(deep=True)

    def find_by_user(self, user_ref: str) -> Profile | None:
        profile = self.profiles.get(user_ref)
        return profile.model_copy(deep=True) if profile else None

    def update_fields(self, user_ref: str, fields: dict[str, Any]) -> Profile | None:
        profile = self.profiles.get(user_ref)
        if profile is None:
            return None
        updated = Profile.model_validate({**profile.model_dump(), **fields})
        self.profiles[user_ref] = updated
        return updated.model_copy(deep=True)

    def delete_by_user(self, user_ref: str) -> bool:
        return self.profiles.pop(user_ref, None) is not None


class FakeCreditsHistoryRepository:
    def __init__(self) -> None:
        self.created: list[CreditsHistory] = []

    def create(self, entry: CreditsHistory) -> CreditsHistory:
        stored = entry.model_copy(update={"id": _new_id()})
        self.created.append(stored)
        return stored

    def list_by_user(
        self, user_ref: str, page: int, limit: int
    ) -> tuple[list[CreditsHistory], int]:
        entries = [e for e in reversed(self.created) if e.user == user_ref]
        skip = (page - 1) * limit
        return entries[skip : skip + limit], len(entries)


class FakeAgencyRepository:
    def __init__(self) -> None:
        self.agencies: dict[str, Agency] = {}

    def insert(self, agency: Agency) -> Agency:
        stored = agency.model_copy(deep=True, update={"id": _new_id()})
        self.agencies[stored.id] = stored  # type: ignore[index]
        return stored.model_copy(deep=True)

    def find_by_id(self, id_value: str) -> Agency | None:
        agency = self.agencies.get(id_value)
        return agency.model_copy(deep=True) if agency else None

    def find_by_admin(self, admin_ref: str) -> Agency | None:
        for agency in self.agencies.values():
            if agency.admin == admin_ref:
                return agency.model_copy(deep=True)
        return None

    def upsert_member(self, agency_id: str, member: AgencyMember) -> Agency | None:
        agency = self.agencies.get(agency_id)
        if agency is None:
            return None
        agency.members = [m for m in agency.members if m.user != member.user]
        agency.members.append(member)
        return agency.model_copy(deep=True)

    def record_history(
        self, agency_id: str, entry: AgencyHistoryEntry
    ) -> Agency | None:
        agency = self.agencies.get(agency_id)
        if agency is None:
            return None
        agency.balance += entry.amount
        agency.history.append(entry)
        return agency.model_copy(deep=True)


class FakeGroupRepository:
    def __init__(self) -> None:
        self.groups: dict[str, Group] = {}

    def insert(self, group: Group) -> Group:
        stored = group.model_copy(deep=True, update={"id": _new_id()})
        self.groups[stored.id] = stored  # type: ignore[index]
        return stored.model_copy(deep=True)

    def find_by_id(self, id_value: str) -> Group | None:
        group = self.groups.get(id_value)
        return group.model_copy(deep=True) if group else None

    def list_by_admin(self, admin_ref: str) -> list[Group]:
        return [
            g.model_copy(deep=True) for g in self.groups.values() if g.admin == admin_ref
        ]

    def add_invitation(self, group_id: str, invitation: GroupInvitation) -> bool:
        group = self.groups.get(group_id)
        if group is None:
            return False
        if any(
            i.user == invitation.user and i.status == "pending"
            for i in group.invitations
        ):
            return False
        group.invitations.append(invitation)
        return True

    def set_invitation_status(
        self, group_id: str, user_ref: str, status: InvitationStatus
    ) -> Group | None:
        group = self.groups.get(group_id)
        if group is None:
            return None
        for invitation in group.invitations:
            if invitation.user == user_ref:
                invitation.status = status
                return group.model_copy(deep=True)
        return None

    def add_member(self, group_id: str, member: GroupMember) -> bool:
        group = self.groups.get(group_id)
        if group is None or any(m.user == member.user for m in group.members):
            return False
        group.members.append(member)
        return True


class FakeStoreRepository:
    def __init__(self) -> None:
        self.items: dict[str, Item] = {}
        self.sections: dict[str, StoreSection] = {}

    def insert_item(self, item: Item) -> Item:
        stored = item.model_copy(update={"id": _new_id()})
        self.items[stored.id] = stored  # type: ignore[index]
        return stored

    def find_item(self, id_value: str) -> Item | None:
        return self.items.get(id_value)

    def find_items(self, ids: list[str]) -> list[Item]:
        return [self.items[i] for i in ids if i in self.items]

    def insert_section(self, section: StoreSection) -> StoreSection:
        if section.section_name in self.sections:
            raise DuplicateKeyError("E11000 duplicate key error (section_name)", 11000)
        stored = section.model_copy(deep=True, update={"id": _new_id()})
        self.sections[section.section_name] = stored
        return stored.model_copy(deep=True)

    def find_section(self, section_name: str) -> StoreSection | None:
        section = self.sections.get(section_name)
        return section.model_copy(deep=True) if section else None

    def add_item_to_section(
        self, section_name: str, item_id: str
    ) -> StoreSection | None:
        section = self.sections.get(section_name)
        if section is None:
            return None
        if item_id not in section.items:
            section.items.append(item_id)
        return section.model_copy(deep=True)

    def list_sections(self) -> list[StoreSection]:
        return [
            self.sections[name].model_copy(deep=True) for name in sorted(self.sections)
        ]


class FakeLevelRepository:
    def __init__(self, thresholds: list[LevelThreshold] | None = None) -> None:
        self.thresholds = thresholds or []

    def find_next(self, level: int) -> LevelThreshold | None:
        candidates = sorted(
            (t for t in self.thresholds if t.level > level), key=lambda t: t.level
        )
        return candidates[0] if candidates else None


_DATE_OPERATORS = {
    "$year": lambda ts: ts.year,
    "$month": lambda ts: ts.month,
    "$dayOfYear": lambda ts: ts.timetuple().tm_yday,
    "$isoWeekYear": lambda ts: ts.isocalendar()[0],
    "$isoWeek": lambda ts: ts.isocalendar()[1],
}


class FakePointAnalyticsRepository:
    """$match / $group / $sort 만 해석하는 간단한 집계 구현."""

    def __init__(self) -> None:
        self.events: list[PointAnalytics] = []
        self.pipelines: list[list[dict[str, Any]]] = []

    def insert(self, event: PointAnalytics) -> PointAnalytics:
        stored = event.model_copy(update={"id": _new_id()})
        self.events.append(stored)
        return stored

    def aggregate(self, pipeline: list[dict[str, Any]]) -> list[dict[str, Any]]:
        self.pipelines.append(pipeline)
        match = pipeline[0]["$match"]
        group = pipeline[1]["$group"]

        events = [
            e
            for e in self.events
            if e.user == str(match["user"])
            and ("room_id" not in match or e.room_id == str(match["room_id"]))
        ]

        rows: dict[Any, dict[str, Any]] = {}
        for event in events:
            key_spec = group["_id"]
            if key_spec is None:
                key = None
                key_doc = None
            else:
                key_doc = {}
                for name, expr in key_spec.items():
                    ((op, _),) = expr.items()
                    key_doc[name] = _DATE_OPERATORS[op](event.timestamp)
                key = tuple(sorted(key_doc.items()))
            row = rows.setdefault(
                key,
                {"_id": key_doc, "total_fame_points": 0, "total_rich_points": 0},
            )
            row["total_fame_points"] += event.fame_points
            row["total_rich_points"] += event.rich_points

        # $sort 가 없으면 순서를 보장하지 않으므로 일부러 뒤집어 반환한다.
        return list(reversed(list(rows.values())))


