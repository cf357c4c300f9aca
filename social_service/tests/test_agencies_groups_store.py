from __future__ import annotations

import pytest

from social_service.app.exceptions import ConflictError, NotFoundError, ValidationError
from social_service.app.models.user import User
from social_service.app.services.agencies_service import AgenciesService
from social_service.app.services.groups_service import GroupsService
from social_service.app.services.store_service import StoreService
from social_service.tests.fakes import FakeUserRepository, build_user


@pytest.fixture
def admin(user_repo: FakeUserRepository) -> User:
    return user_repo.add(build_user("1000000001", "Admin"))


@pytest.fixture
def host(user_repo: FakeUserRepository) -> User:
    return user_repo.add(build_user("1000000002", "Host"))


# --- agencies --------------------------------------------------------------------


def test_upsert_member_replaces_entry_and_marks_host(
    agencies_service: AgenciesService,
    user_repo: FakeUserRepository,
    admin: User,
    host: User,
) -> None:
    agency = agencies_service.create_agency(admin.user_id, " Stars ")
    assert agency.name == "Stars"
    assert agency.admin == admin.id

    agencies_service.upsert_member(agency.id, host.user_id, day_target=5)  # type: ignore[arg-type]
    updated = agencies_service.upsert_member(agency.id, host.user_id, day_target=7)  # type: ignore[arg-type]

    assert [(m.user, m.day_target) for m in updated.members] == [(host.id, 7)]
    stored_host = user_repo.users[host.id]  # type: ignore[index]
    assert stored_host.is_host is True
    assert stored_host.host_agency == agency.id


def test_record_credit_accumulates_balance(
    agencies_service: AgenciesService, admin: User
) -> None:
    agency = agencies_service.create_agency(admin.user_id, "Stars")

    agencies_service.record_credit(agency.id, 100)  # type: ignore[arg-type]
    updated = agencies_service.record_credit(agency.id, -30)  # type: ignore[arg-type]

    assert updated.balance == 70
    assert [h.amount for h in updated.history] == [100, -30]


def test_unknown_agency_is_not_found(
    agencies_service: AgenciesService, host: User
) -> None:
    with pytest.raises(NotFoundError):
        agencies_service.get_agency("not-an-id")
    with pytest.raises(NotFoundError):
        agencies_service.upsert_member("65f000000000000000000000", host.user_id)


def test_agency_name_is_required(
    agencies_service: AgenciesService, admin: User
) -> None:
    with pytest.raises(ValidationError):
        agencies_service.create_agency(admin.user_id, "  ")


# --- groups ----------------------------------------------------------------------


def test_create_group_registers_admin_as_moderator(
    groups_service: GroupsService,
    user_repo: FakeUserRepository,
    admin: User,
) -> None:
    group = groups_service.create_group(admin.user_id, "Night owls", "late talks")

    assert [(m.user, m.role) for m in group.members] == [(admin.id, "moderator")]
    assert user_repo.users[admin.id].groups == [group.id]  # type: ignore[index]


def test_invitation_flow(
    groups_service: GroupsService,
    user_repo: FakeUserRepository,
    admin: User,
    host: User,
) -> None:
    group = groups_service.create_group(admin.user_id, "Night owls")
    assert group.id is not None

    invited = groups_service.invite(group.id, host.user_id)
    assert [(i.user, i.status) for i in invited.invitations] == [(host.id, "pending")]

    with pytest.raises(ConflictError):
        groups_service.invite(group.id, host.user_id)

    accepted = groups_service.respond_invitation(group.id, host.user_id, "accepted")
    assert accepted.invitations[0].status == "accepted"
    assert host.id in [m.user for m in accepted.members]
    assert user_repo.users[host.id].groups == [group.id]  # type: ignore[index]

    # 이미 멤버이면 다시 초대할 수 없다.
    with pytest.raises(ConflictError):
        groups_service.invite(group.id, host.user_id)


def test_respond_without_invitation_is_not_found(
    groups_service: GroupsService, admin: User, host: User
) -> None:
    group = groups_service.create_group(admin.user_id, "Night owls")

    with pytest.raises(NotFoundError):
        groups_service.respond_invitation(group.id, host.user_id, "accepted")  # type: ignore[arg-type]


def test_invitation_status_can_move_in_any_direction(
    groups_service: GroupsService,
    user_repo: FakeUserRepository,
    admin: User,
    host: User,
) -> None:
    group = groups_service.create_group(admin.user_id, "Night owls")
    assert group.id is not None
    groups_service.invite(group.id, host.user_id)

    declined = groups_service.respond_invitation(group.id, host.user_id, "declined")
    assert declined.invitations[0].status == "declined"
    assert host.id not in [m.user for m in declined.members]

    accepted = groups_service.respond_invitation(group.id, host.user_id, "accepted")
    assert accepted.invitations[0].status == "accepted"
    assert host.id in [m.user for m in accepted.members]
    assert user_repo.users[host.id].groups == [group.id]  # type: ignore[index]

    declined_again = groups_service.respond_invitation(group.id, host.user_id, "declined")
    assert declined_again.invitations[0].status == "declined"

    pending = groups_service.respond_invitation(group.id, host.user_id, "pending")
    assert pending.invitations[0].status == "pending"


# --- store -----------------------------------------------------------------------


def test_section_names_are_unique(store_service: StoreService) -> None:
    store_service.create_section("Frames")

    with pytest.raises(ConflictError):
        store_service.create_section("Frames")


def test_add_item_to_section_keeps_order_without_duplicates(
    store_service: StoreService,
) -> None:
    store_service.create_section("Gifts")
    rose = store_service.create_item("Rose", "gift", 1, "rose.png")
    car = store_service.create_item("Car", "gift", 500, "car.png")

    store_service.add_item_to_section("Gifts", car.id)  # type: ignore[arg-type]
    store_service.add_item_to_section("Gifts", rose.id)  # type: ignore[arg-type]
    section = store_service.add_item_to_section("Gifts", car.id)  # type: ignore[arg-type]

    assert section.items == [car.id, rose.id]
    views = store_service.list_sections()
    assert [i.name for i in views[0].items] == ["Car", "Rose"]


def test_add_item_to_unknown_section_or_item(store_service: StoreService) -> None:
    item = store_service.create_item("Rose", "gift", 1, "rose.png")

    with pytest.raises(NotFoundError):
        store_service.add_item_to_section("Missing", item.id)  # type: ignore[arg-type]
    with pytest.raises(NotFoundError):
        store_service.purchase_item("1000000001", "65f000000000000000000000")
