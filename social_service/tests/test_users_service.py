from __future__ import annotations

import pytest
from pymongo.errors import PyMongoError

from social_service.app.exceptions import (
    ConflictError,
    IdGenerationExhaustedError,
    NotFoundError,
    ValidationError,
)
from social_service.app.models.user import UserCreateInput, UserFilter, UserUpdateInput
from social_service.app.services.users_service import UsersService, parse_sort_by
from social_service.tests.fakes import (
    FakeHasher,
    FakeProfileRepository,
    FakeUserRepository,
    build_user,
)


def _signup(**overrides: str) -> UserCreateInput:
    data = {"name": "John Doe", "email": "john@example.com", "password": "Password123"}
    data.update(overrides)
    return UserCreateInput(**data)


def test_create_user_hashes_password_and_creates_profile(
    users_service: UsersService,
    user_repo: FakeUserRepository,
    profile_repo: FakeProfileRepository,
) -> None:
    user = users_service.create_user(_signup(email="  John@Example.com "))

    assert user.email == "john@example.com"
    assert user.password == "hashed::Password123"
    assert len(user.user_id) == 10
    assert user.id in user_repo.users
    assert profile_repo.find_by_user(user.id) is not None  # type: ignore[arg-type]


def test_create_user_hashes_password_as_typed(users_service: UsersService) -> None:
    user = users_service.create_user(_signup(password="  Password123  "))

    assert user.password == "hashed::  Password123  "


def test_create_user_with_taken_email_conflicts(users_service: UsersService) -> None:
    users_service.create_user(_signup())

    with pytest.raises(ConflictError):
        users_service.create_user(_signup(name="Other"))


@pytest.mark.parametrize("password", ["short1", "onlyletters", "1234567890"])
def test_create_user_rejects_weak_password(
    users_service: UsersService, password: str
) -> None:
    with pytest.raises(ValidationError):
        users_service.create_user(_signup(password=password))


def test_create_user_rejects_blank_name(users_service: UsersService) -> None:
    with pytest.raises(ValidationError):
        users_service.create_user(_signup(name="   "))


def test_user_id_collision_is_retried(
    user_repo: FakeUserRepository, profile_repo: FakeProfileRepository
) -> None:
    user_repo.reserved_user_ids.add("1234567890")
    ids = iter(["1234567890", "1357924680"])
    service = UsersService(
        user_repo,
        profile_repo,
        FakeHasher(),  # type: ignore[arg-type]
        id_generator=lambda _attempts: next(ids),
    )

    user = service.create_user(_signup())

    assert user.user_id == "1357924680"


def test_user_id_collisions_exhaust_retries(
    user_repo: FakeUserRepository, profile_repo: FakeProfileRepository
) -> None:
    user_repo.reserved_user_ids.add("1234567890")
    service = UsersService(
        user_repo,
        profile_repo,
        FakeHasher(),  # type: ignore[arg-type]
        id_generator=lambda _attempts: "1234567890",
        user_id_insert_retries=2,
    )

    with pytest.raises(IdGenerationExhaustedError):
        service.create_user(_signup())
    assert user_repo.users == {}


def test_profile_failure_rolls_back_user(
    users_service: UsersService,
    user_repo: FakeUserRepository,
    profile_repo: FakeProfileRepository,
) -> None:
    profile_repo.fail_insert = PyMongoError("profiles unavailable")

    with pytest.raises(PyMongoError):
        users_service.create_user(_signup())

    assert user_repo.users == {}
    assert len(user_repo.deleted_ids) == 1


def test_update_user_rechecks_email_and_rehashes_password(
    users_service: UsersService,
) -> None:
    john = users_service.create_user(_signup())
    users_service.create_user(_signup(name="Jane", email="jane@example.com"))

    with pytest.raises(ConflictError):
        users_service.update_user(john.user_id, UserUpdateInput(email="jane@example.com"))

    # 자기 자신의 이메일은 충돌이 아니다.
    same = users_service.update_user(john.user_id, UserUpdateInput(email="john@example.com"))
    assert same.email == "john@example.com"

    updated = users_service.update_user(
        john.user_id, UserUpdateInput(name=" Johnny ", password="NewPass456")
    )
    assert updated.name == "Johnny"
    assert updated.password == "hashed::NewPass456"


def test_delete_user_removes_user_and_profile(
    users_service: UsersService,
    user_repo: FakeUserRepository,
    profile_repo: FakeProfileRepository,
) -> None:
    user = users_service.create_user(_signup())

    users_service.delete_user(user.user_id)

    assert user_repo.users == {}
    assert profile_repo.profiles == {}
    with pytest.raises(NotFoundError):
        users_service.get_user(user.user_id)


def test_unknown_user_is_not_found(users_service: UsersService) -> None:
    with pytest.raises(NotFoundError):
        users_service.get_user("0000000000")
    with pytest.raises(NotFoundError):
        users_service.delete_user("0000000000")


def test_parse_sort_by() -> None:
    assert parse_sort_by(None) == []
    assert parse_sort_by("name:desc, created_at") == [("name", -1), ("created_at", 1)]
    with pytest.raises(ValidationError):
        parse_sort_by("password:asc")


def test_query_users_filters_sorts_and_paginates(
    users_service: UsersService, user_repo: FakeUserRepository
) -> None:
    for i, name in enumerate(["Carol", "alice", "Bob"]):
        user_repo.add(build_user(f"100000000{i}", name))
    user_repo.add(build_user("2000000001", "Admin", role="admin"))

    users, total, page, limit = users_service.query_users(
        UserFilter(role="user"), "name:desc", page=1, limit=2
    )

    assert total == 3
    assert (page, limit) == (1, 2)
    assert [u.name for u in users] == ["alice", "Carol"]


def test_query_users_normalizes_page_and_limit(users_service: UsersService) -> None:
    _, _, page, limit = users_service.query_users(UserFilter(), None, page=0, limit=500)

    assert (page, limit) == (1, 100)


def test_search_matches_exact_user_id_even_without_name_match(
    users_service: UsersService, user_repo: FakeUserRepository
) -> None:
    user_repo.add(build_user("4815162342", "Hurley"))
    user_repo.add(build_user("1000000001", "Kate"))

    users, total, _, _ = users_service.search_users("4815162342")

    assert total == 1
    assert users[0].name == "Hurley"


def test_search_is_case_insensitive_and_escapes_regex(
    users_service: UsersService, user_repo: FakeUserRepository
) -> None:
    user_repo.add(build_user("1000000001", "John Doe"))
    user_repo.add(build_user("1000000002", "Johnny"))
    user_repo.add(build_user("1000000003", "Jane"))

    assert [u.name for u in users_service.search_users_list("JOHN")] == [
        "John Doe",
        "Johnny",
    ]
    assert users_service.search_users_list("J.*") == []


def test_blank_search_is_rejected(users_service: UsersService) -> None:
    with pytest.raises(ValidationError):
        users_service.search_users("   ")
