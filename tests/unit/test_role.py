"""Unit tests for the Role value object."""

import pytest

from dynaschema.domain.exceptions import InvalidValue
from dynaschema.domain.value_objects import Role, RoleKind


def test_team_with_dimension_serializes() -> None:
    assert str(Role.team("t1", "editor")) == "team:t1:editor"


@pytest.mark.parametrize(
    "role",
    [
        Role.any(),
        Role.guests(),
        Role.users(),
        Role.users("verified"),
        Role.user("u1"),
        Role.user("u1", "unverified"),
        Role.team("t1"),
        Role.team("t1", "owner"),
        Role.member("m1"),
        Role.label("vip"),
    ],
)
def test_parse_round_trips(role: Role) -> None:
    assert Role.parse(str(role)) == role


def test_parse_splits_identifier_and_dimension() -> None:
    role = Role.parse("user:u1:verified")
    assert role.kind is RoleKind.USER
    assert role.identifier == "u1"
    assert role.dimension == "verified"


def test_users_dimension_keeps_empty_identifier_slot() -> None:
    assert str(Role.users("verified")) == "users::verified"
    assert Role.parse("users::verified") == Role.users("verified")


def test_parse_unknown_kind_raises_invalid_value() -> None:
    with pytest.raises(InvalidValue) as exc_info:
        Role.parse("robot:r1")
    assert exc_info.value.code == "role_invalid"
