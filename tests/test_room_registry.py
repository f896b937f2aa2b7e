"""
Tests for the RoomRegistry.
"""

import pytest

from relay.errors import AlreadyMemberError, RoomNotFoundError
from relay.names import ROOM_CODE_CHARS, ROOM_CODE_LENGTH
from relay.room_registry import RoomRegistry


# ----------------------------------------------------------------------------
# Setup
# ----------------------------------------------------------------------------

@pytest.fixture
def registry():
    return RoomRegistry()


@pytest.fixture
def room(registry):
    return registry.create_room("conn-admin")


# ----------------------------------------------------------------------------
# create_room()
# ----------------------------------------------------------------------------

def test_create_room_registers_creator_as_admin_and_member(registry, room):
    assert room.admin_id == "conn-admin"
    assert list(room.members) == ["conn-admin"]
    assert room.created_at
    assert registry.get_room(room.code) is room
    assert registry.has_room(room.code)


def test_create_room_code_format(room):
    assert len(room.code) == ROOM_CODE_LENGTH
    assert all(ch in ROOM_CODE_CHARS for ch in room.code)


def test_active_room_codes_are_unique(registry):
    codes = [registry.create_room(f"conn-{i}").code for i in range(300)]
    assert len(set(codes)) == len(codes)
    assert len(registry) == 300


# ----------------------------------------------------------------------------
# join_room()
# ----------------------------------------------------------------------------

def test_join_room_adds_member(registry, room):
    username = registry.join_room(room.code, "conn-b")
    assert room.members["conn-b"] == username
    assert len(room.members) == 2


def test_join_room_missing_code_raises_not_found(registry):
    with pytest.raises(RoomNotFoundError):
        registry.join_room("ZZZZZZ", "conn-b")


def test_join_room_twice_raises_already_member(registry, room):
    registry.join_room(room.code, "conn-b")
    with pytest.raises(AlreadyMemberError):
        registry.join_room(room.code, "conn-b")


def test_creator_cannot_join_own_room(registry, room):
    with pytest.raises(AlreadyMemberError):
        registry.join_room(room.code, "conn-admin")


# ----------------------------------------------------------------------------
# remove_member()
# ----------------------------------------------------------------------------

def test_remove_member_returns_remaining_members(registry, room):
    registry.join_room(room.code, "conn-b")
    remaining = registry.remove_member(room.code, "conn-b")
    assert remaining == {"conn-admin": room.members["conn-admin"]}
    assert registry.has_room(room.code)


def test_remove_last_member_deletes_room(registry, room):
    assert registry.remove_member(room.code, "conn-admin") is None
    assert not registry.has_room(room.code)
    assert len(registry) == 0


def test_remove_member_unknown_room_returns_none(registry):
    assert registry.remove_member("NOPE00", "conn-x") is None


def test_remove_member_returns_copy(registry, room):
    registry.join_room(room.code, "conn-b")
    remaining = registry.remove_member(room.code, "conn-b")
    remaining.clear()
    assert "conn-admin" in registry.get_room(room.code).members


# ----------------------------------------------------------------------------
# close_room()
# ----------------------------------------------------------------------------

def test_close_room_by_admin(registry, room):
    assert registry.close_room(room.code, "conn-admin") is True
    assert not registry.has_room(room.code)


def test_close_room_by_non_admin_is_noop(registry, room):
    registry.join_room(room.code, "conn-b")
    assert registry.close_room(room.code, "conn-b") is False
    assert registry.has_room(room.code)


def test_close_unknown_room_returns_false(registry):
    assert registry.close_room("NOPE00", "conn-admin") is False


def test_close_room_after_admin_left_returns_false(registry, room):
    registry.join_room(room.code, "conn-b")
    registry.remove_member(room.code, "conn-admin")
    assert registry.close_room(room.code, "conn-admin") is False
    assert registry.has_room(room.code)
