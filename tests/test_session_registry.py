"""
Tests for the SessionRegistry.
"""

import pytest

from relay.session_registry import Session, SessionRegistry


@pytest.fixture
def sessions():
    return SessionRegistry()


def test_open_and_get_session(sessions):
    sessions.open_session("conn-a", "ABC123", "Red-Lion-Apple", is_admin=True)

    session = sessions.get_session("conn-a")
    assert session == Session("conn-a", "ABC123", "Red-Lion-Apple", True)
    assert sessions.get_session("conn-b") is None


def test_open_session_overwrites(sessions):
    sessions.open_session("conn-a", "ABC123", "Red-Lion-Apple", is_admin=True)
    sessions.open_session("conn-a", "XYZ789", "Blue-Bear-Grape", is_admin=False)

    session = sessions.get_session("conn-a")
    assert session.room_code == "XYZ789"
    assert session.is_admin is False
    assert len(sessions) == 1


def test_get_missing_session_returns_none(sessions):
    assert sessions.get_session("ghost") is None


def test_close_session_is_idempotent(sessions):
    sessions.open_session("conn-a", "ABC123", "Red-Lion-Apple", is_admin=False)

    removed = sessions.close_session("conn-a")
    assert removed.conn_id == "conn-a"
    assert sessions.close_session("conn-a") is None
    assert len(sessions) == 0


def test_close_room_sessions(sessions):
    sessions.open_session("a", "ROOM01", "Red-Lion-Apple", is_admin=True)
    sessions.open_session("b", "ROOM01", "Blue-Bear-Grape", is_admin=False)
    sessions.open_session("c", "ROOM02", "Green-Wolf-Mango", is_admin=True)

    removed = sessions.close_room_sessions("ROOM01")

    assert sorted(removed) == ["a", "b"]
    assert sessions.get_session("a") is None
    assert sessions.get_session("c") is not None
