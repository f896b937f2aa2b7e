"""
End-to-end test: real WebSocket server on an ephemeral port, driven by
RelayClient instances.
"""

import asyncio

import pytest

from relay import RoomRegistry, SessionRegistry, WebSocketServer
from relay_client import RelayClient


async def _wait_until(predicate, timeout=2.0):
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.01)


@pytest.mark.asyncio
async def test_room_lifecycle_over_websockets():
    server = WebSocketServer(RoomRegistry(), SessionRegistry(), "127.0.0.1", 0)
    await server.start()
    url = f"ws://127.0.0.1:{server.bound_port}"

    alice, bob, carol = RelayClient(url), RelayClient(url), RelayClient(url)
    joined, alice_messages, bob_messages, closed = [], [], [], []
    alice.set_on_user_joined(joined.append)
    alice.set_on_new_message(alice_messages.append)
    bob.set_on_new_message(bob_messages.append)
    alice.set_on_room_closed(lambda: closed.append("alice"))
    bob.set_on_room_closed(lambda: closed.append("bob"))

    try:
        for client in (alice, bob, carol):
            await client.connect()

        created = await alice.create_room()
        assert created.ok
        code = created.room_code

        reply = await bob.join_room(code.lower())
        assert reply.ok
        assert reply.room_code == code
        await _wait_until(lambda: joined == [reply.username])

        await bob.send_message("hello")
        await _wait_until(lambda: alice_messages and bob_messages)
        assert alice_messages[0].message == "hello"
        assert alice_messages[0].username == reply.username
        assert bob_messages[0].is_admin is False

        await alice.close_room()
        await _wait_until(lambda: sorted(closed) == ["alice", "bob"])

        missing = await carol.join_room(code)
        assert not missing.ok
        assert missing.error_code == "ROOM_NOT_FOUND"
        assert len(server.coordinator.rooms) == 0
    finally:
        for client in (alice, bob, carol):
            await client.disconnect()
        await server.stop()


@pytest.mark.asyncio
async def test_disconnect_notifies_remaining_member():
    server = WebSocketServer(RoomRegistry(), SessionRegistry(), "127.0.0.1", 0)
    await server.start()
    url = f"ws://127.0.0.1:{server.bound_port}"

    alice, bob = RelayClient(url), RelayClient(url)
    left = []
    alice.set_on_user_left(left.append)

    try:
        await alice.connect()
        await bob.connect()
        created = await alice.create_room()
        joined = await bob.join_room(created.room_code)

        await bob.disconnect()

        await _wait_until(lambda: left == [joined.username])
        room = server.coordinator.rooms.get_room(created.room_code)
        assert len(room.members) == 1
        assert len(server.coordinator.sessions) == 1
    finally:
        await alice.disconnect()
        await bob.disconnect()
        await server.stop()
