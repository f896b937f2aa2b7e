"""
Relay Client

This module provides a headless asyncio client for the room relay. It
sends requests over one WebSocket connection, matches replies to
requests by ack ID, and dispatches server events to registered callbacks.

The join timeout lives here rather than on the server: if the server
does not answer a join request in time, the attempt resolves to a
"Server timeout" error reply.

Usage:
    client = RelayClient("ws://localhost:3000")
    await client.connect()
    reply = await client.join_room("x7k2qp")
    await client.send_message("hello")
"""

import asyncio
import itertools
import json
import logging
from typing import Any, Callable, Dict, Optional

import websockets
from websockets.asyncio.client import connect

from .protocol import (
    CloseRoomRequest,
    CreateRoomRequest,
    JoinRoomRequest,
    LeaveRoomRequest,
    NewMessageNotification,
    RoomReply,
    SendMessageRequest,
)

logger = logging.getLogger(__name__)

# Seconds to wait for a join-room reply before giving up
JOIN_TIMEOUT = 5.0


class RelayClient:
    """
    Client for a relay server.

    Attributes:
        server_url: WebSocket URL of the relay server
        websocket: Active WebSocket connection (None if not connected)
        room_code: Code of the room currently joined, if any
        username: Display name in the current room, if any
        is_admin: Whether this client created the current room
        join_timeout: Seconds to wait for a join-room reply
    """

    def __init__(
        self,
        server_url: str,
        websocket_factory: Optional[Callable] = None,
        join_timeout: float = JOIN_TIMEOUT,
    ):
        """
        Initialize the relay client.

        Args:
            server_url: WebSocket URL of the relay server
            websocket_factory: Optional factory for creating WebSocket
                             connections (for dependency injection/testing)
            join_timeout: Seconds to wait for a join-room reply
        """
        self.server_url = server_url
        self.websocket = None
        self._websocket_factory = websocket_factory or connect
        self.join_timeout = join_timeout

        self.room_code: Optional[str] = None
        self.username: Optional[str] = None
        self.is_admin = False

        self._ack_ids = itertools.count(1)
        self._pending: Dict[int, asyncio.Future] = {}
        self._receiver: Optional[asyncio.Task] = None

        # Callbacks for UI integration
        self._on_new_message: Optional[
            Callable[[NewMessageNotification], None]
        ] = None
        self._on_user_joined: Optional[Callable[[str], None]] = None
        self._on_user_left: Optional[Callable[[str], None]] = None
        self._on_room_closed: Optional[Callable[[], None]] = None

        logger.info("RelayClient initialized for server: %s", server_url)

    @property
    def is_connected(self) -> bool:
        """Check if currently connected to the server."""
        return self.websocket is not None

    @property
    def in_room(self) -> bool:
        return self.room_code is not None

    async def connect(self) -> None:
        """
        Connect to the server and start the receive loop.

        Raises:
            ConnectionError: If connection fails
        """
        try:
            logger.info("Connecting to %s...", self.server_url)
            self.websocket = await self._websocket_factory(self.server_url)
        except Exception as e:
            logger.error("Failed to connect to server: %s", e)
            raise ConnectionError(f"Could not connect to {self.server_url}: {e}")

        self._receiver = asyncio.create_task(self.receive_messages())
        logger.info("Successfully connected to relay server")

    async def disconnect(self) -> None:
        """Close the connection; the server treats this as a disconnect."""
        if self.websocket is not None:
            await self.websocket.close()
        if self._receiver is not None:
            try:
                await self._receiver
            except asyncio.CancelledError:
                pass
            self._receiver = None
        self.websocket = None
        self._reset_room()
        logger.info("Disconnected from relay server")

    def set_on_new_message(
        self, callback: Callable[[NewMessageNotification], None]
    ) -> None:
        """Register callback for chat messages, including our own."""
        self._on_new_message = callback

    def set_on_user_joined(self, callback: Callable[[str], None]) -> None:
        """Register callback receiving the username of a new member."""
        self._on_user_joined = callback

    def set_on_user_left(self, callback: Callable[[str], None]) -> None:
        """Register callback receiving the username of a departed member."""
        self._on_user_left = callback

    def set_on_room_closed(self, callback: Callable[[], None]) -> None:
        """Register callback for when the admin closes the room."""
        self._on_room_closed = callback

    async def create_room(self, timeout: Optional[float] = None) -> RoomReply:
        """
        Create a room and become its admin.

        Args:
            timeout: Optional seconds to wait for the reply

        Returns:
            RoomReply with the room code and generated username on success

        Raises:
            ConnectionError: If not connected to the server
        """
        reply = await self._request(
            CreateRoomRequest(ack=next(self._ack_ids)), timeout
        )
        if reply.ok:
            self._enter_room(reply, is_admin=True)
        else:
            logger.error("Failed to create room: %s", reply.message)
        return reply

    async def join_room(self, room_code: str) -> RoomReply:
        """
        Join an existing room.

        Resolves to a "Server timeout" error reply if the server does not
        answer within ``join_timeout`` seconds.

        Args:
            room_code: Room code as typed by the user

        Returns:
            RoomReply with the normalized room code and username on success

        Raises:
            ConnectionError: If not connected to the server
        """
        request = JoinRoomRequest(room_code, ack=next(self._ack_ids))
        reply = await self._request(request, self.join_timeout)
        if reply.ok:
            self._enter_room(reply, is_admin=False)
        else:
            logger.warning("Failed to join room: %s", reply.message)
        return reply

    async def send_message(self, message: str) -> None:
        """
        Send a chat message to the current room.

        This is fire-and-forget; the message comes back through the
        new-message callback like everyone else's. Blank messages are not
        sent.
        """
        self._ensure_connected()
        message = message.strip()
        if message:
            await self.websocket.send(SendMessageRequest(message).to_json())

    async def close_room(self) -> None:
        """Ask the server to close the current room (admin only)."""
        self._ensure_connected()
        if self.room_code:
            await self.websocket.send(CloseRoomRequest(self.room_code).to_json())
            self._reset_room()

    async def leave_room(self) -> None:
        """Leave the current room but keep the connection open."""
        self._ensure_connected()
        if self.room_code:
            await self.websocket.send(LeaveRoomRequest().to_json())
            self._reset_room()

    async def receive_messages(self) -> None:
        """
        Receive frames until the connection closes.

        Ack frames resolve pending requests; all other frames go to
        ``handle_event``.
        """
        try:
            async for raw in self.websocket:
                try:
                    frame = json.loads(raw)
                except json.JSONDecodeError:
                    logger.warning("Ignoring non-JSON frame from server")
                    continue
                if not isinstance(frame, dict):
                    logger.warning("Ignoring non-object frame from server")
                    continue
                if frame.get("type") == "ack":
                    self._resolve(frame)
                else:
                    try:
                        self.handle_event(frame)
                    except Exception:
                        logger.exception(
                            "Error handling %s event", frame.get("type")
                        )
        except websockets.exceptions.ConnectionClosed:
            logger.warning("Connection closed by server")
        finally:
            for future in self._pending.values():
                if not future.done():
                    future.set_result(
                        {"status": "error", "message": "Disconnected from server"}
                    )

    def handle_event(self, frame: Dict[str, Any]) -> None:
        """
        Dispatch a server event to the registered callback.

        Args:
            frame: Decoded event frame
        """
        event_type = frame.get("type")
        data = frame.get("data") or {}

        if event_type == "new-message":
            if self._on_new_message:
                self._on_new_message(NewMessageNotification.from_dict(data))
        elif event_type == "user-joined":
            if self._on_user_joined:
                self._on_user_joined(data.get("username"))
        elif event_type == "user-left":
            if self._on_user_left:
                self._on_user_left(data.get("username"))
        elif event_type == "room-closed":
            self._reset_room()
            if self._on_room_closed:
                self._on_room_closed()
        elif event_type == "error":
            logger.warning("Server rejected frame: %s", data.get("message"))
        else:
            logger.debug("Ignoring unknown event type: %s", event_type)

    def _ensure_connected(self) -> None:
        if not self.is_connected:
            raise ConnectionError("Not connected to a relay server")

    async def _request(self, request, timeout: Optional[float]) -> RoomReply:
        self._ensure_connected()
        future = asyncio.get_running_loop().create_future()
        self._pending[request.ack] = future
        try:
            await self.websocket.send(request.to_json())
            payload = await asyncio.wait_for(future, timeout)
        except asyncio.TimeoutError:
            logger.error("Timed out waiting for %s reply", request.to_dict()["type"])
            return RoomReply.timeout()
        finally:
            self._pending.pop(request.ack, None)
        return RoomReply.from_dict(payload)

    def _resolve(self, frame: Dict[str, Any]) -> None:
        future = self._pending.get(frame.get("ack"))
        if future is None or future.done():
            # Late reply after a timeout
            logger.debug("Dropping unmatched ack %s", frame.get("ack"))
            return
        future.set_result(frame.get("data") or {})

    def _enter_room(self, reply: RoomReply, is_admin: bool) -> None:
        self.room_code = reply.room_code
        self.username = reply.username
        self.is_admin = is_admin
        logger.info("In room %s as %s", self.room_code, self.username)

    def _reset_room(self) -> None:
        self.room_code = None
        self.username = None
        self.is_admin = False
