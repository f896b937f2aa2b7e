"""
WebSocket Server for the Relay

Accepts WebSocket connections, decodes client frames and hands them to
the coordinator. It is also the coordinator's transport: it knows which
socket belongs to which connection ID and fans frames out to groups.
"""

import json
import logging
import uuid
from typing import Any, Dict, Iterable, Optional

import websockets
from websockets.asyncio.server import ServerConnection, serve

from .coordinator import Coordinator
from .room_registry import RoomRegistry
from .schemas import create_ack_frame, create_error_frame
from .session_registry import SessionRegistry
from .transport import Transport
from .utils import broadcast_json, send_json

logger = logging.getLogger(__name__)

CREATE_ROOM = "create-room"
JOIN_ROOM = "join-room"
SEND_MESSAGE = "send-message"
CLOSE_ROOM = "close-room"
LEAVE_ROOM = "leave-room"


class WebSocketServer(Transport):
    """
    WebSocket server for handling client connections.

    Every connection gets a fresh connection ID. Frames are processed one
    at a time per connection; the coordinator keeps registry updates
    atomic across connections.
    """

    def __init__(
        self,
        rooms: RoomRegistry,
        sessions: SessionRegistry,
        host: str,
        port: int,
    ):
        """
        Initialize the WebSocket server.

        Args:
            rooms: The room registry instance
            sessions: The session registry instance
            host: Host address to bind to
            port: Port to listen on (0 picks a free port)
        """
        super().__init__()
        self.host = host
        self.port = port
        self.coordinator = Coordinator(rooms, sessions, self)
        self.server = None
        # Maps connection ID -> WebSocket connection
        self._connections: Dict[str, ServerConnection] = {}

    async def start(self):
        """Start the WebSocket server."""
        self.server = await serve(self.handle_client, self.host, self.port)
        logger.info(f"WebSocket server started on ws://{self.host}:{self.bound_port}")

    async def stop(self):
        """Stop the WebSocket server."""
        if self.server:
            self.server.close()
            await self.server.wait_closed()
            logger.info("WebSocket server stopped")

    @property
    def bound_port(self) -> int:
        """The port actually listened on, useful when started with port 0."""
        if self.server and self.server.sockets:
            return next(iter(self.server.sockets)).getsockname()[1]
        return self.port

    async def deliver(self, conn_id: str, message: Dict[str, Any]) -> None:
        websocket = self._connections.get(conn_id)
        if websocket is not None:
            await send_json(websocket, message)

    async def deliver_many(
        self, conn_ids: Iterable[str], message: Dict[str, Any]
    ) -> None:
        targets = [
            self._connections[conn_id]
            for conn_id in conn_ids
            if conn_id in self._connections
        ]
        if targets:
            await broadcast_json(targets, message)

    async def handle_client(self, websocket: ServerConnection):
        """
        Handle a client connection until it closes.

        Args:
            websocket: The WebSocket connection
        """
        conn_id = str(uuid.uuid4())
        self._connections[conn_id] = websocket
        logger.info(f"Client connected: {conn_id}")

        try:
            async for message in websocket:
                await self.process_message(conn_id, message)
        except websockets.exceptions.ConnectionClosed:
            logger.debug(f"Connection {conn_id} closed abnormally")
        except Exception:
            logger.exception(f"Error handling client {conn_id}")
        finally:
            await self.coordinator.disconnect(conn_id)
            self._connections.pop(conn_id, None)
            logger.info(f"Client disconnected: {conn_id}")

    async def process_message(self, conn_id: str, message):
        """
        Process an incoming frame from a client.

        Args:
            conn_id: The connection the frame arrived on
            message: The frame (JSON text)
        """
        try:
            frame = json.loads(message)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Invalid JSON received from {conn_id}: {e}")
            await self.send(conn_id, create_error_frame("Invalid JSON format"))
            return

        if not isinstance(frame, dict):
            await self.send(conn_id, create_error_frame("Frame must be a JSON object"))
            return

        event_type = frame.get("type")
        data = frame.get("data")
        if not isinstance(data, dict):
            data = {}
        ack_id = frame.get("ack")

        try:
            reply = await self._dispatch(conn_id, event_type, data)
        except Exception:
            logger.exception(f"Error processing {event_type} from {conn_id}")
            return

        if reply is not None and ack_id is not None:
            await self.send(conn_id, create_ack_frame(ack_id, reply))

    async def _dispatch(
        self, conn_id: str, event_type: Any, data: dict
    ) -> Optional[Dict[str, Any]]:
        if event_type == CREATE_ROOM:
            return await self.coordinator.create_room(conn_id)
        elif event_type == JOIN_ROOM:
            return await self.coordinator.join_room(conn_id, data.get("roomCode"))
        elif event_type == SEND_MESSAGE:
            await self.coordinator.send_message(conn_id, data.get("message"))
        elif event_type == CLOSE_ROOM:
            await self.coordinator.close_room(conn_id, data.get("roomCode"))
        elif event_type == LEAVE_ROOM:
            await self.coordinator.leave_room(conn_id)
        else:
            logger.warning(f"Unknown message type: {event_type}")
            await self.send(
                conn_id, create_error_frame(f"Unknown message type: {event_type}")
            )
        return None
