"""
Relay Server Package

This package provides the server side of the room relay: room and
session registries, the connection coordinator and the WebSocket
transport.
"""

from .errors import (
    RelayError,
    InvalidFormatError,
    RoomNotFoundError,
    AlreadyMemberError,
    UnauthorizedError,
    InternalError,
)
from .names import (
    ROOM_CODE_LENGTH,
    ROOM_CODE_CHARS,
    USERNAME_PARTS,
    generate_room_code,
    generate_display_name,
)
from .room_registry import Room, RoomRegistry
from .session_registry import Session, SessionRegistry
from .transport import Transport
from .coordinator import Coordinator
from .websocket_server import WebSocketServer

__all__ = [
    "RelayError",
    "InvalidFormatError",
    "RoomNotFoundError",
    "AlreadyMemberError",
    "UnauthorizedError",
    "InternalError",
    "ROOM_CODE_LENGTH",
    "ROOM_CODE_CHARS",
    "USERNAME_PARTS",
    "generate_room_code",
    "generate_display_name",
    "Room",
    "RoomRegistry",
    "Session",
    "SessionRegistry",
    "Transport",
    "Coordinator",
    "WebSocketServer",
]
