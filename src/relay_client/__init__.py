"""
Relay Client Package

This package provides a headless client for the room relay: the
RelayClient connection wrapper and the protocol message definitions.
"""

from .client import RelayClient, JOIN_TIMEOUT
from .protocol import (
    CreateRoomRequest,
    JoinRoomRequest,
    SendMessageRequest,
    CloseRoomRequest,
    LeaveRoomRequest,
    RoomReply,
    NewMessageNotification,
    SERVER_TIMEOUT_MESSAGE,
)

__all__ = [
    "RelayClient",
    "JOIN_TIMEOUT",
    "CreateRoomRequest",
    "JoinRoomRequest",
    "SendMessageRequest",
    "CloseRoomRequest",
    "LeaveRoomRequest",
    "RoomReply",
    "NewMessageNotification",
    "SERVER_TIMEOUT_MESSAGE",
]
