"""
Protocol Messages for Client-Server Communication

This module defines the message structures for WebSocket communication
between the client and the relay server.

Message Format:
    All frames are JSON objects with the following structure:
    {
        "type": "event-name",
        "data": { ... event-specific data ... },
        "ack": 7            # only on requests that expect a reply
    }
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

SERVER_TIMEOUT_MESSAGE = "Server timeout"


@dataclass
class CreateRoomRequest:
    """Request to create a new room; the server picks code and name."""

    ack: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"type": "create-room", "data": {}, "ack": self.ack}

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())


@dataclass
class JoinRoomRequest:
    """
    Request to join an existing room.

    Attributes:
        room_code: Room code as typed; the server normalizes it
        ack: Reply correlation ID
    """

    room_code: str
    ack: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": "join-room",
            "data": {"roomCode": self.room_code},
            "ack": self.ack,
        }

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())


@dataclass
class SendMessageRequest:
    """Fire-and-forget chat message to the current room."""

    message: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"type": "send-message", "data": {"message": self.message}}

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())


@dataclass
class CloseRoomRequest:
    """Fire-and-forget request by the admin to close a room."""

    room_code: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"type": "close-room", "data": {"roomCode": self.room_code}}

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())


@dataclass
class LeaveRoomRequest:
    """Fire-and-forget request to leave the current room."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"type": "leave-room", "data": {}}

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())


@dataclass
class RoomReply:
    """
    Reply to create-room or join-room.

    Attributes:
        status: "success" or "error"
        room_code: Code of the joined room (success only)
        username: Generated display name (success only)
        message: Error message (error only)
        error_code: Machine-readable error code (error only)
    """

    status: str
    room_code: Optional[str] = None
    username: Optional[str] = None
    message: Optional[str] = None
    error_code: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoomReply":
        """Create from a reply payload or a full ack frame."""
        payload = data.get("data", data) if data.get("type") == "ack" else data
        return cls(
            status=payload.get("status", "error"),
            room_code=payload.get("roomCode"),
            username=payload.get("username"),
            message=payload.get("message"),
            error_code=payload.get("errorCode"),
        )

    @classmethod
    def timeout(cls) -> "RoomReply":
        """Reply used when the server did not answer in time."""
        return cls(status="error", message=SERVER_TIMEOUT_MESSAGE)


@dataclass
class NewMessageNotification:
    """
    Chat message broadcast by the server.

    Attributes:
        username: Display name of the sender
        message: Message text
        is_admin: Whether the sender is the room admin
        timestamp: Milliseconds since the Unix epoch
    """

    username: str
    message: str
    is_admin: bool
    timestamp: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NewMessageNotification":
        """Create from dictionary."""
        payload = data.get("data", data)
        return cls(
            username=payload["username"],
            message=payload["message"],
            is_admin=payload.get("isAdmin", False),
            timestamp=payload.get("timestamp", 0),
        )
