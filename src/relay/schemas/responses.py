"""
Response Schema Definitions

Contains functions for creating reply payloads for request/reply events
(create-room, join-room) and the ack/error frames that carry them.
"""

from typing import Any, Dict, Optional

from ..errors import RelayError

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"


def create_success_reply(room_code: str, username: str) -> Dict[str, Any]:
    """
    Create a success reply for create-room or join-room.

    Args:
        room_code: The room code the connection is now in
        username: The display name generated for the connection

    Returns:
        dict: Reply payload
    """
    return {
        "status": STATUS_SUCCESS,
        "roomCode": room_code,
        "username": username,
    }


def create_error_reply(
    error: RelayError,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create an error reply from a RelayError.

    Args:
        error: The error being reported
        message: Optional override for the error's message

    Returns:
        dict: Reply payload
    """
    return {
        "status": STATUS_ERROR,
        "message": message or error.message,
        "errorCode": error.error_code,
    }


def create_ack_frame(ack_id: Any, reply: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap a reply payload in an ack frame matched by ``ack_id``."""
    return {"type": "ack", "ack": ack_id, "data": reply}


def create_error_frame(error_message: str) -> Dict[str, Any]:
    """Create a frame reporting a malformed or unknown client frame."""
    return {"type": "error", "data": {"message": error_message}}
