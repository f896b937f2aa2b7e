"""
Event Schema Definitions

Contains functions for creating server -> client event frames:
user-joined, user-left, new-message and room-closed.
"""

from typing import Any, Dict

USER_JOINED = "user-joined"
USER_LEFT = "user-left"
NEW_MESSAGE = "new-message"
ROOM_CLOSED = "room-closed"


def create_event(event_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Wrap event data in a wire frame.

    Args:
        event_type: Name of the event
        data: Event payload

    Returns:
        dict: Event frame
    """
    return {"type": event_type, "data": data}


def create_user_joined_event(username: str) -> Dict[str, Any]:
    """Create a user-joined event for the other members of a room."""
    return create_event(USER_JOINED, {"username": username})


def create_user_left_event(username: str) -> Dict[str, Any]:
    """Create a user-left event for the remaining members of a room."""
    return create_event(USER_LEFT, {"username": username})


def create_new_message_event(
    username: str,
    message: str,
    is_admin: bool,
    timestamp: int,
) -> Dict[str, Any]:
    """
    Create a new-message event.

    Args:
        username: Display name of the sender
        message: Trimmed message text
        is_admin: Whether the sender is the room admin
        timestamp: Milliseconds since the Unix epoch

    Returns:
        dict: Event frame
    """
    return create_event(
        NEW_MESSAGE,
        {
            "username": username,
            "message": message,
            "isAdmin": is_admin,
            "timestamp": timestamp,
        },
    )


def create_room_closed_event() -> Dict[str, Any]:
    """Create a room-closed event."""
    return create_event(ROOM_CLOSED, {})
