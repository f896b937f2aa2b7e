"""
Schemas for the Relay Server

This module contains builders for the event and reply payloads that
travel over the wire between clients and the server.
"""

from .events import (
    USER_JOINED,
    USER_LEFT,
    NEW_MESSAGE,
    ROOM_CLOSED,
    create_event,
    create_user_joined_event,
    create_user_left_event,
    create_new_message_event,
    create_room_closed_event,
)
from .responses import (
    STATUS_SUCCESS,
    STATUS_ERROR,
    create_success_reply,
    create_error_reply,
    create_ack_frame,
    create_error_frame,
)

__all__ = [
    "USER_JOINED",
    "USER_LEFT",
    "NEW_MESSAGE",
    "ROOM_CLOSED",
    "create_event",
    "create_user_joined_event",
    "create_user_left_event",
    "create_new_message_event",
    "create_room_closed_event",
    "STATUS_SUCCESS",
    "STATUS_ERROR",
    "create_success_reply",
    "create_error_reply",
    "create_ack_frame",
    "create_error_frame",
]
