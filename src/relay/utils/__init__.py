"""
Utilities for the Relay Server

This module contains utility functions for common operations
like broadcasting and validation.
"""

from .broadcast import send_json, broadcast_json
from .validation import (
    MAX_MESSAGE_LENGTH,
    normalize_room_code,
    validate_message_content,
)

__all__ = [
    "send_json",
    "broadcast_json",
    "MAX_MESSAGE_LENGTH",
    "normalize_room_code",
    "validate_message_content",
]
