"""
Validation Utilities

Contains utility functions for normalizing room codes and validating
message content.
"""

import re
from typing import Any, Optional, Tuple

from ..errors import InvalidFormatError
from ..names import ROOM_CODE_LENGTH

# Message validation constants
MAX_MESSAGE_LENGTH = 5000

_NON_CODE_CHARS = re.compile(r"[^A-Z0-9]")


def normalize_room_code(raw_code: Any) -> str:
    """
    Normalize user input into a room code.

    Uppercases the input and strips every character outside A-Z0-9.

    Args:
        raw_code: Room code as typed by the user

    Returns:
        str: The normalized room code

    Raises:
        InvalidFormatError: If the input is not a string or does not
            normalize to exactly ROOM_CODE_LENGTH characters
    """
    if not isinstance(raw_code, str):
        raise InvalidFormatError()
    code = _NON_CODE_CHARS.sub("", raw_code.upper())
    if len(code) != ROOM_CODE_LENGTH:
        raise InvalidFormatError()
    return code


def validate_message_content(content: Any) -> Tuple[bool, Optional[str]]:
    """
    Validate message content after trimming.

    Args:
        content: The trimmed message content to validate

    Returns:
        tuple: (is_valid, error_message)
            - is_valid: True if content is valid, False otherwise
            - error_message: Error message if invalid, None if valid
    """
    if not isinstance(content, str):
        return False, "Message content must be a string"

    if not content:
        return False, "Message content cannot be empty"

    if len(content) > MAX_MESSAGE_LENGTH:
        return (
            False,
            f"Message content too long (max {MAX_MESSAGE_LENGTH} characters)",
        )

    return True, None
