"""
Error Types for the Relay Server

Each error carries a machine-readable error code and a message that is
safe to show to the client in a reply payload.
"""


class RelayError(Exception):
    """Base class for errors surfaced through reply payloads."""

    error_code = "ERROR"
    default_message = "Request failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidFormatError(RelayError):
    """Room code is malformed after normalization."""

    error_code = "INVALID_FORMAT"
    default_message = "Invalid room code format"


class RoomNotFoundError(RelayError):
    """No active room has the requested code."""

    error_code = "ROOM_NOT_FOUND"
    default_message = "Room not found. Check the code and try again."


class AlreadyMemberError(RelayError):
    """The connection is already a member of a room."""

    error_code = "ALREADY_MEMBER"
    default_message = "You're already in this room!"


class UnauthorizedError(RelayError):
    """The requester is not the admin of the room."""

    error_code = "UNAUTHORIZED"
    default_message = "Only the room admin can do that"


class InternalError(RelayError):
    """Unexpected fault inside a handler."""

    error_code = "INTERNAL"
    default_message = "Internal server error"
