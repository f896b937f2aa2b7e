"""
Room Registry for the Relay Server

This module owns the in-memory state of every active room. A room lives
only as long as it has members or until its admin closes it.

All methods run to completion without awaiting, so on a single event
loop each call is atomic with respect to other connections.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional

from .errors import AlreadyMemberError, RoomNotFoundError
from .names import generate_display_name, generate_room_code

logger = logging.getLogger(__name__)


@dataclass
class Room:
    """
    Represents an active chat room.

    Attributes:
        code: Six-character room code, unique among active rooms
        admin_id: Connection ID of the room creator
        members: Dict of connection ID -> display name
        created_at: ISO 8601 timestamp when the room was created
    """

    code: str
    admin_id: str
    members: Dict[str, str] = field(default_factory=dict)
    created_at: str = ""

    def __post_init__(self):
        """Initialize the creation timestamp if not set."""
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc).isoformat()


class RoomRegistry:
    """
    Manages the set of active rooms keyed by room code.

    The registry is the only owner of Room records. Callers get copies of
    member dicts so they can notify members without holding references
    into registry state.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Initialize the room registry.

        Args:
            rng: Optional random source for codes and names (for tests)
        """
        self._rooms: Dict[str, Room] = {}
        self._rng = rng
        logger.info("RoomRegistry initialized")

    def __len__(self) -> int:
        return len(self._rooms)

    def has_room(self, code: str) -> bool:
        """Return True if a room with this code is active."""
        return code in self._rooms

    def get_room(self, code: str) -> Optional[Room]:
        """
        Get a room by its code.

        Args:
            code: The room code to look up

        Returns:
            The Room object if found, None otherwise
        """
        return self._rooms.get(code)

    def create_room(self, creator_id: str) -> Room:
        """
        Create a new room with the creator as its only member and admin.

        Args:
            creator_id: Connection ID of the creator

        Returns:
            The created Room object
        """
        code = generate_room_code(self.has_room, self._rng)
        username = generate_display_name(self._rng)
        room = Room(
            code=code,
            admin_id=creator_id,
            members={creator_id: username},
        )
        self._rooms[code] = room
        logger.info(f"Room created: {code} by {creator_id} as {username}")
        return room

    def join_room(self, code: str, conn_id: str) -> str:
        """
        Add a connection to an existing room.

        Args:
            code: Normalized room code
            conn_id: Connection ID of the joining client

        Returns:
            str: The display name generated for the new member

        Raises:
            RoomNotFoundError: If no active room has this code
            AlreadyMemberError: If the connection is already a member
        """
        room = self._rooms.get(code)
        if room is None:
            raise RoomNotFoundError()
        if conn_id in room.members:
            raise AlreadyMemberError()

        username = generate_display_name(self._rng)
        room.members[conn_id] = username
        logger.info(f"{username} joined {code}")
        return username

    def remove_member(self, code: str, conn_id: str) -> Optional[Dict[str, str]]:
        """
        Remove a connection from a room, deleting the room once empty.

        Args:
            code: The room code
            conn_id: Connection ID to remove

        Returns:
            A copy of the remaining members if the room still exists,
            None if the room was deleted or never existed
        """
        room = self._rooms.get(code)
        if room is None:
            return None

        room.members.pop(conn_id, None)
        if not room.members:
            del self._rooms[code]
            logger.info(f"Room {code} removed after last member left")
            return None
        return dict(room.members)

    def close_room(self, code: str, requester_id: str) -> bool:
        """
        Close a room on behalf of its admin.

        Args:
            code: The room code
            requester_id: Connection ID asking to close the room

        Returns:
            True if the room was deleted, False if it does not exist or
            the requester is not its admin and a current member
        """
        room = self._rooms.get(code)
        if room is None or room.admin_id != requester_id:
            return False
        if requester_id not in room.members:
            # Admin left; nobody can close the room any more
            return False
        del self._rooms[code]
        logger.info(f"Room closed: {code}")
        return True
