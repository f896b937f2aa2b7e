"""
Session Registry for the Relay Server

Tracks which room each live connection belongs to, under which display
name, and whether it is that room's admin.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """
    Per-connection membership record.

    Attributes:
        conn_id: The connection this session belongs to
        room_code: Code of the room the connection is in
        display_name: Generated display name within that room
        is_admin: True only for the creator of the room
    """

    conn_id: str
    room_code: str
    display_name: str
    is_admin: bool = False


class SessionRegistry:
    """Owns Session records, one per connection at most."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def open_session(
        self, conn_id: str, room_code: str, display_name: str, is_admin: bool
    ) -> Session:
        """Create or overwrite the session for a connection."""
        session = Session(
            conn_id=conn_id,
            room_code=room_code,
            display_name=display_name,
            is_admin=is_admin,
        )
        self._sessions[conn_id] = session
        logger.debug(f"Session opened for {conn_id} in {room_code}")
        return session

    def get_session(self, conn_id: str) -> Optional[Session]:
        return self._sessions.get(conn_id)

    def close_session(self, conn_id: str) -> Optional[Session]:
        """
        Remove the session for a connection.

        Returns:
            The removed session, or None if there was none
        """
        session = self._sessions.pop(conn_id, None)
        if session:
            logger.debug(f"Session closed for {conn_id}")
        return session

    def close_room_sessions(self, room_code: str) -> List[str]:
        """
        Remove every session that points at a room.

        Returns:
            Connection IDs whose sessions were removed
        """
        conn_ids = [
            conn_id
            for conn_id, session in self._sessions.items()
            if session.room_code == room_code
        ]
        for conn_id in conn_ids:
            del self._sessions[conn_id]
        return conn_ids
