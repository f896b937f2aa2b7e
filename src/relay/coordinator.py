"""
Connection Coordinator for the Relay Server

Handles every client event (create-room, join-room, send-message,
close-room, leave-room and disconnect). The coordinator holds no state of
its own: it reads and writes the room and session registries and tells
the transport who should receive which event.

Each handler finishes all registry mutation before its first await, so
check-then-act sequences cannot interleave with other connections on the
same event loop.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .errors import (
    AlreadyMemberError,
    InternalError,
    RelayError,
    RoomNotFoundError,
    UnauthorizedError,
)
from .room_registry import RoomRegistry
from .schemas import (
    create_error_reply,
    create_new_message_event,
    create_room_closed_event,
    create_success_reply,
    create_user_joined_event,
    create_user_left_event,
)
from .session_registry import Session, SessionRegistry
from .transport import Transport
from .utils import normalize_room_code, validate_message_content

logger = logging.getLogger(__name__)


def _timestamp_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


class Coordinator:
    """
    Event-driven core of the relay.

    Request/reply handlers return the reply payload; fire-and-forget
    handlers return nothing and never raise.
    """

    def __init__(
        self,
        rooms: RoomRegistry,
        sessions: SessionRegistry,
        transport: Transport,
    ):
        """
        Initialize the coordinator.

        Args:
            rooms: The room registry
            sessions: The session registry
            transport: Transport used to deliver events
        """
        self.rooms = rooms
        self.sessions = sessions
        self.transport = transport

    async def create_room(self, conn_id: str) -> Dict[str, Any]:
        """
        Handle a create-room request.

        Args:
            conn_id: The requesting connection

        Returns:
            dict: Success reply with roomCode and username, or error reply
        """
        try:
            if self.sessions.get_session(conn_id):
                raise AlreadyMemberError("Already in a room")

            room = self.rooms.create_room(conn_id)
            username = room.members[conn_id]
            self.sessions.open_session(conn_id, room.code, username, is_admin=True)
            self.transport.join_group(conn_id, room.code)
            return create_success_reply(room.code, username)

        except RelayError as e:
            logger.info(f"Create room rejected for {conn_id}: {e.message}")
            return create_error_reply(e)
        except Exception:
            logger.exception("Create room error")
            return create_error_reply(InternalError(), "Failed to create room")

    async def join_room(self, conn_id: str, raw_code: Any) -> Dict[str, Any]:
        """
        Handle a join-room request.

        The code is normalized before any lookup. Checks run in order:
        format, existence, then membership.

        Args:
            conn_id: The requesting connection
            raw_code: Room code as typed by the user

        Returns:
            dict: Success reply with roomCode and username, or error reply
        """
        try:
            code = normalize_room_code(raw_code)
            if not self.rooms.has_room(code):
                raise RoomNotFoundError()

            session = self.sessions.get_session(conn_id)
            if session and session.room_code != code:
                raise AlreadyMemberError("Already in a room")

            username = self.rooms.join_room(code, conn_id)
            self.sessions.open_session(conn_id, code, username, is_admin=False)
            self.transport.join_group(conn_id, code)

            await self.transport.broadcast(
                code, create_user_joined_event(username), exclude=conn_id
            )
            return create_success_reply(code, username)

        except RelayError as e:
            logger.info(f"Join room rejected for {conn_id}: {e.message}")
            return create_error_reply(e)
        except Exception:
            logger.exception("Join room error")
            return create_error_reply(
                InternalError(), "Failed to join room. Please try again."
            )

    async def send_message(self, conn_id: str, text: Any) -> None:
        """
        Handle a send-message event.

        The message goes to every member of the sender's room, the sender
        included. Messages from connections without a live room are
        dropped.
        """
        try:
            session = self._live_session(conn_id)
            if session is None:
                logger.debug(f"Dropped message from {conn_id}: not in a room")
                return

            message = text.strip() if isinstance(text, str) else text
            is_valid, error = validate_message_content(message)
            if not is_valid:
                logger.debug(f"Dropped message from {conn_id}: {error}")
                return

            event = create_new_message_event(
                session.display_name, message, session.is_admin, _timestamp_ms()
            )
            await self.transport.broadcast(session.room_code, event)

        except Exception:
            logger.exception("Message send error")

    async def close_room(self, conn_id: str, code: Any) -> None:
        """
        Handle a close-room event from the room admin.

        Anyone other than the admin of record gets a silent no-op, and so
        does an admin who has since left the room. On success every
        member, the admin included, receives exactly one room-closed event
        and all of the room's sessions are closed.
        """
        try:
            session = self.sessions.get_session(conn_id)
            if session is None or not session.is_admin or session.room_code != code:
                raise UnauthorizedError()

            if not self.rooms.close_room(code, conn_id):
                raise UnauthorizedError(f"Not the admin of record for {code}")

            self.sessions.close_room_sessions(code)
            members = self.transport.group_members(code)
            self.transport.discard_group(code)

            await self.transport.deliver_many(members, create_room_closed_event())

        except RelayError as e:
            logger.debug(f"Ignored close-room from {conn_id}: {e.message}")
        except Exception:
            logger.exception("Close room error")

    async def leave_room(self, conn_id: str) -> None:
        """Handle a leave-room event; the connection stays open."""
        try:
            await self._remove_connection(conn_id)
        except Exception:
            logger.exception("Leave room error")

    async def disconnect(self, conn_id: str) -> None:
        """
        Handle a transport-level disconnect.

        Always releases the connection's session and group memberships,
        even if notifying the remaining members fails.
        """
        try:
            await self._remove_connection(conn_id)
        except Exception:
            logger.exception("Disconnect error")
        finally:
            self.sessions.close_session(conn_id)
            self.transport.leave_group(conn_id)

    def _live_session(self, conn_id: str) -> Optional[Session]:
        session = self.sessions.get_session(conn_id)
        if session is None or not self.rooms.has_room(session.room_code):
            return None
        return session

    async def _remove_connection(self, conn_id: str) -> None:
        session = self.sessions.close_session(conn_id)
        if session is None:
            return

        code = session.room_code
        self.transport.leave_group(conn_id, code)
        remaining = self.rooms.remove_member(code, conn_id)
        if remaining is None:
            logger.info(f"{session.display_name} left {code}, room is gone")
            return

        logger.info(f"{session.display_name} left {code}")
        await self.transport.broadcast(
            code, create_user_left_event(session.display_name), exclude=conn_id
        )
