"""
Transport Interface for the Relay Server

The coordinator never talks to sockets directly. It asks a transport to
deliver frames to one connection, to a group, or to a group minus the
sender. Group membership is tracked here, mirroring the rooms of the
room registry.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional, Set

logger = logging.getLogger(__name__)


class Transport(ABC):
    """
    Base class for transports with group bookkeeping.

    Subclasses implement ``deliver`` for a single connection and may
    override ``deliver_many`` to fan out more efficiently.
    """

    def __init__(self):
        # Maps group -> set of connection IDs
        self._groups: Dict[str, Set[str]] = {}
        # Maps connection ID -> set of groups
        self._conn_groups: Dict[str, Set[str]] = {}

    @abstractmethod
    async def deliver(self, conn_id: str, message: Dict[str, Any]) -> None:
        """Deliver a frame to one connection."""

    async def deliver_many(
        self, conn_ids: Iterable[str], message: Dict[str, Any]
    ) -> None:
        """Deliver a frame to several connections."""
        await asyncio.gather(
            *(self.deliver(conn_id, message) for conn_id in conn_ids)
        )

    def join_group(self, conn_id: str, group: str) -> None:
        """Add a connection to a broadcast group."""
        self._groups.setdefault(group, set()).add(conn_id)
        self._conn_groups.setdefault(conn_id, set()).add(group)

    def leave_group(self, conn_id: str, group: Optional[str] = None) -> None:
        """
        Remove a connection from a group.

        Args:
            conn_id: The connection ID
            group: Optional specific group to leave. If None, leaves all.
        """
        groups = [group] if group else list(self._conn_groups.get(conn_id, ()))
        for name in groups:
            members = self._groups.get(name)
            if members is not None:
                members.discard(conn_id)
                if not members:
                    del self._groups[name]
            conn_groups = self._conn_groups.get(conn_id)
            if conn_groups is not None:
                conn_groups.discard(name)
                if not conn_groups:
                    del self._conn_groups[conn_id]

    def discard_group(self, group: str) -> None:
        """Remove a group and every connection's membership in it."""
        for conn_id in self._groups.pop(group, set()):
            conn_groups = self._conn_groups.get(conn_id)
            if conn_groups is not None:
                conn_groups.discard(group)
                if not conn_groups:
                    del self._conn_groups[conn_id]

    def group_members(self, group: str) -> Set[str]:
        """Return a copy of the connection IDs in a group."""
        return set(self._groups.get(group, ()))

    async def send(self, conn_id: str, message: Dict[str, Any]) -> None:
        """Unicast a frame to one connection."""
        await self.deliver(conn_id, message)

    async def broadcast(
        self,
        group: str,
        message: Dict[str, Any],
        exclude: Optional[str] = None,
    ) -> None:
        """
        Broadcast a frame to every connection in a group.

        Args:
            group: The group name (room code)
            message: The frame to broadcast
            exclude: Optional connection ID to skip (the sender)
        """
        targets = [
            conn_id for conn_id in self.group_members(group) if conn_id != exclude
        ]
        if targets:
            await self.deliver_many(targets, message)
