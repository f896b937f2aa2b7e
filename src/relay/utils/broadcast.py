"""
Broadcast Utilities

Contains the fan-out helper used by the WebSocket transport to deliver
one frame to many connections.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Iterable

import websockets

logger = logging.getLogger(__name__)


async def send_json(websocket, message: Dict[str, Any]) -> bool:
    """
    Send a JSON frame to one connection.

    Args:
        websocket: The WebSocket connection
        message: The frame to send

    Returns:
        bool: False if the connection was already closed
    """
    try:
        await websocket.send(json.dumps(message))
        return True
    except websockets.exceptions.ConnectionClosed:
        logger.debug("Dropped frame for closed connection")
        return False


async def broadcast_json(
    websockets_to_notify: Iterable,
    message: Dict[str, Any],
) -> int:
    """
    Send the same JSON frame to several connections concurrently.

    Closed connections are skipped; their disconnect handler cleans up.

    Args:
        websockets_to_notify: Connections to deliver the frame to
        message: The frame to send

    Returns:
        int: Number of connections the frame was delivered to
    """
    message_json = json.dumps(message)

    async def _send(websocket) -> bool:
        try:
            await websocket.send(message_json)
            return True
        except websockets.exceptions.ConnectionClosed:
            return False

    results = await asyncio.gather(
        *(_send(websocket) for websocket in websockets_to_notify)
    )
    return sum(1 for delivered in results if delivered)
