#!/usr/bin/env python3
"""
Room Relay Server

Real-time room-based chat relay over WebSocket.
"""

import asyncio
import logging
import os
import sys

from .room_registry import RoomRegistry
from .session_registry import SessionRegistry
from .websocket_server import WebSocketServer

logger = logging.getLogger(__name__)


def configure_logging(level_name: str = "INFO"):
    """Configure root logging for the server process."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def run_server(host: str, port: int):
    """
    Run the relay server until cancelled.

    Args:
        host: WebSocket host address to bind to
        port: WebSocket port to listen on
    """
    # Registries are process-local; rooms are not shared across processes
    rooms = RoomRegistry()
    sessions = SessionRegistry()

    ws_server = WebSocketServer(rooms, sessions, host, port)
    await ws_server.start()

    logger.info(f"Server running on ws://{host}:{ws_server.bound_port}")

    try:
        # Wait indefinitely
        await asyncio.Event().wait()
    except asyncio.CancelledError:
        logger.info("Server shutdown requested")
    finally:
        await ws_server.stop()
        logger.info("Relay server stopped")


def main():
    """Main entry point for the relay server."""
    configure_logging(os.environ.get("RELAY_LOG_LEVEL", "INFO"))
    logger.info("Starting room relay server...")

    host = os.environ.get("RELAY_HOST", "0.0.0.0")
    port = int(os.environ.get("RELAY_PORT", "3000"))

    try:
        asyncio.run(run_server(host, port))
    except KeyboardInterrupt:
        logger.info("Shutting down relay server...")
        sys.exit(0)


if __name__ == "__main__":
    main()
