"""
WebSocket Handler
==================
Live stress bar feed. Every connected game client gets the session
snapshot after each mutation and can ask for it on demand with
{"action": "get_state"}.
"""

import json
import logging
from typing import Callable, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Websocket clients following one session."""

    def __init__(self):
        self.clients: Set[WebSocket] = set()

    @property
    def client_count(self) -> int:
        return len(self.clients)

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.clients.add(websocket)
        logger.info(f"Stress feed client connected ({self.client_count} total)")

    def disconnect(self, websocket: WebSocket):
        if websocket in self.clients:
            self.clients.discard(websocket)
            logger.info(f"Stress feed client left ({self.client_count} total)")

    async def send(self, websocket: WebSocket, message: dict) -> bool:
        """Send to one client. A client that fails is dropped."""
        try:
            await websocket.send_text(json.dumps(message))
        except Exception as e:
            logger.debug(f"Dropping stress feed client: {e}")
            self.disconnect(websocket)
            return False
        return True

    async def broadcast(self, message: dict) -> int:
        """
        Send to every client connected when the broadcast starts.

        Clients may connect or drop while a send is pending, so this walks
        a copy of the set.

        Returns:
            number of clients that received the message
        """
        delivered = 0
        for websocket in list(self.clients):
            if await self.send(websocket, message):
                delivered += 1
        return delivered

    async def handle_message(self, websocket: WebSocket, text: str,
                             snapshot: Callable[[], dict]) -> bool:
        """
        React to one message from a client.

        Anything that is not a JSON object with a known action is ignored.

        Returns:
            True if the message was answered
        """
        try:
            msg = json.loads(text)
        except json.JSONDecodeError:
            logger.debug(f"Ignoring non-JSON stress feed message: {text[:80]!r}")
            return False
        if not isinstance(msg, dict):
            logger.debug(f"Ignoring stress feed message that is not an object: {text[:80]!r}")
            return False

        if msg.get("action") == "get_state":
            return await self.send(websocket, {"type": "state", "data": snapshot()})
        return False
