from __future__ import annotations

import asyncio
import logging

from fastapi import WebSocket

from bitebox.api.ws.registry import ConnectionRegistry
from bitebox.application.metrics.order_lifecycle import record_ws_registrations

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self, registry: ConnectionRegistry | None = None) -> None:
        self.registry = registry or ConnectionRegistry()
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def loop(self) -> asyncio.AbstractEventLoop | None:
        return self._loop

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        if self._loop is None:
            self._loop = asyncio.get_running_loop()

    async def register(self, websocket: WebSocket, user_id: str) -> None:
        # A socket speaks for one user; re-registering moves it.
        self.registry.unregister(websocket)
        previous = self.registry.register(user_id, websocket)
        record_ws_registrations(len(self.registry))
        logger.info(
            "ws_client_registered",
            extra={"user_id": user_id, "replaced": previous is not None},
        )

    async def unregister(self, websocket: WebSocket) -> None:
        user_id = self.registry.unregister(websocket)
        if user_id is None:
            return
        record_ws_registrations(len(self.registry))
        logger.info("ws_client_unregistered", extra={"user_id": user_id})

    async def send(self, websocket: WebSocket, message: str) -> bool:
        try:
            await websocket.send_text(message)
        except Exception:
            logger.warning("ws_send_failed", exc_info=True)
            await self.unregister(websocket)
            return False
        return True

    async def send_to(self, user_id: str, message: str) -> bool:
        websocket = self.registry.lookup(user_id)
        if websocket is None:
            return False
        return await self.send(websocket, message)
