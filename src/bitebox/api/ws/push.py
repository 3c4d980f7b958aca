from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Future

from bitebox.api.ws.manager import ConnectionManager
from bitebox.application.ports.push import PushTransport

logger = logging.getLogger(__name__)


class LocalPushTransport(PushTransport):
    """Hands pushes to the event loop that owns this process's websockets.

    Request handlers run on worker threads, so the send is scheduled on the
    loop and never awaited here.
    """

    def __init__(self, manager: ConnectionManager) -> None:
        self._manager = manager

    def push(self, recipient_id: str, message: str) -> bool:
        websocket = self._manager.registry.lookup(recipient_id)
        loop = self._manager.loop
        if websocket is None or loop is None or loop.is_closed():
            return False

        future = asyncio.run_coroutine_threadsafe(self._manager.send(websocket, message), loop)
        future.add_done_callback(lambda done: _log_failed_send(done, recipient_id))
        return True


def _log_failed_send(future: Future, recipient_id: str) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error(
            "notification_push_failed",
            exc_info=exc,
            extra={"recipient_id": recipient_id},
        )
