from __future__ import annotations

import threading
from typing import Any


class ConnectionRegistry:
    """Process-local map of user id to the single live connection handle.

    All mutations go through one lock because request threads look handles up
    while the event loop registers and removes them.
    """

    def __init__(self) -> None:
        self._handles: dict[str, Any] = {}
        self._lock = threading.Lock()

    def register(self, user_id: str, handle: Any) -> Any | None:
        """Insert or overwrite; returns the handle that was replaced, if any."""
        with self._lock:
            previous = self._handles.get(user_id)
            self._handles[user_id] = handle
        return previous

    def unregister(self, handle: Any) -> str | None:
        """Remove the entry holding ``handle``; returns its user id, if any."""
        with self._lock:
            for user_id, registered in self._handles.items():
                if registered is handle:
                    del self._handles[user_id]
                    return user_id
        return None

    def lookup(self, user_id: str) -> Any | None:
        with self._lock:
            return self._handles.get(user_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)
