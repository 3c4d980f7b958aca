from __future__ import annotations

from typing import Protocol


class PushTransport(Protocol):
    def push(self, recipient_id: str, message: str) -> bool:
        """Hand ``message`` to the recipient's live connection.

        Returns False when the recipient has no connection this transport can
        reach. Must not wait for the frame to be written.
        """
        ...
