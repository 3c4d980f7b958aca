from __future__ import annotations

import logging
import os

import redis

from bitebox.application.ports.push import PushTransport

logger = logging.getLogger(__name__)

NOTIFICATION_CHANNEL_PREFIX = "notifications:"
NOTIFICATION_CHANNEL_PATTERN = f"{NOTIFICATION_CHANNEL_PREFIX}*"


def relay_url() -> str | None:
    """The redis URL used to relay notifications between instances, if any."""
    return os.getenv("REDIS_URL") or None


def notification_channel(recipient_id: str) -> str:
    return f"{NOTIFICATION_CHANNEL_PREFIX}{recipient_id}"


def recipient_from_channel(channel: str) -> str | None:
    recipient_id = channel.removeprefix(NOTIFICATION_CHANNEL_PREFIX)
    if not recipient_id or recipient_id == channel:
        return None
    return recipient_id


class RedisPushTransport(PushTransport):
    """Relays pushes through redis so any instance holding the socket delivers it.

    A positive result means at least one instance is listening, not that the
    recipient is connected.
    """

    def __init__(self, url: str, timeout_seconds: float = 1.0) -> None:
        self._client = redis.Redis.from_url(
            url,
            socket_connect_timeout=timeout_seconds,
            socket_timeout=timeout_seconds,
        )

    def push(self, recipient_id: str, message: str) -> bool:
        receivers = self._client.publish(notification_channel(recipient_id), message)
        return bool(receivers)

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            logger.warning("redis_relay_unreachable")
            return False

    def close(self) -> None:
        self._client.close()
