from __future__ import annotations

import re
from contextvars import ContextVar
from uuid import uuid4

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

REQUEST_ID_HEADER = "X-Request-Id"
request_id_context: ContextVar[str | None] = ContextVar("request_id", default=None)

_ACCEPTED_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def get_request_id() -> str | None:
    return request_id_context.get()


def resolve_request_id(incoming: str | None) -> str:
    """Reuse a caller-supplied id when it is safe to echo into logs and headers."""
    if incoming and _ACCEPTED_REQUEST_ID.match(incoming):
        return incoming
    return f"req_{uuid4().hex}"


class RequestIDMiddleware:
    """Binds a request id for HTTP requests and websocket sessions alike."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        request_id = resolve_request_id(Headers(scope=scope).get(REQUEST_ID_HEADER))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = request_id
            await send(message)

        token = request_id_context.set(request_id)
        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            request_id_context.reset(token)
