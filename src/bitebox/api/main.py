from __future__ import annotations

import asyncio
import logging
import os
import time
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from bitebox.api.error_handling import register_exception_handlers
from bitebox.api.middleware.request_id import RequestIDMiddleware
from bitebox.api.routes.accounts import router as accounts_router
from bitebox.api.routes.health import router as health_router
from bitebox.api.routes.metrics import router as metrics_router
from bitebox.api.routes.orders import router as orders_router
from bitebox.api.routes.vendors import router as vendors_router
from bitebox.api.ws.manager import ConnectionManager
from bitebox.api.ws.push import LocalPushTransport
from bitebox.api.ws.routes import router as ws_router
from bitebox.application.ports.push import PushTransport
from bitebox.application.use_cases.notification_dispatcher import NotificationDispatcher
from bitebox.infrastructure.messaging.redis_event_listener import start_redis_fanout
from bitebox.infrastructure.messaging.redis_publisher import RedisPushTransport, relay_url
from bitebox.infrastructure.observability.logging_config import configure_logging
from bitebox.infrastructure.observability.otel import configure_otel

logger = logging.getLogger("bitebox.api.access")

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)


def _cors_allow_origins() -> list[str]:
    env = os.getenv("APP_ENV", "dev").lower()

    if env in {"dev", "test"}:
        return ["*"]

    raw_value = os.getenv("CORS_ALLOW_ORIGINS", "")
    return [origin.strip() for origin in raw_value.split(",") if origin.strip()]


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        path = request.url.path
        method = request.method
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - started) * 1000
            REQUEST_COUNT.labels(method=method, path=path, status_code="500").inc()
            REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000)
            logger.exception(
                "request_error",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": 500,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        REQUEST_COUNT.labels(method=method, path=path, status_code=str(response.status_code)).inc()
        REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000)
        logger.info(
            "request_complete",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response


def _build_push_transport(manager: ConnectionManager, redis_url: str | None) -> PushTransport:
    if redis_url:
        return RedisPushTransport(redis_url)
    return LocalPushTransport(manager)


@asynccontextmanager
async def lifespan(app: FastAPI):
    manager = ConnectionManager()
    manager.bind_loop(asyncio.get_running_loop())
    app.state.ws_manager = manager
    redis_url = relay_url()
    transport = _build_push_transport(manager, redis_url)
    app.state.push_transport = transport
    app.state.notification_dispatcher = NotificationDispatcher(transport)

    fanout_task: asyncio.Task | None = None
    if redis_url:
        fanout_task = asyncio.create_task(start_redis_fanout(app.state, redis_url))
    app.state.redis_fanout_task = fanout_task
    try:
        yield
    finally:
        if fanout_task is not None:
            fanout_task.cancel()
            with suppress(asyncio.CancelledError):
                await fanout_task
        if isinstance(transport, RedisPushTransport):
            transport.close()


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Bitebox Backend", version="0.1.0", lifespan=lifespan)
    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(accounts_router)
    app.include_router(vendors_router)
    app.include_router(orders_router)
    app.include_router(ws_router)

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    configure_otel(app)
    return app


app = create_app()
