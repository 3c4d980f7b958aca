from __future__ import annotations

from fastapi import APIRouter, Request, Response, status

from bitebox.infrastructure.db.session import ping_database
from bitebox.infrastructure.messaging.redis_publisher import RedisPushTransport

router = APIRouter()


@router.get("/health/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
def ready(request: Request, response: Response) -> dict[str, object]:
    checks: dict[str, bool] = {"database": ping_database(timeout_seconds=1.0)}
    # Only a redis relay is an external dependency; in-process delivery has none.
    transport = getattr(request.app.state, "push_transport", None)
    if isinstance(transport, RedisPushTransport):
        checks["redis"] = transport.ping()

    if all(checks.values()):
        return {"status": "ok"}

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {"status": "unavailable", "checks": checks}
