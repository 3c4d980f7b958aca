from __future__ import annotations

from fastapi import Header, HTTPException, Request, status

from bitebox.api.middleware.request_id import get_request_id
from bitebox.application.use_cases.context import CallerIdentity, TraceContext
from bitebox.application.use_cases.notification_dispatcher import NotificationDispatcher
from bitebox.domain.account.entities import AccountRole
from bitebox.domain.common.ids import AccountId
from bitebox.infrastructure.observability.otel import current_trace_id


def get_caller_identity(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> CallerIdentity:
    """Identity asserted by the upstream auth gateway; trusted as-is."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="caller identity is required",
        )
    try:
        role = AccountRole((x_user_role or AccountRole.USER.value).strip().lower())
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"unknown caller role: {x_user_role}",
        ) from exc
    return CallerIdentity(account_id=AccountId(x_user_id.strip()), role=role)


def get_dispatcher(request: Request) -> NotificationDispatcher:
    return request.app.state.notification_dispatcher


def get_trace_context() -> TraceContext:
    return TraceContext(trace_id=current_trace_id(), request_id=get_request_id())
