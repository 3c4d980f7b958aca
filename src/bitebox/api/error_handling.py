from __future__ import annotations

import logging
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bitebox.api.middleware.request_id import get_request_id
from bitebox.application.errors import (
    InsufficientBalanceError,
    InvalidMenuItemError,
    InvalidOrderRequestError,
    InvalidOrderTransitionError,
    InvalidReviewError,
    MissingFieldsError,
    OrderAccessDeniedError,
    OrderConflictError,
    OrderNotFoundError,
    PersistenceError,
    TotalMismatchError,
    UnsupportedPaymentMethodError,
    UserNotFoundError,
    VendorNotFoundError,
)

logger = logging.getLogger(__name__)

_HTTP_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHENTICATED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
}


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            },
            "requestId": get_request_id(),
        },
    )


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


async def _persistence_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.error("persistence_error", exc_info=exc)
    return _error_response(
        status_code=500,
        code="INTERNAL_ERROR",
        message="internal server error",
    )


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    return _error_response(
        status_code=http_exc.status_code,
        code=_HTTP_CODES.get(http_exc.status_code, "HTTP_ERROR"),
        message=message,
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": validation_exc.errors()},
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (MissingFieldsError, 400, "MISSING_FIELDS"),
        (InvalidOrderRequestError, 400, "INVALID_ORDER_REQUEST"),
        (InvalidMenuItemError, 400, "INVALID_MENU_ITEM"),
        (InvalidReviewError, 400, "INVALID_REVIEW"),
        (UnsupportedPaymentMethodError, 400, "UNSUPPORTED_PAYMENT_METHOD"),
        (InsufficientBalanceError, 400, "INSUFFICIENT_BALANCE"),
        (TotalMismatchError, 400, "TOTAL_MISMATCH"),
        (OrderAccessDeniedError, 403, "FORBIDDEN"),
        (VendorNotFoundError, 404, "VENDOR_NOT_FOUND"),
        (UserNotFoundError, 404, "USER_NOT_FOUND"),
        (OrderNotFoundError, 404, "ORDER_NOT_FOUND"),
        (InvalidOrderTransitionError, 409, "INVALID_ORDER_TRANSITION"),
        (OrderConflictError, 409, "CONFLICT"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(PersistenceError, _persistence_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _persistence_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
