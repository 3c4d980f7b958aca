"""Application error taxonomy.

Each concrete error belongs to one kind (validation, not found, authorization,
business rule, conflict, persistence). The API layer maps every concrete class
to an HTTP status and a stable error code.
"""

from __future__ import annotations

from typing import Any


class ApplicationError(Exception):
    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class ValidationError(ApplicationError):
    pass


class NotFoundError(ApplicationError):
    pass


class AuthorizationError(ApplicationError):
    pass


class BusinessRuleError(ApplicationError):
    pass


class ConflictError(ApplicationError):
    pass


class PersistenceError(ApplicationError):
    pass


class MissingFieldsError(ValidationError):
    pass


class InvalidOrderRequestError(ValidationError):
    pass


class InvalidMenuItemError(ValidationError):
    pass


class InvalidReviewError(ValidationError):
    pass


class VendorNotFoundError(NotFoundError):
    pass


class UserNotFoundError(NotFoundError):
    pass


class OrderNotFoundError(NotFoundError):
    pass


class OrderAccessDeniedError(AuthorizationError):
    pass


class UnsupportedPaymentMethodError(BusinessRuleError):
    pass


class InsufficientBalanceError(BusinessRuleError):
    pass


class TotalMismatchError(BusinessRuleError):
    pass


class InvalidOrderTransitionError(ConflictError):
    pass


class OrderConflictError(ConflictError):
    pass
