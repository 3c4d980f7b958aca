from __future__ import annotations

import logging
from dataclasses import dataclass

from bitebox.application.errors import InsufficientBalanceError, UserNotFoundError
from bitebox.application.metrics.order_lifecycle import record_wallet_debit
from bitebox.application.ports.repositories import AccountRepository
from bitebox.domain.account.entities import InsufficientFundsError
from bitebox.domain.common.ids import AccountId
from bitebox.domain.common.money import Money
from bitebox.domain.order.entities import PaymentMethod, PaymentStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentOutcome:
    payment_status: PaymentStatus
    debited: Money | None
    user_phone_number: str | None


class PaymentSettlement:
    def __init__(self, account_repository: AccountRepository) -> None:
        self._account_repository = account_repository

    def settle(
        self,
        user_id: AccountId,
        payment_method: PaymentMethod,
        total: Money,
    ) -> PaymentOutcome:
        if payment_method == PaymentMethod.WALLET:
            return self._settle_wallet(user_id, total)
        return PaymentOutcome(
            payment_status=PaymentStatus.UNPAID,
            debited=None,
            user_phone_number=self._phone_snapshot(user_id),
        )

    def compensate(self, user_id: AccountId, outcome: PaymentOutcome) -> None:
        if outcome.debited is None:
            return
        self._account_repository.credit_wallet(user_id, outcome.debited)
        record_wallet_debit("compensated")
        logger.warning(
            "wallet_debit_compensated",
            extra={"user_id": str(user_id), "amount": str(outcome.debited.to_decimal())},
        )

    def _settle_wallet(self, user_id: AccountId, total: Money) -> PaymentOutcome:
        user = self._account_repository.get(user_id)
        if user is None:
            raise UserNotFoundError(f"user {user_id} not found")

        try:
            user.debit(total)
        except InsufficientFundsError as exc:
            record_wallet_debit("insufficient")
            raise InsufficientBalanceError("insufficient wallet balance") from exc

        # The conditional decrement re-checks the balance inside the store, so a
        # concurrent debit that won the race leaves this one rejected.
        if not self._account_repository.debit_wallet(user_id, total):
            record_wallet_debit("insufficient")
            raise InsufficientBalanceError("insufficient wallet balance")

        record_wallet_debit("debited")
        return PaymentOutcome(
            payment_status=PaymentStatus.PAID,
            debited=total,
            user_phone_number=user.phone_number,
        )

    def _phone_snapshot(self, user_id: AccountId) -> str | None:
        try:
            user = self._account_repository.get(user_id)
        except Exception:
            logger.exception("order_phone_lookup_failed", extra={"user_id": str(user_id)})
            return None
        if user is None or not user.phone_number:
            logger.info("order_phone_missing", extra={"user_id": str(user_id)})
            return None
        return user.phone_number
