from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from sqlalchemy import Engine

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from bitebox.application.ports.repositories import OptimisticConcurrencyError
from bitebox.domain.common.ids import AccountId, MenuItemId, OrderId
from bitebox.domain.common.money import Money
from bitebox.domain.order.entities import (
    ACTIVE_STATUSES,
    Order,
    OrderLine,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    create_order,
)
from bitebox.infrastructure.db.repositories.account_repo import SqlAlchemyAccountRepository
from bitebox.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository

BASE_TIME = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


def _order(order_id: str, minutes: int, quantity: int = 1) -> Order:
    return create_order(
        order_id=OrderId(order_id),
        user_id=AccountId("usr_001"),
        vendor_id=AccountId("vnd_001"),
        user_phone_number="+15550100001",
        lines=[
            OrderLine(
                menu_item_id=MenuItemId("itm_001"),
                name="Pizza",
                quantity=quantity,
                unit_price=Money(amount_cents=30000),
            ),
            OrderLine(
                menu_item_id=MenuItemId("itm_002"),
                name="Chicken Alfredo",
                quantity=1,
                unit_price=Money(amount_cents=25000),
            ),
        ],
        payment_method=PaymentMethod.CASH_ON_DELIVERY,
        payment_status=PaymentStatus.UNPAID,
        now=BASE_TIME + timedelta(minutes=minutes),
    )


def test_account_lookup_by_email_is_case_insensitive(engine: Engine) -> None:
    accounts = SqlAlchemyAccountRepository(engine)

    account = accounts.get_by_email("Asha@Example.com")

    assert account is not None
    assert str(account.account_id) == "usr_001"
    assert accounts.get_by_email("nobody@example.com") is None


def test_conditional_debit_never_overdraws(engine: Engine) -> None:
    accounts = SqlAlchemyAccountRepository(engine)
    user_id = AccountId("usr_001")

    assert accounts.debit_wallet(user_id, Money(amount_cents=30000)) is True
    assert accounts.debit_wallet(user_id, Money(amount_cents=30000)) is False
    assert accounts.debit_wallet(user_id, Money(amount_cents=20000)) is True

    account = accounts.get(user_id)
    assert account is not None
    assert account.wallet_balance == Money.zero()

    accounts.credit_wallet(user_id, Money(amount_cents=1500))
    refreshed = accounts.get(user_id)
    assert refreshed is not None
    assert refreshed.wallet_balance == Money(amount_cents=1500)


def test_rating_update_leaves_wallet_untouched(engine: Engine) -> None:
    accounts = SqlAlchemyAccountRepository(engine)
    vendor_id = AccountId("vnd_001")
    accounts.credit_wallet(vendor_id, Money(amount_cents=1000))
    assert accounts.debit_wallet(vendor_id, Money(amount_cents=500)) is True
    accounts.update_rating(vendor_id, rating=4.5, num_reviews=2)

    refreshed = accounts.get(vendor_id)
    assert refreshed is not None
    assert refreshed.wallet_balance == Money(amount_cents=500)
    assert refreshed.vendor_details is not None
    assert refreshed.vendor_details.rating == 4.5
    assert refreshed.vendor_details.num_reviews == 2


def test_order_round_trip_keeps_line_snapshots_in_order(engine: Engine) -> None:
    orders = SqlAlchemyOrderRepository(engine)
    orders.add(_order("ord_001", minutes=0, quantity=2))

    stored = orders.get(OrderId("ord_001"))

    assert stored is not None
    assert [line.name for line in stored.lines] == ["Pizza", "Chicken Alfredo"]
    assert stored.total == Money(amount_cents=85000)
    assert stored.status == OrderStatus.IN_PROGRESS
    assert stored.created_at == BASE_TIME
    assert stored.version == 1
    assert orders.get(OrderId("ord_404")) is None


def test_active_orders_are_newest_first(engine: Engine) -> None:
    orders = SqlAlchemyOrderRepository(engine)
    for order_id, minutes in [("ord_001", 0), ("ord_002", 5), ("ord_003", 10)]:
        orders.add(_order(order_id, minutes=minutes))
    orders.update_status_with_version(
        order_id=OrderId("ord_002"),
        new_status=OrderStatus.DELIVERED,
        expected_version=1,
        updated_at=BASE_TIME + timedelta(minutes=20),
    )

    active = orders.list_for_user(AccountId("usr_001"), statuses=ACTIVE_STATUSES)
    vendor_delivered = orders.list_for_vendor(
        AccountId("vnd_001"),
        status=OrderStatus.DELIVERED,
        limit=10,
    )

    assert [str(order.order_id) for order in active] == ["ord_003", "ord_001"]
    assert [str(order.order_id) for order in vendor_delivered] == ["ord_002"]


def test_status_update_rejects_stale_version(engine: Engine) -> None:
    orders = SqlAlchemyOrderRepository(engine)
    orders.add(_order("ord_001", minutes=0))

    updated = orders.update_status_with_version(
        order_id=OrderId("ord_001"),
        new_status=OrderStatus.OUT_FOR_DELIVERY,
        expected_version=1,
        updated_at=BASE_TIME + timedelta(minutes=1),
    )

    assert updated.version == 2
    with pytest.raises(OptimisticConcurrencyError):
        orders.update_status_with_version(
            order_id=OrderId("ord_001"),
            new_status=OrderStatus.CANCELLED,
            expected_version=1,
            updated_at=BASE_TIME + timedelta(minutes=2),
        )
