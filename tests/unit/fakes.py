from __future__ import annotations

import sys
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Collection

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from bitebox.application.ports.repositories import OptimisticConcurrencyError
from bitebox.domain.account.entities import Account, AccountRole, VendorDetails
from bitebox.domain.common.ids import AccountId, MenuItemId, OrderId
from bitebox.domain.common.money import Money
from bitebox.domain.menu.entities import MenuItem
from bitebox.domain.order.entities import Order, OrderStatus
from bitebox.domain.review.entities import Review


class FakeAccountRepository:
    def __init__(self, accounts: list[Account]) -> None:
        self.accounts = {str(account.account_id): account for account in accounts}
        self.debit_calls = 0
        self.credits: list[tuple[str, Money]] = []

    def get(self, account_id: AccountId) -> Account | None:
        return self.accounts.get(str(account_id))

    def get_by_email(self, email: str) -> Account | None:
        for account in self.accounts.values():
            if account.email == email.lower():
                return account
        return None

    def save(self, account: Account) -> None:
        self.accounts[str(account.account_id)] = account

    def debit_wallet(self, account_id: AccountId, amount: Money) -> bool:
        self.debit_calls += 1
        account = self.accounts.get(str(account_id))
        if account is None or account.wallet_balance < amount:
            return False
        self.accounts[str(account_id)] = replace(
            account, wallet_balance=account.wallet_balance - amount
        )
        return True

    def credit_wallet(self, account_id: AccountId, amount: Money) -> None:
        account = self.accounts[str(account_id)]
        self.credits.append((str(account_id), amount))
        self.accounts[str(account_id)] = replace(
            account, wallet_balance=account.wallet_balance + amount
        )

    def update_rating(self, vendor_id: AccountId, rating: float, num_reviews: int) -> None:
        account = self.accounts[str(vendor_id)]
        self.accounts[str(vendor_id)] = account.with_rating(rating=rating, num_reviews=num_reviews)

    def balance(self, account_id: str) -> Money:
        return self.accounts[account_id].wallet_balance


class FakeMenuRepository:
    def __init__(self, items: list[MenuItem]) -> None:
        self.items = {str(item.item_id): item for item in items}

    def get_item(self, item_id: MenuItemId) -> MenuItem | None:
        return self.items.get(str(item_id))

    def list_for_vendor(self, vendor_id: AccountId) -> list[MenuItem]:
        return [item for item in self.items.values() if item.is_owned_by(vendor_id)]

    def add(self, item: MenuItem) -> None:
        self.items[str(item.item_id)] = item


class FakeOrderRepository:
    def __init__(self, fail_on_add: bool = False) -> None:
        self.orders: dict[str, Order] = {}
        self.fail_on_add = fail_on_add

    def add(self, order: Order) -> None:
        if self.fail_on_add:
            raise RuntimeError("database unavailable")
        self.orders[str(order.order_id)] = order

    def get(self, order_id: OrderId) -> Order | None:
        return self.orders.get(str(order_id))

    def list_for_user(
        self,
        user_id: AccountId,
        statuses: Collection[OrderStatus],
    ) -> list[Order]:
        matches = [
            order
            for order in self.orders.values()
            if str(order.user_id) == str(user_id) and order.status in statuses
        ]
        return sorted(matches, key=lambda order: order.created_at, reverse=True)

    def list_for_vendor(
        self,
        vendor_id: AccountId,
        status: OrderStatus | None,
        limit: int,
    ) -> list[Order]:
        matches = [
            order
            for order in self.orders.values()
            if str(order.vendor_id) == str(vendor_id) and (status is None or order.status == status)
        ]
        return sorted(matches, key=lambda order: order.created_at, reverse=True)[:limit]

    def update_status_with_version(
        self,
        order_id: OrderId,
        new_status: OrderStatus,
        expected_version: int,
        updated_at: datetime,
    ) -> Order:
        current = self.orders[str(order_id)]
        if current.version != expected_version:
            raise OptimisticConcurrencyError(f"order {order_id} version conflict")
        updated = replace(
            current,
            status=new_status,
            updated_at=updated_at,
            version=current.version + 1,
        )
        self.orders[str(order_id)] = updated
        return updated


class FakeReviewRepository:
    def __init__(self) -> None:
        self.reviews: list[Review] = []

    def add(self, review: Review) -> None:
        self.reviews.append(review)

    def list_for_vendor(self, vendor_id: AccountId) -> list[Review]:
        return [review for review in self.reviews if str(review.vendor_id) == str(vendor_id)]

    def ratings_for_vendor(self, vendor_id: AccountId) -> list[int]:
        return [review.rating for review in self.list_for_vendor(vendor_id)]


class RecordingTransport:
    def __init__(self, connected: set[str] | None = None, error: Exception | None = None) -> None:
        self.connected = connected if connected is not None else set()
        self.error = error
        self.pushes: list[tuple[str, str]] = []

    def push(self, recipient_id: str, message: str) -> bool:
        if self.error is not None:
            raise self.error
        self.pushes.append((recipient_id, message))
        return recipient_id in self.connected


def make_user(
    account_id: str = "usr_001",
    balance: str = "500.00",
    phone_number: str | None = "+15550100001",
) -> Account:
    return Account(
        account_id=AccountId(account_id),
        role=AccountRole.USER,
        username=f"user_{account_id}",
        email=f"{account_id}@example.com",
        phone_number=phone_number,
        wallet_balance=Money.from_decimal(Decimal(balance)),
    )


def make_vendor(account_id: str = "vnd_001", name: str = "Slice House") -> Account:
    return Account(
        account_id=AccountId(account_id),
        role=AccountRole.VENDOR,
        username=f"owner_{account_id}",
        email=f"{account_id}@example.com",
        phone_number=None,
        wallet_balance=Money.zero(),
        vendor_details=VendorDetails(restaurant_name=name),
    )


def make_item(
    item_id: str = "itm_001",
    vendor_id: str = "vnd_001",
    name: str = "Pizza",
    price: str = "300.00",
    category: str = "Mains",
    is_available: bool = True,
) -> MenuItem:
    return MenuItem(
        item_id=MenuItemId(item_id),
        vendor_id=AccountId(vendor_id),
        name=name,
        description=None,
        price=Money.from_decimal(Decimal(price)),
        category=category,
        is_available=is_available,
    )
