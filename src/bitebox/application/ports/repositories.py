from __future__ import annotations

from datetime import datetime
from typing import Collection, Protocol

from bitebox.domain.account.entities import Account
from bitebox.domain.common.ids import AccountId, MenuItemId, OrderId
from bitebox.domain.common.money import Money
from bitebox.domain.menu.entities import MenuItem
from bitebox.domain.order.entities import Order, OrderStatus
from bitebox.domain.review.entities import Review


class AccountRepository(Protocol):
    def get(self, account_id: AccountId) -> Account | None: ...

    def get_by_email(self, email: str) -> Account | None: ...

    def save(self, account: Account) -> None: ...

    def debit_wallet(self, account_id: AccountId, amount: Money) -> bool: ...

    def credit_wallet(self, account_id: AccountId, amount: Money) -> None: ...

    def update_rating(self, vendor_id: AccountId, rating: float, num_reviews: int) -> None: ...


class MenuRepository(Protocol):
    def get_item(self, item_id: MenuItemId) -> MenuItem | None: ...

    def list_for_vendor(self, vendor_id: AccountId) -> list[MenuItem]: ...

    def add(self, item: MenuItem) -> None: ...


class OrderRepository(Protocol):
    def add(self, order: Order) -> None: ...

    def get(self, order_id: OrderId) -> Order | None: ...

    def list_for_user(
        self,
        user_id: AccountId,
        statuses: Collection[OrderStatus],
    ) -> list[Order]: ...

    def list_for_vendor(
        self,
        vendor_id: AccountId,
        status: OrderStatus | None,
        limit: int,
    ) -> list[Order]: ...

    def update_status_with_version(
        self,
        order_id: OrderId,
        new_status: OrderStatus,
        expected_version: int,
        updated_at: datetime,
    ) -> Order: ...


class ReviewRepository(Protocol):
    def add(self, review: Review) -> None: ...

    def list_for_vendor(self, vendor_id: AccountId) -> list[Review]: ...

    def ratings_for_vendor(self, vendor_id: AccountId) -> list[int]: ...


class OptimisticConcurrencyError(Exception):
    pass
