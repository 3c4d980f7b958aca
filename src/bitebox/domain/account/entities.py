from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from bitebox.domain.common.ids import AccountId
from bitebox.domain.common.money import Money


class AccountRole(str, Enum):
    USER = "user"
    VENDOR = "vendor"
    ADMIN = "admin"


@dataclass(frozen=True)
class VendorDetails:
    restaurant_name: str
    restaurant_address: str | None = None
    cuisine: str | None = None
    rating: float = 0.0
    num_reviews: int = 0


@dataclass(frozen=True)
class Account:
    account_id: AccountId
    role: AccountRole
    username: str
    email: str
    phone_number: str | None
    wallet_balance: Money
    vendor_details: VendorDetails | None = None

    def __post_init__(self) -> None:
        if not self.username.strip():
            raise ValueError("username must be non-empty")
        if self.role == AccountRole.VENDOR and self.vendor_details is None:
            raise ValueError("vendor accounts require vendor_details")

    @property
    def is_vendor(self) -> bool:
        return self.role == AccountRole.VENDOR

    @property
    def display_name(self) -> str:
        if self.vendor_details is not None:
            return self.vendor_details.restaurant_name
        return self.username

    def debit(self, amount: Money) -> Account:
        if self.wallet_balance < amount:
            raise InsufficientFundsError(
                f"wallet balance {self.wallet_balance.to_decimal()} is below {amount.to_decimal()}"
            )
        return replace(self, wallet_balance=self.wallet_balance - amount)

    def with_rating(self, rating: float, num_reviews: int) -> Account:
        if self.vendor_details is None:
            raise ValueError("only vendor accounts carry a rating")
        return replace(
            self,
            vendor_details=replace(self.vendor_details, rating=rating, num_reviews=num_reviews),
        )


class InsufficientFundsError(Exception):
    pass
