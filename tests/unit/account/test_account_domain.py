from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from fakes import make_user, make_vendor

from bitebox.domain.account.entities import (
    Account,
    AccountRole,
    InsufficientFundsError,
)
from bitebox.domain.common.ids import AccountId
from bitebox.domain.common.money import Money


def test_debit_returns_account_with_reduced_balance() -> None:
    user = make_user(balance="500.00")

    debited = user.debit(Money(amount_cents=30000))

    assert debited.wallet_balance == Money(amount_cents=20000)
    assert user.wallet_balance == Money(amount_cents=50000)


def test_debit_allows_spending_the_exact_balance() -> None:
    user = make_user(balance="300.00")

    assert user.debit(Money(amount_cents=30000)).wallet_balance == Money.zero()


def test_debit_rejects_amount_above_balance() -> None:
    with pytest.raises(InsufficientFundsError):
        make_user(balance="100.00").debit(Money(amount_cents=30000))


def test_vendor_requires_vendor_details() -> None:
    with pytest.raises(ValueError):
        Account(
            account_id=AccountId("vnd_009"),
            role=AccountRole.VENDOR,
            username="nameless",
            email="nameless@example.com",
            phone_number=None,
            wallet_balance=Money.zero(),
        )


def test_display_name_prefers_restaurant_name() -> None:
    assert make_vendor(name="Slice House").display_name == "Slice House"
    assert make_user("usr_007").display_name == "user_usr_007"


def test_with_rating_only_applies_to_vendors() -> None:
    rated = make_vendor().with_rating(rating=4.5, num_reviews=2)

    assert rated.vendor_details is not None
    assert rated.vendor_details.rating == 4.5
    assert rated.vendor_details.num_reviews == 2
    with pytest.raises(ValueError):
        make_user().with_rating(rating=4.5, num_reviews=2)
