from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from fakes import FakeAccountRepository, FakeMenuRepository

from bitebox.application.dto.requests import PlaceOrderRequest
from bitebox.application.errors import (
    InvalidMenuItemError,
    InvalidOrderRequestError,
    MissingFieldsError,
    TotalMismatchError,
    UnsupportedPaymentMethodError,
    VendorNotFoundError,
)
from bitebox.application.use_cases.order_validation import OrderValidator
from bitebox.domain.common.money import Money
from bitebox.domain.order.entities import PaymentMethod


def _request(**overrides: Any) -> PlaceOrderRequest:
    payload: dict[str, Any] = {
        "items": [{"menuItemId": "itm_001", "name": "Pizza", "quantity": 1, "price": "300.00"}],
        "totalAmount": "300.00",
        "vendorId": "vnd_001",
        "paymentMethod": "wallet",
    }
    payload.update(overrides)
    return PlaceOrderRequest.model_validate(payload)


@pytest.fixture
def validator(accounts: FakeAccountRepository, menu: FakeMenuRepository) -> OrderValidator:
    return OrderValidator(account_repository=accounts, menu_repository=menu)


def test_validate_reports_every_missing_field(validator: OrderValidator) -> None:
    request_dto = PlaceOrderRequest.model_validate({"items": []})

    with pytest.raises(MissingFieldsError) as exc_info:
        validator.validate(request_dto)

    assert exc_info.value.details == {
        "fields": ["items", "totalAmount", "vendorId", "paymentMethod"]
    }


def test_validate_rejects_unknown_vendor(validator: OrderValidator) -> None:
    with pytest.raises(VendorNotFoundError):
        validator.validate(_request(vendorId="vnd_404"))


def test_validate_rejects_non_vendor_account_as_vendor(validator: OrderValidator) -> None:
    with pytest.raises(VendorNotFoundError):
        validator.validate(_request(vendorId="usr_001"))


def test_validate_rejects_item_from_another_vendor(validator: OrderValidator) -> None:
    request_dto = _request(
        items=[
            {"menuItemId": "itm_001", "quantity": 1, "price": "300.00"},
            {"menuItemId": "itm_101", "name": "Quinoa Bowl", "quantity": 1, "price": "180.00"},
        ],
        totalAmount="480.00",
    )

    with pytest.raises(InvalidMenuItemError) as exc_info:
        validator.validate(request_dto)

    assert str(exc_info.value) == "invalid menu item: Quinoa Bowl"
    assert exc_info.value.details == {"menuItemId": "itm_101"}


def test_validate_rejects_unknown_item(validator: OrderValidator) -> None:
    request_dto = _request(items=[{"menuItemId": "itm_404", "quantity": 1}])

    with pytest.raises(InvalidMenuItemError) as exc_info:
        validator.validate(request_dto)

    assert str(exc_info.value) == "invalid menu item: itm_404"


def test_validate_rejects_unavailable_item(validator: OrderValidator) -> None:
    request_dto = _request(
        items=[{"menuItemId": "itm_003", "quantity": 1, "price": "120.00"}],
        totalAmount="120.00",
    )

    with pytest.raises(InvalidMenuItemError):
        validator.validate(request_dto)


def test_validate_rejects_zero_quantity(validator: OrderValidator) -> None:
    request_dto = _request(items=[{"menuItemId": "itm_001", "quantity": 0}], totalAmount="0")

    with pytest.raises(InvalidOrderRequestError):
        validator.validate(request_dto)


def test_validate_rejects_stale_client_price(validator: OrderValidator) -> None:
    request_dto = _request(
        items=[{"menuItemId": "itm_001", "quantity": 1, "price": "250.00"}],
        totalAmount="250.00",
    )

    with pytest.raises(InvalidMenuItemError) as exc_info:
        validator.validate(request_dto)

    assert exc_info.value.details["currentPrice"] == "300.00"


def test_validate_rejects_unsupported_payment_method(validator: OrderValidator) -> None:
    with pytest.raises(UnsupportedPaymentMethodError):
        validator.validate(_request(paymentMethod="card"))


def test_validate_rejects_total_that_does_not_match_catalog(validator: OrderValidator) -> None:
    with pytest.raises(TotalMismatchError) as exc_info:
        validator.validate(_request(totalAmount="1.00"))

    assert exc_info.value.details == {"expectedTotal": "300.00"}


def test_validate_snapshots_catalog_name_and_price(validator: OrderValidator) -> None:
    request_dto = _request(
        items=[
            {"menuItemId": "itm_001", "name": "client label", "quantity": 2},
            {"menuItemId": "itm_002", "quantity": 1, "price": "80.00"},
        ],
        totalAmount=Decimal("680"),
        paymentMethod="Cash on Delivery",
    )

    validated = validator.validate(request_dto)

    assert [line.name for line in validated.lines] == ["Pizza", "Garlic Bread"]
    assert validated.lines[0].unit_price == Money(amount_cents=30000)
    assert validated.total == Money(amount_cents=68000)
    assert validated.payment_method == PaymentMethod.CASH_ON_DELIVERY
    assert str(validated.vendor.account_id) == "vnd_001"


def test_validate_rejects_quantity_above_line_limit(validator: OrderValidator) -> None:
    request_dto = _request(
        items=[{"menuItemId": "itm_001", "quantity": 10**17}],
        paymentMethod="cash_on_delivery",
    )

    with pytest.raises(InvalidOrderRequestError) as exc_info:
        validator.validate(request_dto)

    assert exc_info.value.details == {"menuItemId": "itm_001"}


@pytest.mark.parametrize("total_amount", ["1e40", "-5.00"])
def test_validate_rejects_out_of_range_total(validator: OrderValidator, total_amount: str) -> None:
    with pytest.raises(InvalidOrderRequestError):
        validator.validate(_request(totalAmount=total_amount))


def test_validate_rejects_out_of_range_item_price(validator: OrderValidator) -> None:
    request_dto = _request(items=[{"menuItemId": "itm_001", "quantity": 1, "price": "1e40"}])

    with pytest.raises(InvalidOrderRequestError) as exc_info:
        validator.validate(request_dto)

    assert exc_info.value.details == {"menuItemId": "itm_001"}
