from __future__ import annotations

import sys
from pathlib import Path

from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parent))

from api_helpers import OTHER_VENDOR_HEADERS, USER_HEADERS, VENDOR_HEADERS, pizza_order


def _wallet_balance(client: TestClient) -> str:
    response = client.get("/v1/accounts/me", headers=USER_HEADERS)
    assert response.status_code == 200
    return response.json()["walletBalance"]


def test_wallet_order_debits_balance_and_is_listed_as_active(client: TestClient) -> None:
    response = client.post("/v1/orders", json=pizza_order(), headers=USER_HEADERS)

    assert response.status_code == 201
    body = response.json()
    assert body["orderId"].startswith("ord_")
    assert body["status"] == "in_progress"
    assert body["paymentMethod"] == "wallet"
    assert body["paymentStatus"] == "paid"
    assert body["totalAmount"] == "300.00"
    assert body["vendor"]["name"] == "Slice House"
    assert body["items"][0]["menuItem"]["name"] == "Pizza"
    assert _wallet_balance(client) == "200.00"

    active = client.get("/v1/orders/me/active", headers=USER_HEADERS)
    assert active.status_code == 200
    assert [order["orderId"] for order in active.json()["orders"]] == [body["orderId"]]


def test_insufficient_balance_leaves_wallet_and_orders_untouched(client: TestClient) -> None:
    response = client.post("/v1/orders", json=pizza_order(quantity=2), headers=USER_HEADERS)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INSUFFICIENT_BALANCE"
    assert _wallet_balance(client) == "500.00"
    active = client.get("/v1/orders/me/active", headers=USER_HEADERS)
    assert active.json() == {"orders": []}


def test_cash_on_delivery_order_is_unpaid(client: TestClient) -> None:
    response = client.post(
        "/v1/orders",
        json=pizza_order(quantity=2, payment_method="Cash on Delivery"),
        headers=USER_HEADERS,
    )

    assert response.status_code == 201
    assert response.json()["paymentStatus"] == "unpaid"
    assert response.json()["userPhoneNumber"] == "+15550100001"
    assert _wallet_balance(client) == "500.00"


def test_missing_fields_are_reported(client: TestClient) -> None:
    response = client.post("/v1/orders", json={"items": []}, headers=USER_HEADERS)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "MISSING_FIELDS"
    assert error["details"]["fields"] == ["items", "totalAmount", "vendorId", "paymentMethod"]


def test_item_from_another_vendor_rejects_order(client: TestClient) -> None:
    payload = pizza_order()
    payload["items"] = [
        {"menuItemId": "itm_001", "quantity": 1, "price": "300.00"},
        {"menuItemId": "itm_101", "name": "Quinoa Bowl", "quantity": 1, "price": "180.00"},
    ]
    payload["totalAmount"] = "480.00"

    response = client.post("/v1/orders", json=payload, headers=USER_HEADERS)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_MENU_ITEM"
    assert response.json()["error"]["message"] == "invalid menu item: Quinoa Bowl"
    assert _wallet_balance(client) == "500.00"


def test_unknown_vendor_is_not_found(client: TestClient) -> None:
    payload = pizza_order()
    payload["vendorId"] = "vnd_404"

    response = client.post("/v1/orders", json=payload, headers=USER_HEADERS)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "VENDOR_NOT_FOUND"


def test_total_mismatch_is_rejected(client: TestClient) -> None:
    payload = pizza_order()
    payload["totalAmount"] = "1.00"

    response = client.post("/v1/orders", json=payload, headers=USER_HEADERS)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TOTAL_MISMATCH"
    assert response.json()["error"]["details"] == {"expectedTotal": "300.00"}


def test_vendor_advances_order_until_delivered(client: TestClient) -> None:
    order_id = client.post("/v1/orders", json=pizza_order(), headers=USER_HEADERS).json()[
        "orderId"
    ]

    forbidden = client.post(f"/v1/orders/{order_id}/advance", headers=USER_HEADERS)
    first = client.post(f"/v1/orders/{order_id}/advance", headers=VENDOR_HEADERS)
    second = client.post(f"/v1/orders/{order_id}/advance", headers=VENDOR_HEADERS)
    third = client.post(f"/v1/orders/{order_id}/advance", headers=VENDOR_HEADERS)

    assert forbidden.status_code == 403
    assert forbidden.json()["error"]["code"] == "FORBIDDEN"
    assert first.json()["status"] == "out_for_delivery"
    assert second.json()["status"] == "delivered"
    assert third.status_code == 409
    assert third.json()["error"]["code"] == "INVALID_ORDER_TRANSITION"

    active = client.get("/v1/orders/me/active", headers=USER_HEADERS)
    assert active.json() == {"orders": []}

    cancel = client.post(f"/v1/orders/{order_id}/cancel", headers=USER_HEADERS)
    assert cancel.status_code == 409


def test_cancel_keeps_payment_and_is_repeatable(client: TestClient) -> None:
    order_id = client.post("/v1/orders", json=pizza_order(), headers=USER_HEADERS).json()[
        "orderId"
    ]

    first = client.post(f"/v1/orders/{order_id}/cancel", headers=USER_HEADERS)
    second = client.post(f"/v1/orders/{order_id}/cancel", headers=VENDOR_HEADERS)

    assert first.status_code == 200
    assert first.json()["status"] == "cancelled"
    assert second.status_code == 200
    assert second.json()["status"] == "cancelled"
    assert _wallet_balance(client) == "200.00"


def test_order_detail_is_hidden_from_other_accounts(client: TestClient) -> None:
    order_id = client.post("/v1/orders", json=pizza_order(), headers=USER_HEADERS).json()[
        "orderId"
    ]

    own = client.get(f"/v1/orders/{order_id}", headers=USER_HEADERS)
    vendor = client.get(f"/v1/orders/{order_id}", headers=VENDOR_HEADERS)
    stranger = client.get(f"/v1/orders/{order_id}", headers=OTHER_VENDOR_HEADERS)
    missing = client.get("/v1/orders/ord_missing", headers=USER_HEADERS)

    assert own.status_code == 200
    assert vendor.status_code == 200
    assert stranger.status_code == 403
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "ORDER_NOT_FOUND"


def test_vendor_lists_incoming_orders(client: TestClient) -> None:
    first = client.post("/v1/orders", json=pizza_order(), headers=USER_HEADERS).json()
    second = client.post(
        "/v1/orders",
        json=pizza_order(payment_method="cash_on_delivery"),
        headers=USER_HEADERS,
    ).json()
    client.post(f"/v1/orders/{first['orderId']}/cancel", headers=USER_HEADERS)

    everything = client.get("/v1/vendors/me/orders", headers=VENDOR_HEADERS)
    cancelled = client.get(
        "/v1/vendors/me/orders",
        params={"status": "cancelled"},
        headers=VENDOR_HEADERS,
    )
    as_user = client.get("/v1/vendors/me/orders", headers=USER_HEADERS)
    other_vendor = client.get("/v1/vendors/me/orders", headers=OTHER_VENDOR_HEADERS)

    assert {order["orderId"] for order in everything.json()["orders"]} == {
        first["orderId"],
        second["orderId"],
    }
    assert [order["orderId"] for order in cancelled.json()["orders"]] == [first["orderId"]]
    assert as_user.status_code == 403
    assert other_vendor.json() == {"orders": []}
