"""Integration tests for the checkout and confirmation flow."""

from __future__ import annotations

import pytest
from tests.factories.coupon import CouponFactory
from tests.factories.product import ProductFactory
from tests.factories.user import CartLineFactory, UserFactory
from tests.helpers.assertions import assert_problem
from tests.helpers.auth import API, login


@pytest.fixture()
def buyer(client, session):
    """A logged-in customer with 3 x 400.0 in the cart and a 10% coupon."""
    user = UserFactory(email="buyer@example.com")
    CartLineFactory(user=user, product=ProductFactory(price=400.0), quantity=3)
    CouponFactory(owner=user, code="WELCOME10", discount_percentage=10)
    session.commit()
    login(client, "buyer@example.com")


def test_checkout_applies_coupon(client, buyer, gateway) -> None:
    resp = client.post(f"{API}/payments/checkout", json={"couponCode": "WELCOME10"})

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["totalAmount"] == 1080.0
    assert data["couponCode"] == "WELCOME10"
    assert data["orderId"] in gateway.orders
    assert data["sessionId"]
    assert [p["quantity"] for p in data["products"]] == [3]


def test_confirm_requires_order_id(client, buyer) -> None:
    resp = client.post(f"{API}/payments/confirm", json={})

    assert_problem(resp, 400, code="validation_error", detail="Order ID is required")


def test_unpaid_order_is_declined(client, buyer) -> None:
    order_id = client.post(f"{API}/payments/checkout", json={}).get_json()["data"]["orderId"]

    resp = client.post(f"{API}/payments/confirm", json={"orderId": order_id})

    body = assert_problem(resp, 400, code="payment_declined")
    assert body["details"] == {"status": "ACTIVE"}


def test_paid_order_is_confirmed_once(client, buyer, gateway) -> None:
    opened = client.post(f"{API}/payments/checkout", json={"couponCode": "WELCOME10"})
    order_id = opened.get_json()["data"]["orderId"]
    gateway.mark(order_id, "PAID")

    resp = client.post(
        f"{API}/payments/confirm", json={"orderId": order_id, "couponCode": "WELCOME10"}
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["message"] == "Payment successful, order confirmed"
    assert body["data"]["totalAmount"] == 1080.0
    gift = body["data"]["giftCoupon"]
    assert gift.startswith("GIFT")

    assert client.get(f"{API}/cart").get_json() == {"data": []}
    coupon = client.get(f"{API}/coupons").get_json()["data"]
    assert coupon["code"] == gift

    again = client.post(f"{API}/payments/confirm", json={"orderId": order_id})
    assert_problem(again, 409)


def test_checkout_with_empty_cart(client, session) -> None:
    UserFactory(email="empty@example.com")
    session.commit()
    login(client, "empty@example.com")

    resp = client.post(f"{API}/payments/checkout", json={})

    assert_problem(resp, 400, detail="Cart is empty")
