"""Integration tests for coupon endpoints."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from tests.factories.coupon import CouponFactory
from tests.factories.user import UserFactory
from tests.helpers.assertions import assert_problem
from tests.helpers.auth import API, login


def test_no_coupon_returns_null(client, session) -> None:
    UserFactory(email="nocoupon@example.com")
    session.commit()
    login(client, "nocoupon@example.com")

    resp = client.get(f"{API}/coupons")

    assert resp.status_code == 200
    assert resp.get_json() == {"data": None}


def test_validate_coupon(client, session) -> None:
    user = UserFactory(email="coupon@example.com")
    CouponFactory(owner=user, code="SUMMER15", discount_percentage=15)
    session.commit()
    login(client, "coupon@example.com")

    resp = client.post(f"{API}/coupons/validate", json={"code": "SUMMER15"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == "Coupon is valid"
    assert body["data"]["code"] == "SUMMER15"
    assert body["data"]["discountPercentage"] == 15
    assert body["data"]["isActive"] is True


def test_validate_expired_coupon(client, session) -> None:
    user = UserFactory(email="late@example.com")
    CouponFactory(
        owner=user, code="LATE", expiration_date=datetime.now(UTC) - timedelta(minutes=1)
    )
    session.commit()
    login(client, "late@example.com")

    resp = client.post(f"{API}/coupons/validate", json={"code": "LATE"})
    assert_problem(resp, 404, detail="Coupon expired")

    assert client.get(f"{API}/coupons").get_json() == {"data": None}


def test_validate_requires_code(client, session) -> None:
    UserFactory(email="blank@example.com")
    session.commit()
    login(client, "blank@example.com")

    resp = client.post(f"{API}/coupons/validate", json={})

    assert_problem(resp, 400, code="validation_error", detail="Coupon code is required")
