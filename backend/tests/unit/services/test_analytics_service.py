# tests/unit/services/test_analytics_service.py
from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

import pytest
from storefront.services.analytics.service import AnalyticsService
from tests.factories.order import OrderFactory
from tests.factories.product import ProductFactory
from tests.factories.user import UserFactory

NOW = datetime(2026, 5, 10, 12, 0, tzinfo=UTC)


@pytest.fixture()
def service() -> AnalyticsService:
    return AnalyticsService(clock=lambda: NOW)


def test_summary_counts_everything(service, session):
    buyer = UserFactory()
    UserFactory()
    ProductFactory.create_batch(3)
    OrderFactory(owner=buyer, total_amount=100.0)
    OrderFactory(owner=buyer, total_amount=50.25)
    session.commit()

    out = service.summary()

    assert out.users == 2
    assert out.products == 3
    assert out.total_sales == 2
    assert out.total_revenue == 150.25


def test_summary_on_empty_store(service):
    out = service.summary()

    assert (out.users, out.products, out.total_sales, out.total_revenue) == (0, 0, 0, 0.0)


def test_daily_sales_zero_fills_window(service, session):
    buyer = UserFactory()
    OrderFactory(owner=buyer, total_amount=100.0, created_at=NOW - timedelta(days=2))
    OrderFactory(owner=buyer, total_amount=40.0, created_at=NOW - timedelta(days=2, hours=1))
    OrderFactory(owner=buyer, total_amount=10.0, created_at=NOW - timedelta(days=30))
    session.commit()

    out = service.dashboard().daily

    assert len(out) == 8
    assert out[0].date == date(2026, 5, 3)
    assert out[-1].date == date(2026, 5, 10)
    by_day = {row.date: (row.sales, row.revenue) for row in out}
    assert by_day[date(2026, 5, 8)] == (2, 140.0)
    assert sum(row.sales for row in out) == 2


def test_daily_sales_rejects_reversed_range(service):
    with pytest.raises(ValueError):
        service.daily_sales(start=NOW, end=NOW - timedelta(days=1))
