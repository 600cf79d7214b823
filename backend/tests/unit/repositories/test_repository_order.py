"""Unit tests for OrderRepository aggregates."""

from datetime import UTC, date, datetime, timedelta

import pytest
from storefront.repositories.order import OrderRepository
from tests.factories.order import OrderFactory
from tests.factories.user import UserFactory

DAY = datetime(2026, 4, 20, 10, 0, tzinfo=UTC)


class TestOrderRepository:
    @pytest.fixture()
    def repo(self):
        return OrderRepository()

    def test_sales_totals_empty(self, repo):
        assert repo.sales_totals() == (0, 0.0)

    def test_sales_totals(self, repo, session):
        owner = UserFactory()
        OrderFactory(owner=owner, total_amount=10.5)
        OrderFactory(owner=owner, total_amount=20.0)
        session.commit()

        assert repo.sales_totals() == (2, 30.5)

    def test_get_by_gateway_id(self, repo, session):
        order = OrderFactory(owner=UserFactory(), gateway_order_id="order_1_abc")
        session.commit()

        assert repo.get_by_gateway_id("order_1_abc").id == order.id
        assert repo.get_by_gateway_id("order_missing") is None

    def test_daily_sales_groups_by_day(self, repo, session):
        owner = UserFactory()
        OrderFactory(owner=owner, total_amount=5.0, created_at=DAY)
        OrderFactory(owner=owner, total_amount=7.0, created_at=DAY + timedelta(hours=2))
        OrderFactory(owner=owner, total_amount=9.0, created_at=DAY + timedelta(days=1))
        OrderFactory(owner=owner, total_amount=99.0, created_at=DAY + timedelta(days=10))
        session.commit()

        rows = repo.daily_sales(start=DAY - timedelta(hours=1), end=DAY + timedelta(days=2))

        assert rows == {
            date(2026, 4, 20): (2, 12.0),
            date(2026, 4, 21): (1, 9.0),
        }
