"""Order repository and sales aggregates."""

from __future__ import annotations

from datetime import date, datetime
from typing import cast

from sqlalchemy import func, select

from storefront.models.order import Order
from storefront.repositories.base import BaseRepository


class OrderRepository(BaseRepository[Order]):
    """Persistence-only repository for :class:`Order`."""

    model = Order

    def _sortable_fields(self):
        return {"created_at": Order.created_at, "total_amount": Order.total_amount}

    def _filterable_fields(self):
        return {"user_id": Order.user_id, "gateway_order_id": Order.gateway_order_id}

    def get_by_gateway_id(self, gateway_order_id: str) -> Order | None:
        return self.find_one(gateway_order_id=gateway_order_id)

    def sales_totals(self) -> tuple[int, float]:
        """Return ``(order_count, revenue)`` across all orders."""
        stmt = select(func.count(Order.id), func.coalesce(func.sum(Order.total_amount), 0))
        count, revenue = self.session.execute(stmt).one()
        return int(count), float(revenue)

    def daily_sales(self, *, start: datetime, end: datetime) -> dict[date, tuple[int, float]]:
        """Aggregate ``(sales, revenue)`` per calendar day in ``[start, end]``.

        Days without orders are absent from the mapping; callers zero-fill.
        """
        day = func.date(Order.created_at)
        stmt = (
            select(day, func.count(Order.id), func.coalesce(func.sum(Order.total_amount), 0))
            .where(Order.created_at >= start, Order.created_at <= end)
            .group_by(day)
            .order_by(day)
        )
        out: dict[date, tuple[int, float]] = {}
        for raw_day, count, revenue in self.session.execute(stmt).all():
            key = raw_day if isinstance(raw_day, date) else date.fromisoformat(str(raw_day))
            out[cast(date, key)] = (int(count), float(revenue))
        return out
