"""
AnalyticsService
================

Read-only aggregates for the admin dashboard: store-wide totals and a
zero-filled per-day sales series covering the last week.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

from storefront.services._shared.base import BaseService
from storefront.services.analytics.dto import AnalyticsOut, DailySalesOut, SummaryOut

DEFAULT_WINDOW = timedelta(days=7)


def _date_range(start: date, end: date) -> list[date]:
    days = (end - start).days
    return [start + timedelta(days=i) for i in range(days + 1)]


class AnalyticsService(BaseService):
    """Application service for sales analytics."""

    def summary(self) -> SummaryOut:
        with self.ro_uow() as uow:
            sales, revenue = uow.orders.sales_totals()
            return SummaryOut(
                users=uow.users.count(),
                products=uow.products.count(),
                total_sales=sales,
                total_revenue=round(revenue, 2),
            )

    def daily_sales(self, *, start: datetime, end: datetime) -> list[DailySalesOut]:
        """
        Per-day sales between ``start`` and ``end`` (both inclusive).

        Every calendar day in the range is present; days without orders
        report zero sales and zero revenue.
        """
        if end < start:
            raise ValueError("end must not precede start")
        with self.ro_uow() as uow:
            rows = uow.orders.daily_sales(start=start, end=end)
        out: list[DailySalesOut] = []
        for day in _date_range(start.date(), end.date()):
            sales, revenue = rows.get(day, (0, 0.0))
            out.append(DailySalesOut(date=day, sales=sales, revenue=round(revenue, 2)))
        return out

    def dashboard(self, window: timedelta = DEFAULT_WINDOW) -> AnalyticsOut:
        """Totals plus the daily series for the trailing ``window``."""
        end = self.now_utc()
        return AnalyticsOut(
            summary=self.summary(),
            daily=self.daily_sales(start=end - window, end=end),
        )
