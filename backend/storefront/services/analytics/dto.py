# storefront/services/analytics/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, slots=True)
class SummaryOut:
    """Store-wide totals."""

    users: int
    products: int
    total_sales: int
    total_revenue: float


@dataclass(frozen=True, slots=True)
class DailySalesOut:
    """Sales of a single calendar day (UTC)."""

    date: date
    sales: int
    revenue: float


@dataclass(frozen=True, slots=True)
class AnalyticsOut:
    summary: SummaryOut
    daily: list[DailySalesOut]
