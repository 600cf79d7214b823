"""Analytics schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class SummarySchema(Schema):
    users = fields.Integer()
    products = fields.Integer()
    total_sales = fields.Integer(data_key="totalSales")
    total_revenue = fields.Float(data_key="totalRevenue")


class DailySalesSchema(Schema):
    date = fields.Date()
    sales = fields.Integer()
    revenue = fields.Float()


class AnalyticsSchema(Schema):
    """Dashboard payload: totals plus the daily series."""

    summary = fields.Nested(SummarySchema, data_key="analyticsData")
    daily = fields.List(fields.Nested(DailySalesSchema), data_key="dailySalesData")
