"""Admin analytics endpoint."""

from __future__ import annotations

from flask import Blueprint

from storefront.api.deps import get_analytics_service, json_response, timing
from storefront.api.gate import admin_only
from storefront.schemas import AnalyticsSchema

bp = Blueprint("analytics", __name__, url_prefix="/analytics")

analytics_schema = AnalyticsSchema()


@bp.get("")
@admin_only
@timing
def dashboard():
    """Return store totals and the daily sales of the last week."""

    return json_response({"data": analytics_schema.dump(get_analytics_service().dashboard())})
