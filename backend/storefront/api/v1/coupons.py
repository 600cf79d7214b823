"""Coupon endpoints for the authenticated identity."""

from __future__ import annotations

from flask import Blueprint

from storefront.api.deps import get_coupon_service, json_body, json_response, timing
from storefront.api.gate import authenticated, current_identity
from storefront.schemas import CouponSchema, CouponValidateSchema

bp = Blueprint("coupons", __name__, url_prefix="/coupons")

coupon_schema = CouponSchema()
coupon_validate_schema = CouponValidateSchema()


@bp.get("")
@authenticated
@timing
def get_coupon():
    """Return the active coupon of the caller, or ``null``."""

    coupon = get_coupon_service().get_active(current_identity().id)
    return json_response({"data": coupon_schema.dump(coupon) if coupon is not None else None})


@bp.post("/validate")
@authenticated
@timing
def validate_coupon():
    """Check a coupon code; expired coupons are deactivated and reported as 404."""

    payload = coupon_validate_schema.load(json_body())
    coupon = get_coupon_service().validate(current_identity().id, payload["code"])
    return json_response({"message": "Coupon is valid", "data": coupon_schema.dump(coupon)})
