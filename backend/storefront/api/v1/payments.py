"""Payment endpoints: open a gateway order, then confirm it once paid."""

from __future__ import annotations

from flask import Blueprint

from storefront.api.deps import get_checkout_service, json_body, json_response, timing
from storefront.api.gate import authenticated, current_identity
from storefront.schemas import (
    CheckoutResultSchema,
    CheckoutSchema,
    ConfirmResultSchema,
    ConfirmSchema,
)

bp = Blueprint("payments", __name__, url_prefix="/payments")

checkout_schema = CheckoutSchema()
confirm_schema = ConfirmSchema()
checkout_result_schema = CheckoutResultSchema()
confirm_result_schema = ConfirmResultSchema()


@bp.post("/checkout")
@authenticated
@timing
def checkout():
    """Price the caller's cart and create a gateway order."""

    payload = checkout_schema.load(json_body())
    result = get_checkout_service().checkout(current_identity().id, payload["coupon_code"])
    return json_response({"data": checkout_result_schema.dump(result)})


@bp.post("/confirm")
@authenticated
@timing
def confirm():
    """Record the order once the gateway reports it ``PAID``."""

    payload = confirm_schema.load(json_body())
    result = get_checkout_service().confirm(
        current_identity().id, payload["order_id"], payload["coupon_code"]
    )
    return json_response(
        {
            "success": True,
            "message": "Payment successful, order confirmed",
            "data": confirm_result_schema.dump(result),
        }
    )
