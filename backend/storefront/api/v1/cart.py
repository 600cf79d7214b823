"""Cart endpoints for the authenticated identity."""

from __future__ import annotations

from flask import Blueprint

from storefront.api.deps import get_cart_service, json_body, json_response, timing
from storefront.api.gate import authenticated, current_identity
from storefront.schemas import (
    CartAddSchema,
    CartItemSchema,
    CartQuantitySchema,
    CartRemoveSchema,
)

bp = Blueprint("cart", __name__, url_prefix="/cart")

cart_add_schema = CartAddSchema()
cart_remove_schema = CartRemoveSchema()
cart_quantity_schema = CartQuantitySchema()
cart_items_schema = CartItemSchema(many=True)


def _cart(items):
    return json_response({"data": cart_items_schema.dump(items)})


@bp.get("")
@authenticated
@timing
def get_cart():
    """Return cart lines joined with product details."""

    return _cart(get_cart_service().list_items(current_identity().id))


@bp.post("")
@authenticated
@timing
def add_to_cart():
    """Add one unit of ``productId``."""

    payload = cart_add_schema.load(json_body())
    return _cart(get_cart_service().add_item(current_identity().id, payload["product_id"]))


@bp.delete("")
@authenticated
@timing
def remove_from_cart():
    """Remove the line of ``productId``, or clear the cart when it is absent."""

    payload = cart_remove_schema.load(json_body())
    return _cart(get_cart_service().remove_item(current_identity().id, payload["product_id"]))


@bp.put("/<int:product_id>")
@authenticated
@timing
def update_quantity(product_id: int):
    """Set the quantity of a line; ``0`` removes it."""

    payload = cart_quantity_schema.load(json_body())
    items = get_cart_service().update_quantity(
        current_identity().id, product_id, payload["quantity"]
    )
    return _cart(items)
