# storefront/services/cart/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CartItemOut:
    """
    Cart line joined with its product details.

    :param product_id: Product reference (the line's identity).
    :param name: Product name.
    :param description: Product description.
    :param price: Unit price.
    :param image: Image URL.
    :param category: Category slug.
    :param quantity: Units in the cart (>= 1).
    """

    product_id: int
    name: str
    description: str
    price: float
    image: str
    category: str
    quantity: int

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity
