"""
CartService
===========

Mutations of an identity's cart. Lines are keyed by product reference: at
most one line per product, quantity >= 1, and a quantity of 0 removes the
line. Concurrent edits from the same identity are last-write-wins.
"""

from __future__ import annotations

from storefront.models.user import CartLine, User
from storefront.services._shared.base import BaseService
from storefront.services._shared.errors import NotFoundError, ValidationError
from storefront.services.cart.dto import CartItemOut


def project_lines(lines: list[CartLine]) -> list[CartItemOut]:
    return [
        CartItemOut(
            product_id=line.product_id,
            name=line.product.name,
            description=line.product.description,
            price=float(line.product.price),
            image=line.product.image,
            category=line.product.category,
            quantity=line.quantity,
        )
        for line in lines
        if line.product is not None
    ]


class CartService(BaseService):
    """Application service for the cart lines of the acting identity."""

    def _user(self, uow, user_id: int) -> User:
        user = uow.users.get(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def list_items(self, user_id: int) -> list[CartItemOut]:
        """Return the cart joined with product details, in insertion order."""
        with self.ro_uow() as uow:
            return project_lines(self._user(uow, user_id).cart_items)

    def add_item(self, user_id: int, product_id: int) -> list[CartItemOut]:
        """
        Add one unit of ``product_id``.

        Creates a line with quantity 1, or increments the existing line.

        :raises NotFoundError: When the product does not exist.
        """
        with self.rw_uow() as uow:
            user = self._user(uow, user_id)
            if uow.products.get(product_id) is None:
                raise NotFoundError("Product", product_id, "Product not found")
            line = user.find_cart_line(product_id)
            if line is None:
                user.cart_items.append(CartLine(product_id=product_id, quantity=1))
            else:
                line.quantity = line.quantity + 1
            uow.users.flush()
            items = project_lines(user.cart_items)
        return items

    def remove_item(self, user_id: int, product_id: int | None = None) -> list[CartItemOut]:
        """Remove the line for ``product_id``, or clear the cart when it is ``None``."""
        with self.rw_uow() as uow:
            user = self._user(uow, user_id)
            if product_id is None:
                user.cart_items.clear()
            else:
                line = user.find_cart_line(product_id)
                if line is not None:
                    user.cart_items.remove(line)
            uow.users.flush()
            items = project_lines(user.cart_items)
        return items

    def update_quantity(self, user_id: int, product_id: int, quantity: int) -> list[CartItemOut]:
        """
        Set the quantity of an existing line; ``0`` removes it.

        :raises ValidationError: Negative quantity.
        :raises NotFoundError: When the product is not in the cart.
        """
        if quantity < 0:
            raise ValidationError("Quantity must be zero or a positive integer")
        with self.rw_uow() as uow:
            user = self._user(uow, user_id)
            line = user.find_cart_line(product_id)
            if line is None:
                raise NotFoundError("CartLine", product_id, "Product not found in cart")
            if quantity == 0:
                user.cart_items.remove(line)
            else:
                line.quantity = quantity
            uow.users.flush()
            items = project_lines(user.cart_items)
        return items

    def clear(self, uow, user_id: int) -> None:
        """Empty the cart inside a caller-owned unit of work."""
        self._user(uow, user_id).cart_items.clear()
