from storefront.models.coupon import Coupon
from storefront.models.order import Order, OrderLine
from storefront.models.product import Product
from storefront.models.user import CartLine, Role, User

__all__ = [
    "CartLine",
    "Coupon",
    "Order",
    "OrderLine",
    "Product",
    "Role",
    "User",
]
