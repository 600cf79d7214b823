from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Protocol

from storefront.services._shared.errors import NotFoundError


@dataclass(frozen=True, slots=True)
class GatewayCustomer:
    """
    Customer details forwarded to the gateway.

    :param customer_id: Identity id as a string.
    :param email: Customer email.
    :param name: Display name.
    :param phone: Contact phone required by some gateways.
    """

    customer_id: str
    email: str
    name: str
    phone: str = "9876543210"


@dataclass(frozen=True, slots=True)
class GatewayOrder:
    """
    Read-model of an order held by the payment gateway.

    :param order_id: Merchant-side order identifier.
    :param amount: Amount charged.
    :param status: Gateway status (``ACTIVE``, ``PAID``, ``EXPIRED``...).
    :param payment_session_id: Session id handed to the client SDK.
    :param payment_link: Optional hosted payment page.
    :param customer_id: Identity id the order was opened for.
    """

    order_id: str
    amount: float
    status: str
    payment_session_id: str | None = None
    payment_link: str | None = None
    customer_id: str | None = None


class PaymentGateway(Protocol):
    """Port for the third-party payment provider."""

    def create_order(
        self,
        *,
        order_id: str,
        amount: float,
        customer: GatewayCustomer,
        return_url: str,
    ) -> GatewayOrder: ...

    def fetch_order(self, order_id: str) -> GatewayOrder: ...


@dataclass(slots=True)
class StubPaymentGateway(PaymentGateway):
    """
    In-process gateway for tests and local development.

    Orders are created ``ACTIVE``; tests flip them with :meth:`mark`.
    """

    orders: dict[str, GatewayOrder] = field(default_factory=dict)

    def create_order(
        self,
        *,
        order_id: str,
        amount: float,
        customer: GatewayCustomer,
        return_url: str,
    ) -> GatewayOrder:
        order = GatewayOrder(
            order_id=order_id,
            amount=amount,
            status="ACTIVE",
            payment_session_id=f"session_{order_id}",
            payment_link=return_url,
            customer_id=customer.customer_id,
        )
        self.orders[order_id] = order
        return order

    def fetch_order(self, order_id: str) -> GatewayOrder:
        order = self.orders.get(order_id)
        if order is None:
            raise NotFoundError("GatewayOrder", order_id)
        return order

    def mark(self, order_id: str, status: str) -> None:
        """Change the status of a known order (e.g. to ``PAID``)."""
        self.orders[order_id] = replace(self.fetch_order(order_id), status=status)
