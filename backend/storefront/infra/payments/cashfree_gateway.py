"""HTTP adapter for a Cashfree-compatible order API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import requests

from storefront.services._shared.errors import NotFoundError, ServiceError, StoreUnavailableError
from storefront.services._shared.ports import GatewayCustomer, GatewayOrder, PaymentGateway

log = logging.getLogger(__name__)


@dataclass(slots=True)
class CashfreePaymentGateway(PaymentGateway):
    """
    Payment gateway speaking the ``/pg/orders`` API.

    :param base_url: Gateway root, e.g. ``https://sandbox.cashfree.com``.
    :param client_id: Merchant client id (``x-client-id``).
    :param client_secret: Merchant secret (``x-client-secret``).
    :param api_version: Value of the ``x-api-version`` header.
    :param currency: ISO currency for created orders.
    :param timeout: Per-request timeout in seconds.
    """

    base_url: str
    client_id: str
    client_secret: str
    api_version: str = "2022-09-01"
    currency: str = "INR"
    timeout: float = 10.0
    session: requests.Session = field(default_factory=requests.Session)

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-version": self.api_version,
            "x-client-id": self.client_id,
            "x-client-secret": self.client_secret,
            "Content-Type": "application/json",
        }

    def _url(self, *parts: str) -> str:
        return "/".join([self.base_url.rstrip("/"), "pg", "orders", *parts])

    @staticmethod
    def _to_order(data: dict[str, Any]) -> GatewayOrder:
        payments = data.get("payments") or {}
        customer = data.get("customer_details") or {}
        return GatewayOrder(
            order_id=str(data["order_id"]),
            amount=float(data.get("order_amount", 0)),
            status=str(data.get("order_status", "")),
            payment_session_id=data.get("payment_session_id"),
            payment_link=payments.get("url") if isinstance(payments, dict) else None,
            customer_id=str(customer["customer_id"]) if customer.get("customer_id") else None,
        )

    def _send(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            resp = self.session.request(
                method, url, headers=self._headers(), timeout=self.timeout, **kwargs
            )
        except requests.RequestException as exc:
            raise StoreUnavailableError("Payment gateway unreachable") from exc

        if resp.status_code >= 500:
            log.error("Payment gateway error: status=%s", resp.status_code)
            raise StoreUnavailableError("Payment gateway unavailable")
        if not resp.ok:
            try:
                message = resp.json().get("message")
            except ValueError:
                message = None
            log.warning("Payment gateway rejected request: status=%s", resp.status_code)
            if resp.status_code == 404:
                raise NotFoundError("GatewayOrder", url.rsplit("/", 1)[-1])
            raise ServiceError(message or "Payment gateway rejected the request")
        return resp.json()

    def create_order(
        self,
        *,
        order_id: str,
        amount: float,
        customer: GatewayCustomer,
        return_url: str,
    ) -> GatewayOrder:
        payload = {
            "order_id": order_id,
            "order_amount": amount,
            "order_currency": self.currency,
            "customer_details": {
                "customer_id": customer.customer_id,
                "customer_email": customer.email,
                "customer_name": customer.name,
                "customer_phone": customer.phone,
            },
            "order_meta": {"return_url": return_url},
        }
        data = self._send("POST", self._url(), json=payload)
        # Creation responses may omit the amount echo
        data.setdefault("order_id", order_id)
        data.setdefault("order_amount", amount)
        data.setdefault("customer_details", payload["customer_details"])
        return self._to_order(data)

    def fetch_order(self, order_id: str) -> GatewayOrder:
        data = self._send("GET", self._url(order_id))
        data.setdefault("order_id", order_id)
        return self._to_order(data)
