"""
storefront.services._shared.ports
=================================

Collection of *ports* (hexagonal interfaces) that define the contracts
between the service layer and its external collaborators.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`: abstraction for JWT creation and decoding.

- :mod:`session_cache`:
    Defines :class:`~.SessionCache`: key/value store with per-key expiry
    holding the current refresh token of each identity.

- :mod:`image_store`:
    Defines :class:`~.ImageStore`: product image upload/destroy.

- :mod:`payment_gateway`:
    Defines :class:`~.PaymentGateway`: create and fetch gateway orders.

Design Notes
------------
Concrete adapters (Redis, Flask-JWT-Extended, HTTP gateways) implement these
interfaces under ``storefront.infra``. Each module also ships an in-process
implementation used by unit tests and single-worker development setups.
"""

from __future__ import annotations

from .image_store import ImageStore, PassthroughImageStore
from .payment_gateway import GatewayCustomer, GatewayOrder, PaymentGateway, StubPaymentGateway
from .session_cache import InMemorySessionCache, SessionCache
from .token_provider import StubTokenProvider, TokenProvider

__all__ = [
    "TokenProvider",
    "StubTokenProvider",
    "SessionCache",
    "InMemorySessionCache",
    "ImageStore",
    "PassthroughImageStore",
    "PaymentGateway",
    "GatewayCustomer",
    "GatewayOrder",
    "StubPaymentGateway",
]
