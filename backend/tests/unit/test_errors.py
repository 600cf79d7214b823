"""Unit tests for the service-error to HTTP translation."""

from __future__ import annotations

import pytest
from storefront.core.errors import first_message, translate_service_error
from storefront.services._shared import errors as svc


@pytest.mark.parametrize(
    ("exc", "status", "code"),
    [
        (svc.ExpiredTokenError("expired"), 401, "token_expired"),
        (svc.MissingTokenError("missing"), 401, "token_missing"),
        (svc.ForbiddenError("no"), 403, "forbidden"),
        (svc.NotFoundError("Product", 1), 404, "not_found"),
        (svc.ConflictError("Order", "dup"), 409, "conflict"),
        (svc.StoreUnavailableError("redis down"), 503, "service_unavailable"),
        (svc.ValidationError("bad"), 400, "validation_error"),
        (svc.ServiceError("Invalid credentials"), 400, "bad_request"),
    ],
)
def test_status_and_code(exc, status, code):
    api_err = translate_service_error(exc)

    assert api_err.status_code == status
    assert api_err.code == code


def test_store_outage_hides_cause():
    api_err = translate_service_error(svc.StoreUnavailableError("redis://10.0.0.3 timed out"))

    assert api_err.message == "Service temporarily unavailable"


def test_payment_declined_exposes_status():
    api_err = translate_service_error(
        svc.PaymentDeclinedError("Payment expired. Please try again.", status="EXPIRED")
    )

    assert api_err.status_code == 400
    assert api_err.details == {"status": "EXPIRED"}


def test_first_message_walks_nested_errors():
    assert first_message({"quantity": ["Must be positive"]}) == "Must be positive"
    assert first_message({"items": {0: {"id": ["Missing"]}}}) == "Missing"
    assert first_message({}) is None
