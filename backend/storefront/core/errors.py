"""RFC 7807 problem responses for every error leaving the API.

Problem body::

    {
      "type": "about:blank",
      "title": "Unauthorized",
      "status": 401,
      "detail": "Unauthorized - Access token expired",
      "instance": "/api/v1/auth/profile",
      "code": "token_expired",
      "request_id": "…",
      "details": {...}          # only when there is something to add
    }

``code`` is the stable field clients branch on; ``detail`` is the
human-readable message. Service-layer exceptions are mapped through
:data:`SERVICE_STATUS`; anything unexpected becomes an opaque 500.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from storefront.core.logger import ensure_request_id
from storefront.services._shared import errors as svc

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"

# Most specific first: lookups walk the exception's MRO.
SERVICE_STATUS: dict[type[svc.ServiceError], HTTPStatus] = {
    svc.UnauthorizedError: HTTPStatus.UNAUTHORIZED,
    svc.ForbiddenError: HTTPStatus.FORBIDDEN,
    svc.NotFoundError: HTTPStatus.NOT_FOUND,
    svc.ConflictError: HTTPStatus.CONFLICT,
    svc.StoreUnavailableError: HTTPStatus.SERVICE_UNAVAILABLE,
    svc.PaymentDeclinedError: HTTPStatus.BAD_REQUEST,
    svc.ServiceError: HTTPStatus.BAD_REQUEST,
}

# Codes for errors that do not carry their own.
STATUS_CODES = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    413: "payload_too_large",
    415: "unsupported_media_type",
    500: "internal_server_error",
    503: "service_unavailable",
}


class APIError(Exception):
    """
    An error already shaped for HTTP.

    :param message: Client-safe description (becomes ``detail``).
    :param status_code: HTTP status.
    :param code: Machine-readable identifier.
    :param details: Optional structured extras.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code or STATUS_CODES.get(self.status_code, "error")
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return problem(
            status=self.status_code,
            code=self.code,
            message=self.message,
            details=self.details or None,
        )


def problem(
    *, status: int, code: str, message: str, details: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Build a problem document for the current request."""
    doc: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": int(status),
        "detail": message,
        "instance": request.path,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        doc["details"] = details
    return doc


def problem_response(doc: dict[str, Any]) -> tuple[Response, int]:
    resp = jsonify(doc)
    resp.mimetype = PROBLEM_MIMETYPE
    return resp, doc["status"]


def first_message(messages: Any) -> str | None:
    """Depth-first search for the first string in a marshmallow error tree."""
    if isinstance(messages, str):
        return messages
    if isinstance(messages, dict):
        messages = list(messages.values())
    if isinstance(messages, list | tuple):
        for value in messages:
            found = first_message(value)
            if found:
                return found
    return None


def translate_service_error(exc: svc.ServiceError) -> APIError:
    """
    Map a service-layer exception onto an :class:`APIError`.

    401 keeps the exception's own code (``token_missing``, ``token_expired``
    ...) so clients can tell "refresh and retry" from "log in again". A
    declined payment exposes the gateway status under ``details``. Store
    outages never leak their cause.
    """
    status = next(
        SERVICE_STATUS[cls] for cls in type(exc).__mro__ if cls in SERVICE_STATUS
    )
    if isinstance(exc, svc.StoreUnavailableError):
        return APIError("Service temporarily unavailable", status, exc.code)
    if isinstance(exc, svc.PaymentDeclinedError):
        return APIError(str(exc), status, exc.code, details={"status": exc.status})
    if isinstance(exc, svc.NotFoundError | svc.ConflictError | svc.ForbiddenError):
        return APIError(str(exc), status)
    return APIError(str(exc) or HTTPStatus(status).phrase, status, exc.code)


def init_app(app: Flask) -> None:
    """
    Register the problem handlers on ``app``.

    4xx are logged as warnings; 5xx as errors with the traceback.
    """

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        doc = err.to_problem()
        if err.status_code >= 500:
            log.error("%s: %s", err.code, err.message, exc_info=err.__cause__ is not None)
        else:
            log.warning("%s: %s", err.code, err.message, extra={"reason": err.code})
        return problem_response(doc)

    @app.errorhandler(svc.ServiceError)
    def handle_service_error(err: svc.ServiceError):
        api_err = translate_service_error(err)
        api_err.__cause__ = err
        return handle_api_error(api_err)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        api_err = APIError(
            first_message(err.messages) or "Validation failed",
            HTTPStatus.BAD_REQUEST,
            "validation_error",
            details={"errors": err.messages},
        )
        return handle_api_error(api_err)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or HTTPStatus(status).phrase).strip()
        return handle_api_error(APIError(message, status))

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        log.error("Unhandled integrity error", exc_info=True)
        return problem_response(
            problem(status=HTTPStatus.CONFLICT, code="conflict", message="Resource conflict")
        )

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        log.error("Database unavailable", exc_info=True)
        return problem_response(
            problem(
                status=HTTPStatus.SERVICE_UNAVAILABLE,
                code="service_unavailable",
                message="Service temporarily unavailable",
            )
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        log.error("Unhandled exception", exc_info=True)
        return problem_response(
            problem(
                status=HTTPStatus.INTERNAL_SERVER_ERROR,
                code="internal_server_error",
                message="Unexpected error",
            )
        )
