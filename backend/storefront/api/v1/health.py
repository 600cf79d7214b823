"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from storefront.api.deps import json_response, timing
from storefront.core.extensions import db, get_session_cache

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application, database and session cache health information."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"
    cache_status = "ok" if get_session_cache().ping() else "fail"
    version = current_app.config.get("APP_VERSION", "dev")
    commit = current_app.config.get("APP_COMMIT", "unknown")
    status = "ok" if db_status == cache_status == "ok" else "degraded"
    payload = {
        "status": status,
        "db": db_status,
        "cache": cache_status,
        "version": version,
        "commit": commit,
    }
    return json_response(payload, status=200 if status == "ok" else 503)
