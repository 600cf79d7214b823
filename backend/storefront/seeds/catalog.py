"""Idempotent seed helpers for local development catalogs and operator accounts."""

from __future__ import annotations

import logging
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.models.product import Product
from storefront.models.user import Role, User

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

PRODUCT_FIXTURES: list[dict[str, Any]] = [
    {
        "name": "Classic Denim Jacket",
        "description": "Stonewashed denim jacket with a relaxed fit.",
        "price": 2499.0,
        "category": "jackets",
        "image": "https://images.example.com/products/denim-jacket.jpg",
        "is_featured": True,
    },
    {
        "name": "Leather Biker Jacket",
        "description": "Full-grain leather jacket with asymmetric zip.",
        "price": 5999.0,
        "category": "jackets",
        "image": "https://images.example.com/products/biker-jacket.jpg",
        "is_featured": False,
    },
    {
        "name": "Slim Fit Chinos",
        "description": "Stretch cotton chinos in olive.",
        "price": 1299.0,
        "category": "jeans",
        "image": "https://images.example.com/products/chinos.jpg",
        "is_featured": False,
    },
    {
        "name": "Raw Selvedge Jeans",
        "description": "Unwashed selvedge denim, straight leg.",
        "price": 3499.0,
        "category": "jeans",
        "image": "https://images.example.com/products/selvedge.jpg",
        "is_featured": True,
    },
    {
        "name": "White Canvas Sneakers",
        "description": "Low-top canvas sneakers with rubber sole.",
        "price": 1799.0,
        "category": "shoes",
        "image": "https://images.example.com/products/sneakers.jpg",
        "is_featured": True,
    },
    {
        "name": "Graphic Tee",
        "description": "Heavyweight cotton t-shirt with front print.",
        "price": 599.0,
        "category": "t-shirts",
        "image": "https://images.example.com/products/graphic-tee.jpg",
        "is_featured": False,
    },
    {
        "name": "Aviator Sunglasses",
        "description": "Polarized lenses, gold metal frame.",
        "price": 899.0,
        "category": "glasses",
        "image": "https://images.example.com/products/aviators.jpg",
        "is_featured": False,
    },
    {
        "name": "Wool Overcoat",
        "description": "Double-breasted overcoat in charcoal wool blend.",
        "price": 7999.0,
        "category": "suits",
        "image": "https://images.example.com/products/overcoat.jpg",
        "is_featured": False,
    },
    {
        "name": "Canvas Tote Bag",
        "description": "Everyday tote with inner pocket.",
        "price": 499.0,
        "category": "bags",
        "image": "https://images.example.com/products/tote.jpg",
        "is_featured": False,
    },
]


def _session(database: SQLAlchemy) -> Session:
    """Return the current SQLAlchemy session."""
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def _get_or_create(
    session: Session,
    model: type[T],
    *,
    defaults: dict[str, Any] | None = None,
    **filters: Any,
) -> tuple[T, bool]:
    """Fetch ``model`` by ``filters`` or create it using ``defaults``."""
    instance = session.execute(select(model).filter_by(**filters)).scalars().first()
    if instance is not None:
        return instance, False
    params = dict(defaults or {})
    params.update(filters)
    instance = cast(T, model(**params))
    session.add(instance)
    return instance, True


def seed_catalog(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create the demo product catalog. Products are matched by name."""
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    for fixture in PRODUCT_FIXTURES:
        defaults = {k: v for k, v in fixture.items() if k != "name"}
        _, created = _get_or_create(session, Product, name=fixture["name"], defaults=defaults)
        _touch(summary, "products", created)
        if verbose:
            LOGGER.info("Product %s: %s", "created" if created else "exists", fixture["name"])
    session.commit()
    return summary


def seed_admin(
    database: SQLAlchemy, *, email: str, name: str, password: str
) -> tuple[User, bool]:
    """Create an admin account or promote an existing one.

    Returns the user and whether it was newly created. The password of an
    existing account is replaced.
    """
    session = _session(database)
    user = session.execute(
        select(User).where(User.email == email.strip().lower())
    ).scalar_one_or_none()
    created = user is None
    if user is None:
        user = User(email=email, name=name, role=Role.ADMIN.value)
        session.add(user)
    else:
        user.role = Role.ADMIN.value
    user.password = password
    session.commit()
    LOGGER.info("Admin account %s", "created" if created else "promoted")
    return user, created


__all__ = ["seed_catalog", "seed_admin", "PRODUCT_FIXTURES"]
