# storefront/services/catalog/dto.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from storefront.models.product import Product
from storefront.services._shared.dto import PageMeta


@dataclass(frozen=True, slots=True)
class ProductCreateIn:
    """
    Input DTO for product creation.

    :param name: Display name.
    :param description: Description.
    :param price: Unit price (>= 0).
    :param category: Category slug.
    :param image: Image URL or data URI handed to the image store.
    """

    name: str
    description: str
    price: float
    category: str
    image: str | None = None


@dataclass(frozen=True, slots=True)
class ProductOut:
    """Public product projection."""

    id: int
    name: str
    description: str
    price: float
    image: str
    category: str
    is_featured: bool

    @classmethod
    def from_model(cls, product: Product) -> ProductOut:
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=float(product.price),
            image=product.image,
            category=product.category,
            is_featured=bool(product.is_featured),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProductOut:
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            description=str(data.get("description", "")),
            price=float(data["price"]),
            image=str(data.get("image", "")),
            category=str(data["category"]),
            is_featured=bool(data.get("is_featured", False)),
        )


@dataclass(frozen=True, slots=True)
class ProductListOut:
    """Paginated product listing."""

    items: list[ProductOut]
    meta: PageMeta
