"""Product repository: catalog listings and lookups."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, select

from storefront.models.product import Product
from storefront.repositories.base import BaseRepository


class ProductRepository(BaseRepository[Product]):
    """Persistence-only repository for :class:`Product`."""

    model = Product

    def _sortable_fields(self):
        return {
            "id": Product.id,
            "name": Product.name,
            "price": Product.price,
            "created_at": Product.created_at,
        }

    def _filterable_fields(self):
        return {"category": Product.category, "is_featured": Product.is_featured}

    def list_by_category(self, category: str) -> list[Product]:
        """Products of ``category`` (case-insensitive slug), oldest first."""
        return self.list(filters={"category": category.strip().lower()})

    def list_featured(self) -> list[Product]:
        return self.list(filters={"is_featured": True})

    def sample(self, size: int) -> list[Product]:
        """Return up to ``size`` products in random order."""
        stmt = select(Product).order_by(func.random()).limit(int(size))
        return list(self.session.execute(stmt).scalars().all())

    def get_many(self, ids: Iterable[int]) -> dict[int, Product]:
        """Map ``id -> Product`` for the given ids (missing ids are omitted)."""
        wanted = list(ids)
        if not wanted:
            return {}
        stmt = select(Product).where(Product.id.in_(wanted))
        return {p.id: p for p in self.session.execute(stmt).scalars().all()}
