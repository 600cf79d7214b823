"""
CatalogService
==============

Product listings for shoppers and product management for admins. The
featured listing is cached in the session cache under a single key and
rebuilt whenever the featured flag of a product changes.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict

from storefront.models.product import Product
from storefront.services._shared.base import BaseService, ServiceContext
from storefront.services._shared.dto import PageMeta
from storefront.services._shared.errors import (
    NotFoundError,
    ServiceError,
    StoreUnavailableError,
    ValidationError,
)
from storefront.services._shared.ports.image_store import ImageStore
from storefront.services._shared.ports.session_cache import SessionCache
from storefront.services.catalog.dto import ProductCreateIn, ProductListOut, ProductOut

log = logging.getLogger(__name__)

FEATURED_CACHE_KEY = "featured_products"
RECOMMENDATION_SIZE = 4


class CatalogService(BaseService):
    """
    Application service for the product catalog.

    :param session_cache: Cache holding the serialized featured listing.
    :param image_store: Image hosting port used on create/delete.
    :param featured_key: Cache key of the featured listing.
    """

    def __init__(
        self,
        *,
        session_cache: SessionCache,
        image_store: ImageStore,
        featured_key: str = FEATURED_CACHE_KEY,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.cache = session_cache
        self.images = image_store
        self.featured_key = featured_key

    # ------------------------------------------------------------------ #
    # Admin
    # ------------------------------------------------------------------ #

    def list_products(self, *, page: int = 1, limit: int = 100) -> ProductListOut:
        """Paginated listing of every product, newest last."""
        pagination = self.ensure_pagination(page=page, limit=limit, sort=["created_at"])
        with self.ro_uow() as uow:
            result = uow.products.paginate(pagination)
            items = [ProductOut.from_model(p) for p in result.items]
        return ProductListOut(
            items=items,
            meta=PageMeta.build(page=result.page, limit=result.limit, total=result.total),
        )

    def create_product(self, dto: ProductCreateIn) -> ProductOut:
        """
        Create a product, uploading its image first.

        :raises ValidationError: Missing fields or negative price.
        """
        if not dto.name or not dto.description or not dto.category:
            raise ValidationError("Missing required product fields")
        image_url = self.images.upload(dto.image, folder="products") if dto.image else ""
        with self.rw_uow() as uow:
            try:
                product = Product(
                    name=dto.name.strip(),
                    description=dto.description,
                    price=dto.price,
                    category=dto.category,
                    image=image_url,
                    is_featured=False,
                )
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            out = ProductOut.from_model(uow.products.add(product))
        log.info("Product created: id=%s", out.id)
        return out

    def delete_product(self, product_id: int) -> None:
        """
        Delete a product and, best-effort, its hosted image.

        :raises NotFoundError: Unknown product.
        """
        with self.rw_uow() as uow:
            product = uow.products.get(product_id)
            if product is None:
                raise NotFoundError("Product", product_id, "Product not found")
            image, was_featured = product.image, product.is_featured
            uow.products.delete(product)

        if image:
            try:
                self.images.destroy(image)
            except ServiceError:
                log.warning("Image not destroyed for product id=%s", product_id, exc_info=True)
        if was_featured:
            self.refresh_featured_cache()

    def toggle_featured(self, product_id: int) -> ProductOut:
        """
        Flip ``is_featured`` and rebuild the featured cache.

        :raises NotFoundError: Unknown product.
        """
        with self.rw_uow() as uow:
            product = uow.products.get(product_id)
            if product is None:
                raise NotFoundError("Product", product_id, "Product not found")
            product.is_featured = not product.is_featured
            uow.products.flush()
            out = ProductOut.from_model(product)
        self.refresh_featured_cache()
        return out

    def refresh_featured_cache(self) -> None:
        """Rewrite the featured listing in the cache. Cache outages are logged only."""
        with self.ro_uow() as uow:
            items = [ProductOut.from_model(p) for p in uow.products.list_featured()]
        try:
            self.cache.set(self.featured_key, self._dump(items))
        except StoreUnavailableError:
            log.warning("Featured cache not refreshed", extra={"reason": "cache_unavailable"})

    # ------------------------------------------------------------------ #
    # Public
    # ------------------------------------------------------------------ #

    def featured(self) -> list[ProductOut]:
        """
        Featured products, served from the cache when present.

        Falls back to the database on a cache miss or outage.

        :raises NotFoundError: No product is featured.
        """
        cached = None
        try:
            cached = self.cache.get(self.featured_key)
        except StoreUnavailableError:
            log.warning("Featured cache unavailable", extra={"reason": "cache_unavailable"})
        if cached:
            items = [ProductOut.from_dict(d) for d in json.loads(cached)]
            if items:
                return items

        with self.ro_uow() as uow:
            items = [ProductOut.from_model(p) for p in uow.products.list_featured()]
        if not items:
            raise NotFoundError("Product", "featured", "No featured products found")
        try:
            self.cache.set(self.featured_key, self._dump(items))
        except StoreUnavailableError:
            log.warning("Featured cache not written", extra={"reason": "cache_unavailable"})
        return items

    def by_category(self, category: str) -> list[ProductOut]:
        """:raises NotFoundError: When the category has no products."""
        with self.ro_uow() as uow:
            items = [ProductOut.from_model(p) for p in uow.products.list_by_category(category)]
        if not items:
            raise NotFoundError(
                "Product", category, f"No products found for category: {category}"
            )
        return items

    def recommendations(self, size: int = RECOMMENDATION_SIZE) -> list[ProductOut]:
        """Up to ``size`` random products (may be empty)."""
        with self.ro_uow() as uow:
            return [ProductOut.from_model(p) for p in uow.products.sample(size)]

    @staticmethod
    def _dump(items: list[ProductOut]) -> str:
        return json.dumps([asdict(i) for i in items])
