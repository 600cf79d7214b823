"""Product endpoints: public listings and admin management."""

from __future__ import annotations

from flask import Blueprint

from storefront.api.deps import (
    get_catalog_service,
    json_body,
    json_response,
    parse_pagination,
    timing,
)
from storefront.api.gate import admin_only
from storefront.schemas import MetaSchema, ProductCreateSchema, ProductSchema
from storefront.services import ProductCreateIn

bp = Blueprint("products", __name__, url_prefix="/products")

product_schema = ProductSchema()
product_list_schema = ProductSchema(many=True)
product_create_schema = ProductCreateSchema()
meta_schema = MetaSchema()


@bp.get("")
@admin_only
@timing
def list_products():
    """Return every product, paginated (admin)."""

    pagination = parse_pagination(default_limit=100)
    result = get_catalog_service().list_products(page=pagination.page, limit=pagination.limit)
    return json_response(
        {"data": product_list_schema.dump(result.items), "meta": meta_schema.dump(result.meta)}
    )


@bp.post("")
@admin_only
@timing
def create_product():
    """Create a product (admin)."""

    payload = product_create_schema.load(json_body())
    product = get_catalog_service().create_product(ProductCreateIn(**payload))
    return json_response({"data": product_schema.dump(product)}, status=201)


@bp.delete("/<int:product_id>")
@admin_only
@timing
def delete_product(product_id: int):
    """Delete a product and its image (admin)."""

    get_catalog_service().delete_product(product_id)
    return json_response({"message": "Product deleted successfully"})


@bp.patch("/<int:product_id>")
@admin_only
@timing
def toggle_featured(product_id: int):
    """Flip the featured flag of a product (admin)."""

    product = get_catalog_service().toggle_featured(product_id)
    return json_response({"data": product_schema.dump(product)})


@bp.get("/featured")
@timing
def featured():
    return json_response({"data": product_list_schema.dump(get_catalog_service().featured())})


@bp.get("/category/<string:category>")
@timing
def by_category(category: str):
    items = get_catalog_service().by_category(category)
    return json_response({"data": product_list_schema.dump(items)})


@bp.get("/recommendations")
@timing
def recommendations():
    items = get_catalog_service().recommendations()
    return json_response({"data": product_list_schema.dump(items)})
