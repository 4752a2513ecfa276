# Overview: Flask API routes for products operations; parses input and returns JSON responses.

"""
Product management routes.

PUT is a full replace: every product field is required except totalSales,
which defaults to the stored value.
"""
from flask import Blueprint, request, jsonify

from ..models import Product
from ..services import get_pos
from .errors import result_response

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


def _product_row(pos, product: Product) -> dict:
    row = product.to_dict()
    row["stockLevel"] = pos.stock_level(product)
    return row


@products_bp.get("")
def list_products():
    """
    Query params:
    - q: str (optional) - case-insensitive name filter
    - category_id: str (optional) - "all" or a category id
    """
    pos = get_pos()
    products = pos.list_products(
        search=request.args.get("q"),
        category_id=request.args.get("category_id"),
    )
    items = [_product_row(pos, p) for p in products]
    return jsonify({"items": items, "count": len(items)})


@products_bp.get("/sellable")
def list_sellable_products():
    pos = get_pos()
    items = [_product_row(pos, p) for p in pos.list_sellable_products()]
    return jsonify({"items": items, "count": len(items)})


@products_bp.get("/<product_id>")
def get_product(product_id: str):
    pos = get_pos()
    return jsonify(_product_row(pos, pos.get_product(product_id)))


@products_bp.post("")
def create_product_route():
    payload = request.get_json(silent=True) or {}
    return result_response(get_pos().add_product_from_payload(payload), 201)


@products_bp.put("/<product_id>")
def update_product_route(product_id: str):
    payload = request.get_json(silent=True) or {}
    return result_response(get_pos().update_product_from_payload(product_id, payload))


@products_bp.delete("/<product_id>")
def delete_product_route(product_id: str):
    return result_response(get_pos().delete_product(product_id))
