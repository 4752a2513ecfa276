# Overview: Flask API routes for sales operations; parses input and returns JSON responses.

# backend/boutique/routes/sales.py
"""Sales API routes"""

from flask import Blueprint, request, jsonify

from ..services import get_pos
from .errors import result_response


sales_bp = Blueprint("sales", __name__, url_prefix="/api/sales")


@sales_bp.get("")
def list_sales_route():
    """Sale history, most recent first. Optional `limit` query param."""
    limit = request.args.get("limit", type=int)
    sales = get_pos().list_sales(limit=limit)
    return jsonify({"items": [s.to_dict() for s in sales], "count": len(sales)})


@sales_bp.post("")
def record_sale_route():
    """
    Record a sale of `quantity` units of `product_id`.

    Rejections (unknown product, bad quantity, insufficient stock) are
    returned as 4xx and also appear in the notification log.
    """
    data = request.get_json(silent=True) or {}
    product_id = data.get("product_id", data.get("productId"))
    quantity = data.get("quantity")

    result = get_pos().record_sale(str(product_id) if product_id is not None else "", quantity)
    return result_response(result, 201)
