# Overview: Flask API routes for category operations; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify

from ..services import get_pos
from .errors import result_response

categories_bp = Blueprint("categories", __name__, url_prefix="/api/categories")


@categories_bp.get("")
def list_categories():
    pos = get_pos()
    items = []
    for category in pos.list_categories():
        row = category.to_dict()
        row["productCount"] = len(pos.catalog.products_in_category(category.id))
        items.append(row)
    return jsonify({"items": items, "count": len(items)})


@categories_bp.post("")
def create_category_route():
    payload = request.get_json(silent=True) or {}
    icon = payload.get("icon") or ""
    return result_response(get_pos().add_category(payload.get("name"), str(icon)), 201)


@categories_bp.delete("/<category_id>")
def delete_category_route(category_id: str):
    """
    Delete a category. Refused with 409 while products still reference it.
    """
    return result_response(get_pos().delete_category(category_id))
