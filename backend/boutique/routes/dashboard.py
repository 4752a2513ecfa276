from flask import Blueprint, jsonify

from ..services import get_pos
from ..services.reporting_service import ReportError


dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.get("")
def dashboard():
    try:
        return jsonify(get_pos().dashboard()), 200
    except ReportError as exc:
        return jsonify({"error": str(exc)}), 400


@dashboard_bp.get("/summary")
def summary():
    return jsonify(get_pos().totals()), 200


@dashboard_bp.get("/stock")
def stock():
    return jsonify(get_pos().stock_buckets()), 200


@dashboard_bp.get("/top-sellers")
def top_sellers():
    return jsonify({"items": get_pos().top_sellers()}), 200


@dashboard_bp.get("/revenue")
def revenue():
    try:
        return jsonify({"items": get_pos().daily_revenue()}), 200
    except ReportError as exc:
        return jsonify({"error": str(exc)}), 400
