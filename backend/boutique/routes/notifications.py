# Overview: Flask API routes for the notification log.

from flask import Blueprint, request, jsonify

from ..errors import ValidationError
from ..models.notifications import VALID_NOTIFICATION_TYPES
from ..services import get_pos

notifications_bp = Blueprint("notifications", __name__, url_prefix="/api/notifications")


@notifications_bp.get("")
def list_notifications_route():
    """
    Query params:
    - type: info | warning | error | success (optional)
    - limit: int (optional)
    """
    kind = request.args.get("type")
    if kind is not None and kind not in VALID_NOTIFICATION_TYPES:
        raise ValidationError("type must be info, warning, error, or success")
    limit = request.args.get("limit", type=int)

    items = get_pos().list_notifications(type=kind, limit=limit)
    return jsonify({"items": [n.to_dict() for n in items], "count": len(items)})
