# Overview: Flask API routes for application settings.

from flask import Blueprint, request

from ..services import get_pos
from .errors import result_response

settings_bp = Blueprint("settings", __name__, url_prefix="/api/settings")


@settings_bp.get("")
def get_settings_route():
    return get_pos().get_settings().to_dict()


@settings_bp.put("")
def update_settings_route():
    payload = request.get_json(silent=True) or {}
    email = payload.get("notificationEmail", payload.get("notification_email"))
    return result_response(get_pos().update_settings(email))
