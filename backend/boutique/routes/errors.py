# Overview: Maps engine errors and command results onto JSON responses.

from flask import current_app, jsonify

from ..errors import PosError
from ..services.results import CommandResult


def error_response(error: PosError):
    return jsonify(error.to_dict()), error.http_status


def result_response(result: CommandResult, success_status: int = 200):
    if not result.ok:
        return error_response(result.error)
    value = result.value
    if hasattr(value, "to_dict"):
        value = value.to_dict()
    return jsonify(value), success_status


def register_error_handlers(app):
    @app.errorhandler(PosError)
    def handle_pos_error(exc: PosError):
        return error_response(exc)

    @app.errorhandler(500)
    def handle_internal_error(exc):
        current_app.logger.error("Unhandled error: %s", getattr(exc, "original_exception", exc))
        return jsonify({"error": "Internal server error"}), 500
