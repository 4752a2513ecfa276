# backend/boutique/routes/system.py
"""
System health endpoint.

Reports database connectivity and the size of each persisted record so
deployments can confirm the engine's state is reachable.
"""

import time
from flask import Blueprint, current_app
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..models import KeyValueRecord
from ..time_utils import to_utc_z, utcnow

system_bp = Blueprint("system", __name__)


def check_database_health() -> dict:
    start_time = time.time()
    try:
        record_count = db.session.query(KeyValueRecord).count()
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy",
            "response_time_ms": round(elapsed_ms, 2),
            "records": record_count,
        }
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.warning("Database health check failed: %s", e)
        return {"status": "unhealthy", "error": str(e)}


@system_bp.get("/api/health")
def health():
    database = check_database_health()
    status_code = 200 if database["status"] == "healthy" else 503
    return {
        "status": database["status"],
        "checked_at": to_utc_z(utcnow()),
        "database": database,
    }, status_code
