from flask import current_app

from ..extensions import db
from .pos_service import PointOfSale
from .storage_service import SqlKeyValueStore

EXTENSION_KEY = "boutique.pos"


def get_pos() -> PointOfSale:
    """
    The application's single PointOfSale instance, built on first use from
    the app config over the kv_records table.
    """
    pos = current_app.extensions.get(EXTENSION_KEY)
    if pos is None:
        pos = PointOfSale.from_config(current_app.config, SqlKeyValueStore(db.session))
        current_app.extensions[EXTENSION_KEY] = pos
    return pos


def reset_pos() -> None:
    """Drop the cached instance so the next get_pos() reloads from storage."""
    current_app.extensions.pop(EXTENSION_KEY, None)
