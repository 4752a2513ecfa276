# backend/boutique/config.py
from __future__ import annotations
import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored next to the instance by default
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///boutique.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Stock alerts fire when 0 < stock <= LOW_STOCK_THRESHOLD
    LOW_STOCK_THRESHOLD = int(os.environ.get("LOW_STOCK_THRESHOLD", "10"))
    STOCK_BAR_MAX = int(os.environ.get("STOCK_BAR_MAX", "100"))

    TOP_SELLERS_LIMIT = int(os.environ.get("TOP_SELLERS_LIMIT", "5"))
    REVENUE_WINDOW_DAYS = int(os.environ.get("REVENUE_WINDOW_DAYS", "7"))
    DASHBOARD_LOCALE = os.environ.get("DASHBOARD_LOCALE", "fr")
    STORE_TIMEZONE = os.environ.get("STORE_TIMEZONE", "UTC")

    DEFAULT_NOTIFICATION_EMAIL = os.environ.get("DEFAULT_NOTIFICATION_EMAIL", "admin@example.com")
    SEED_CATALOG_ON_EMPTY = _env_bool("SEED_CATALOG_ON_EMPTY", True)
