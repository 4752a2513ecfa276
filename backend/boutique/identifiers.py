from __future__ import annotations

import uuid


def new_id() -> str:
    """Opaque unique id for categories, products, sales and notifications."""
    return uuid.uuid4().hex
