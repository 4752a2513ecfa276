from __future__ import annotations

import re
from typing import Any

from .errors import ValidationError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# Maximum price accepted for a product (sale or purchase)
MAX_PRICE = 999_999_999


def require_name(value: Any, field: str = "name") -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required", details={"field": field})
    return value.strip()


def coerce_int(value: Any, field: str) -> int:
    """
    Strict integer coercion: ints and plain digit strings only.
    Floats, booleans and scientific notation are rejected.
    """
    # Already an int (but not bool which is a subclass of int)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValidationError(f"{field} must be an integer", details={"field": field})
        # Reject scientific notation (e.g., "1e15", "1E10")
        if "e" in stripped.lower():
            raise ValidationError(f"{field} must be a plain integer (scientific notation not allowed)", details={"field": field})
        # Reject decimal points (e.g., "12.5")
        if "." in stripped:
            raise ValidationError(f"{field} must be an integer (no decimals)", details={"field": field})
        try:
            return int(stripped)
        except ValueError:
            raise ValidationError(f"{field} must be an integer", details={"field": field})
    if isinstance(value, float):
        raise ValidationError(f"{field} must be an integer, not a decimal", details={"field": field})
    raise ValidationError(f"{field} must be an integer", details={"field": field})


def require_non_negative_int(value: Any, field: str) -> int:
    n = coerce_int(value, field)
    if n < 0:
        raise ValidationError(f"{field} must be >= 0", details={"field": field})
    return n


def require_positive_int(value: Any, field: str) -> int:
    n = coerce_int(value, field)
    if n < 1:
        raise ValidationError(f"{field} must be >= 1", details={"field": field})
    return n


def require_price(value: Any, field: str) -> float | int:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", details={"field": field})
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ValidationError(f"{field} must be a number", details={"field": field})
    if not isinstance(value, (int, float)) or value != value:
        raise ValidationError(f"{field} must be a number", details={"field": field})
    if value < 0:
        raise ValidationError(f"{field} must be >= 0", details={"field": field})
    if value > MAX_PRICE:
        raise ValidationError(f"{field} exceeds maximum allowed ({MAX_PRICE})", details={"field": field})
    return value


def require_email_or_blank(value: Any, field: str = "notificationEmail") -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string", details={"field": field})
    email = value.strip()
    if email and not EMAIL_RE.match(email):
        raise ValidationError(f"{field} must be a valid email address", details={"field": field})
    return email


def product_fields_from_payload(payload: dict, *, partial: bool = False) -> dict:
    """
    Validate a product JSON payload (camelCase or snake_case keys) into
    keyword arguments for the catalog. With partial=True missing keys are
    skipped; otherwise all of them are required.
    """
    aliases = {
        "name": ("name",),
        "category_id": ("categoryId", "category_id"),
        "stock": ("stock",),
        "sale_price": ("salePrice", "sale_price"),
        "purchase_price": ("purchasePrice", "purchase_price"),
    }
    checks = {
        "name": lambda v: require_name(v, "name"),
        "category_id": lambda v: require_name(v, "categoryId"),
        "stock": lambda v: require_non_negative_int(v, "stock"),
        "sale_price": lambda v: require_price(v, "salePrice"),
        "purchase_price": lambda v: require_price(v, "purchasePrice"),
    }

    fields: dict = {}
    missing = []
    for name, keys in aliases.items():
        key = next((k for k in keys if k in payload), None)
        if key is None:
            if not partial:
                missing.append(keys[0])
            continue
        fields[name] = checks[name](payload[key])

    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", details={"missing": missing})
    return fields
