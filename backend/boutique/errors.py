"""
Error taxonomy for the point-of-sale engine.

Components raise these; the engine facade folds them into CommandResult
values and the HTTP layer maps `http_status` onto responses.
"""
from __future__ import annotations


class PosError(Exception):
    """Base class for every engine-level failure."""

    code = "pos_error"
    http_status = 400

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code, "details": self.details}


class ValidationError(PosError, ValueError):
    """400-level input problem (bad shape, non-positive quantity...)."""

    code = "validation_error"
    http_status = 400


class NotFoundError(PosError, LookupError):
    code = "not_found"
    http_status = 404


class UnknownCategoryError(NotFoundError):
    """A product referenced a category id that does not exist."""

    code = "unknown_category"


class InsufficientStockError(PosError):
    code = "insufficient_stock"
    http_status = 409


class CategoryInUseError(PosError):
    """409-level conflict: the category still has products."""

    code = "category_in_use"
    http_status = 409


class PersistenceError(PosError):
    """The key-value store could not durably save a record."""

    code = "persistence_error"
    http_status = 503
