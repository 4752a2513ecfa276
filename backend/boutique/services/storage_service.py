# Overview: Key-value persistence for engine state; one JSON document per record key.

from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from ..errors import PersistenceError
from ..models import KeyValueRecord

logger = logging.getLogger(__name__)

KEY_CATEGORIES = "pos-categories"
KEY_PRODUCTS = "pos-products"
KEY_SALES = "pos-sales"
KEY_NOTIFICATIONS = "pos-notifications"
KEY_SETTINGS = "pos-settings"
ALL_KEYS = (KEY_CATEGORIES, KEY_PRODUCTS, KEY_SALES, KEY_NOTIFICATIONS, KEY_SETTINGS)

_MISSING = object()


def _encode(key: str, value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise PersistenceError(f"Record {key} is not JSON serializable", details={"key": key}) from exc


class KeyValueStore:
    """
    load(key, default) never raises: a missing or unreadable record yields
    `default`. save(key, value) raises PersistenceError when the write fails.
    """

    def load(self, key: str, default: Any) -> Any:
        raw = self._read(key)
        if raw is _MISSING:
            return default
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Record %s is corrupt; falling back to defaults", key)
            return default

    def save(self, key: str, value: Any) -> None:
        self._write(key, _encode(key, value))

    def _read(self, key: str):
        raise NotImplementedError

    def _write(self, key: str, raw: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store holding JSON text, so values round-trip like the DB."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.records: dict[str, str] = dict(initial or {})

    def _read(self, key: str):
        return self.records.get(key, _MISSING)

    def _write(self, key: str, raw: str) -> None:
        self.records[key] = raw


class SqlKeyValueStore(KeyValueStore):
    """Store backed by the kv_records table through a SQLAlchemy session."""

    def __init__(self, session):
        self.session = session

    def _read(self, key: str):
        try:
            row = self.session.get(KeyValueRecord, key)
        except SQLAlchemyError:
            self.session.rollback()
            logger.warning("Could not read record %s; falling back to defaults", key, exc_info=True)
            return _MISSING
        if row is None:
            return _MISSING
        return row.value_json

    def _write(self, key: str, raw: str) -> None:
        try:
            row = self.session.get(KeyValueRecord, key)
            if row is None:
                self.session.add(KeyValueRecord(key=key, value_json=raw))
            else:
                row.value_json = raw
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError(f"Failed to save record {key}", details={"key": key}) from exc
