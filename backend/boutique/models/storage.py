from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z


class KeyValueRecord(db.Model):
    """
    One named JSON document of application state.

    Categories, products, sales, notifications and settings each live in a
    single row and are rewritten wholesale on every change.
    """
    __tablename__ = "kv_records"

    key = db.Column(db.String(128), primary_key=True)
    value_json = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())

    def to_dict(self):
        return {
            "key": self.key,
            "value_json": self.value_json,
            "updated_at": to_utc_z(self.updated_at),
        }
