from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..time_utils import parse_iso_datetime, to_utc_z

TYPE_INFO = "info"
TYPE_WARNING = "warning"
TYPE_ERROR = "error"
TYPE_SUCCESS = "success"
VALID_NOTIFICATION_TYPES = {TYPE_INFO, TYPE_WARNING, TYPE_ERROR, TYPE_SUCCESS}

# Alert kinds that are mirrored to the notification email
EMAIL_TYPES = {TYPE_WARNING, TYPE_ERROR}


@dataclass(frozen=True)
class Notification:
    id: str
    message: str
    type: str
    timestamp: datetime

    def to_dict(self):
        return {
            "id": self.id,
            "message": self.message,
            "type": self.type,
            "timestamp": to_utc_z(self.timestamp),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Notification":
        kind = data["type"]
        if kind not in VALID_NOTIFICATION_TYPES:
            raise ValueError(f"unknown notification type {kind!r}")
        ts = parse_iso_datetime(data["timestamp"])
        if ts is None:
            raise ValueError("timestamp is required")
        return cls(id=str(data["id"]), message=str(data["message"]), type=kind, timestamp=ts)
