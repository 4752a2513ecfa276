from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AppSettings:
    notification_email: str = ""

    def to_dict(self):
        return {"notificationEmail": self.notification_email}

    @classmethod
    def from_dict(cls, data: dict) -> "AppSettings":
        email = data.get("notificationEmail") or ""
        if not isinstance(email, str):
            raise ValueError("notificationEmail must be a string")
        return cls(notification_email=email.strip())
