# Overview: Append-only alert log with simulated email mirroring for warnings and errors.

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Callable, Iterable

from ..errors import ValidationError
from ..identifiers import new_id
from ..models import AppSettings, Notification
from ..models.notifications import EMAIL_TYPES, TYPE_INFO, VALID_NOTIFICATION_TYPES
from ..time_utils import utcnow

logger = logging.getLogger(__name__)

# Serialized timestamps keep millisecond precision
_TICK = timedelta(milliseconds=1)


def email_message(address: str, message: str) -> str:
    return f"[Simulated email] Sent to {address}: {message}"


class AlertDispatcher:
    """
    Notifications are kept most-recent-first and never removed.

    Every warning/error alert is followed by exactly one synthetic info alert
    when a notification email is configured at the time of emission.
    """

    def __init__(
        self,
        notifications: Iterable[Notification] = (),
        *,
        settings_provider: Callable[[], AppSettings] = AppSettings,
        clock: Callable = utcnow,
        id_factory: Callable[[], str] = new_id,
    ):
        self._notifications: list[Notification] = list(notifications)
        self._settings = settings_provider
        self._clock = clock
        self._new_id = id_factory

    @property
    def notifications(self) -> list[Notification]:
        return list(self._notifications)

    def emit(self, message: str, type: str) -> list[Notification]:
        """Record an alert; returns it plus its email mirror, in emission order."""
        if type not in VALID_NOTIFICATION_TYPES:
            raise ValidationError(f"Unknown notification type: {type}", details={"type": type})

        alert = Notification(id=self._new_id(), message=message, type=type, timestamp=self._clock())
        self._notifications.insert(0, alert)
        emitted = [alert]

        address = self._settings().notification_email
        if address and type in EMAIL_TYPES:
            sent_at = max(self._clock(), alert.timestamp + _TICK)
            mirror = Notification(
                id=self._new_id(),
                message=email_message(address, message),
                type=TYPE_INFO,
                timestamp=sent_at,
            )
            self._notifications.insert(0, mirror)
            emitted.append(mirror)
            logger.info("Simulated email to %s: %s", address, message)

        return emitted

    def query(self, type: str | None = None, limit: int | None = None) -> list[Notification]:
        items = [n for n in self._notifications if type is None or n.type == type]
        if limit is not None:
            items = items[:max(limit, 0)]
        return items
