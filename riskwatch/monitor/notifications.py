"""Notification read-state transitions and queries."""

from __future__ import annotations

import time
from collections.abc import Iterable

from riskwatch.core.types import Notification, NotificationStatus


def mark_read(notification: Notification, now: float | None = None) -> Notification:
    """Acknowledge *notification*: UNREAD → READ, stamping ``read_at``.

    Already-read notifications are returned unchanged; there is no way back
    to UNREAD.
    """
    if notification.status == NotificationStatus.READ:
        return notification
    return notification.model_copy(update={
        "status": NotificationStatus.READ,
        "read_at": time.time() if now is None else now,
    })


def unread_count(notifications: Iterable[Notification], recipient_id: str) -> int:
    return sum(
        1
        for n in notifications
        if n.recipient_id == recipient_id and n.status == NotificationStatus.UNREAD
    )
