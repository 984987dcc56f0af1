"""Domain entity for the delivery state of a notification to one recipient."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class RecipientEntry:
    """Ledger row linking a recipient to a :class:`Notification`."""

    id: int | None
    recipient_id: int
    notification_id: int
    is_read: bool = False
    seen_at: datetime | None = None


__all__ = ["RecipientEntry"]
