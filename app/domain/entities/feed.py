"""Entities describing a recipient's notification feed."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class FeedItem:
    """A notification as seen by one recipient.

    ``id`` is the notification identifier clients use for read and dismiss
    calls; ``entry_id`` identifies the underlying ledger row.
    """

    id: int
    entry_id: int
    title: str
    message: str
    link: str | None
    created_at: datetime | None
    is_read: bool
    seen_at: datetime | None

    @property
    def notification_id(self) -> int:
        return self.id


@dataclass
class Feed:
    """Ordered notifications of a recipient plus their unread count."""

    items: list[FeedItem] = field(default_factory=list)
    stale_links: set[str] = field(default_factory=set)

    @property
    def unread_count(self) -> int:
        return sum(1 for item in self.items if not item.is_read)


__all__ = ["Feed", "FeedItem"]
