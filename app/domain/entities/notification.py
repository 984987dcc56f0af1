"""Domain entity representing broadcast notification content."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Notification:
    """Information message shared by every recipient of a broadcast."""

    id: int | None
    title: str
    message: str
    link: str | None = None
    created_at: datetime | None = None


__all__ = ["Notification"]
