"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class NotificationBroadcastRequest(BaseModel):
    """Content of a notification sent to every user.

    Title and message default to empty strings so that missing values are
    reported by the broadcast use case with a 400 response.
    """

    title: str = Field(default="", description="Short headline")
    message: str = Field(default="", description="Body text")
    link: str | None = Field(
        default=None,
        description="Optional deep link such as /events/42",
    )


class NotificationBroadcastResponse(BaseModel):
    success: bool = True
    notification_id: int


class NotificationFeedItemRead(BaseModel):
    """A notification as delivered to one recipient."""

    id: int
    notification_id: int
    entry_id: int
    title: str
    message: str
    link: str | None = None
    created_at: datetime | None = None
    is_read: bool
    seen_at: datetime | None = None


class NotificationFeedRead(BaseModel):
    items: list[NotificationFeedItemRead] = Field(default_factory=list)
    unread_count: int = 0


class NotificationUnreadCountRead(BaseModel):
    unread_count: int = 0


class NotificationMarkReadResponse(BaseModel):
    success: bool = True


class NotificationDismissResponse(BaseModel):
    success: bool = True
    removed: int = Field(default=0, ge=0, le=1)


class NotificationPurgeResponse(BaseModel):
    success: bool = True
    removed: int = Field(default=0, ge=0)


__all__ = [
    "NotificationBroadcastRequest",
    "NotificationBroadcastResponse",
    "NotificationDismissResponse",
    "NotificationFeedItemRead",
    "NotificationFeedRead",
    "NotificationMarkReadResponse",
    "NotificationPurgeResponse",
    "NotificationUnreadCountRead",
]
