"""Use cases for broadcasting notifications and managing recipient feeds."""

from .broadcast import broadcast_notification
from .cleanup import purge_notifications_for_links, purge_notifications_for_resource
from .errors import (
    InvalidNotificationError,
    MissingRecipientError,
    NotificationStoreError,
    ResourceNotFoundError,
)
from .events import announce_event, compose_event_announcement
from .feed import count_unread, get_feed
from .read_state import dismiss, mark_read

__all__ = [
    "broadcast_notification",
    "announce_event",
    "compose_event_announcement",
    "get_feed",
    "count_unread",
    "mark_read",
    "dismiss",
    "purge_notifications_for_links",
    "purge_notifications_for_resource",
    "InvalidNotificationError",
    "MissingRecipientError",
    "NotificationStoreError",
    "ResourceNotFoundError",
]
