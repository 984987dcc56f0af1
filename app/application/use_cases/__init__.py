"""Aggregate application use cases."""

from .notifications import broadcast_notification, dismiss, get_feed, mark_read

__all__ = [
    "broadcast_notification",
    "dismiss",
    "get_feed",
    "mark_read",
]
