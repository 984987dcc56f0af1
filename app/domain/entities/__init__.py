"""Domain entities exposed by the application."""

from .event import Event
from .feed import Feed, FeedItem
from .notification import Notification
from .recipient_entry import RecipientEntry

__all__ = [
    "Event",
    "Feed",
    "FeedItem",
    "Notification",
    "RecipientEntry",
]
