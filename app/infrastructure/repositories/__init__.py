"""Repository implementations for infrastructure layer."""

from .event_repository import EventRepository
from .notification_repository import NotificationRepository
from .recipient_entry_repository import RecipientEntryRepository
from .user_repository import UserRepository

__all__ = [
    "EventRepository",
    "NotificationRepository",
    "RecipientEntryRepository",
    "UserRepository",
]
