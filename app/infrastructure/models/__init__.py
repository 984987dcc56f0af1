"""ORM models used by the application infrastructure."""

from .event import EventModel
from .notification import NotificationModel
from .recipient_entry import RecipientEntryModel
from .user import UserModel

__all__ = [
    "EventModel",
    "NotificationModel",
    "RecipientEntryModel",
    "UserModel",
]
