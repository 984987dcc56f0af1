from .notification import (
    NotificationBroadcastRequest,
    NotificationBroadcastResponse,
    NotificationDismissResponse,
    NotificationFeedItemRead,
    NotificationFeedRead,
    NotificationMarkReadResponse,
    NotificationPurgeResponse,
    NotificationUnreadCountRead,
)

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
