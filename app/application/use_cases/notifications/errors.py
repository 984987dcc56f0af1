"""Exceptions raised by the notification use cases."""


class InvalidNotificationError(ValueError):
    """Raised when a broadcast is requested with missing or invalid content."""


class MissingRecipientError(PermissionError):
    """Raised when a scoped mutation is attempted without a recipient identity."""


class ResourceNotFoundError(LookupError):
    """Raised when the resource a notification should describe does not exist."""


class NotificationStoreError(RuntimeError):
    """Raised when the notification store cannot complete an operation."""


__all__ = [
    "InvalidNotificationError",
    "MissingRecipientError",
    "NotificationStoreError",
    "ResourceNotFoundError",
]
