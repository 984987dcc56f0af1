"""Read and dismiss operations scoped to a single recipient."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.infrastructure.repositories import RecipientEntryRepository

from .errors import MissingRecipientError, NotificationStoreError

logger = logging.getLogger(__name__)


def _require_recipient(recipient_id: int | None) -> int:
    if (
        not isinstance(recipient_id, int)
        or isinstance(recipient_id, bool)
        or recipient_id <= 0
    ):
        raise MissingRecipientError("Valid numeric recipient id is required")
    return recipient_id


def mark_read(
    session: Session, *, recipient_id: int | None, notification_id: int
) -> bool:
    """Mark the recipient's copy of ``notification_id`` as read.

    Missing or already read entries are accepted as success.
    """

    recipient_id = _require_recipient(recipient_id)
    try:
        updated = RecipientEntryRepository(session).mark_read(
            recipient_id=recipient_id, notification_id=notification_id
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception(
            "Could not mark notification %s read for recipient %s",
            notification_id,
            recipient_id,
        )
        raise NotificationStoreError("Failed to update notification") from exc

    if updated:
        logger.debug("Recipient %s read notification %s", recipient_id, notification_id)
    return True


def dismiss(session: Session, *, recipient_id: int | None, notification_id: int) -> int:
    """Remove the recipient's copy of ``notification_id``.

    Returns the number of entries removed, ``0`` when there was nothing to
    remove.
    """

    recipient_id = _require_recipient(recipient_id)
    try:
        return RecipientEntryRepository(session).delete_for_recipient(
            recipient_id=recipient_id, notification_id=notification_id
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception(
            "Could not dismiss notification %s for recipient %s",
            notification_id,
            recipient_id,
        )
        raise NotificationStoreError("Failed to delete notification") from exc


__all__ = ["dismiss", "mark_read"]
