"""Fan-out of a notification to every registered recipient."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.infrastructure.repositories import (
    NotificationRepository,
    RecipientEntryRepository,
    UserRepository,
)
from app.utils import now_in_app_timezone

from .errors import InvalidNotificationError, NotificationStoreError

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 150
LINK_MAX_LENGTH = 500


def _clean_text(value: str | None, *, field: str, max_length: int | None = None) -> str:
    cleaned = value.strip() if isinstance(value, str) else ""
    if not cleaned:
        raise InvalidNotificationError(f"{field} is required")
    if max_length is not None and len(cleaned) > max_length:
        raise InvalidNotificationError(
            f"{field} must be at most {max_length} characters"
        )
    return cleaned


def _clean_link(link: str | None) -> str | None:
    if link is None:
        return None
    if not isinstance(link, str):
        raise InvalidNotificationError("link must be a string")
    cleaned = link.strip()
    if not cleaned:
        return None
    if len(cleaned) > LINK_MAX_LENGTH:
        raise InvalidNotificationError(
            f"link must be at most {LINK_MAX_LENGTH} characters"
        )
    return cleaned


def broadcast_notification(
    session: Session,
    *,
    title: str,
    message: str,
    link: str | None = None,
) -> Notification:
    """Create ``title``/``message`` once and deliver it to every recipient.

    The recipient set is a snapshot taken after the notification is stored;
    users registered later do not receive it. All ledger rows are written in
    one batch. When that batch fails the broadcast is reported as failed and
    the stored notification is left without recipients. No retry is
    attempted; each call creates a new notification.
    """

    notification = Notification(
        id=None,
        title=_clean_text(title, field="title", max_length=TITLE_MAX_LENGTH),
        message=_clean_text(message, field="message"),
        link=_clean_link(link),
        created_at=now_in_app_timezone(),
    )

    try:
        saved = NotificationRepository(session).create(notification)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Could not store notification '%s'", notification.title)
        raise NotificationStoreError("Failed to create notification") from exc

    try:
        recipient_ids = UserRepository(session).list_recipient_ids()
        delivered = 0
        if recipient_ids:
            delivered = RecipientEntryRepository(session).bulk_create(saved.id, recipient_ids)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception(
            "Fan-out of notification %s failed; it has no recipients", saved.id
        )
        raise NotificationStoreError("Failed to deliver notification") from exc

    logger.info("Notification %s broadcast to %d recipients", saved.id, delivered)
    return saved


__all__ = ["broadcast_notification"]
