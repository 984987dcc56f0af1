"""Removal of notifications whose linked resource is gone."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.infrastructure.repositories import NotificationRepository
from app.utils import build_resource_link

from .errors import NotificationStoreError

logger = logging.getLogger(__name__)


def purge_notifications_for_links(session: Session, links: Iterable[str]) -> int:
    """Delete every notification sharing one of ``links`` and its ledger rows.

    Applies to all recipients. Calling it again for the same links removes
    nothing and returns ``0``.
    """

    unique_links = sorted({link for link in links if link})
    if not unique_links:
        return 0
    try:
        removed = NotificationRepository(session).delete_by_links(unique_links)
    except SQLAlchemyError as exc:
        session.rollback()
        raise NotificationStoreError("Failed to purge notifications") from exc

    if removed:
        logger.info(
            "Purged %d notifications for links %s", removed, ", ".join(unique_links)
        )
    return removed


def purge_notifications_for_resource(
    session: Session, *, resource_type: str, resource_id: int
) -> int:
    """Purge notifications linking to a resource that was just deleted."""

    link = build_resource_link(resource_type, resource_id)
    return purge_notifications_for_links(session, [link, f"{link}/"])


__all__ = ["purge_notifications_for_links", "purge_notifications_for_resource"]
