"""Per-recipient notification feed with reconciliation of dangling links."""

from __future__ import annotations

import logging
from collections import defaultdict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import Feed, FeedItem, Notification, RecipientEntry
from app.infrastructure.repositories import RecipientEntryRepository
from app.infrastructure.resources import ResourceRegistry, resource_registry
from app.utils import parse_resource_link

from .errors import NotificationStoreError

logger = logging.getLogger(__name__)


def _is_valid_recipient(recipient_id: object) -> bool:
    return (
        isinstance(recipient_id, int)
        and not isinstance(recipient_id, bool)
        and recipient_id > 0
    )


def _to_feed_item(entry: RecipientEntry, notification: Notification) -> FeedItem:
    return FeedItem(
        id=entry.notification_id,
        entry_id=entry.id,
        title=notification.title,
        message=notification.message,
        link=notification.link,
        created_at=notification.created_at,
        is_read=bool(entry.is_read),
        seen_at=entry.seen_at,
    )


def get_feed(
    session: Session,
    recipient_id: int | None,
    *,
    registry: ResourceRegistry | None = None,
) -> Feed:
    """Return the recipient's notifications, newest first.

    Items linking to a resource that no longer exists are left out and their
    links are reported in :attr:`Feed.stale_links` so the caller can purge
    them for every recipient. Existence is checked with one query per
    resource type. If that check fails the unreconciled feed is returned.
    """

    if not _is_valid_recipient(recipient_id):
        return Feed()

    try:
        rows = RecipientEntryRepository(session).list_feed_rows(recipient_id)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Could not load notifications for recipient %s", recipient_id)
        raise NotificationStoreError("Failed to fetch notifications") from exc

    items = [_to_feed_item(entry, notification) for entry, notification in rows]
    return _reconcile(session, items, registry or resource_registry)


def _reconcile(session: Session, items: list[FeedItem], registry: ResourceRegistry) -> Feed:
    referenced: defaultdict[str, set[int]] = defaultdict(set)
    for item in items:
        resource = parse_resource_link(item.link)
        if resource is not None:
            referenced[resource.resource_type].add(resource.resource_id)

    if not referenced:
        return Feed(items=items)

    existing: dict[str, set[int]] = {}
    try:
        for resource_type, resource_ids in referenced.items():
            existing[resource_type] = registry.existing_ids(
                session, resource_type, resource_ids
            )
    except SQLAlchemyError:
        session.rollback()
        logger.warning(
            "Skipping notification reconciliation; resource lookup failed",
            exc_info=True,
        )
        return Feed(items=items)

    kept: list[FeedItem] = []
    stale_links: set[str] = set()
    for item in items:
        resource = parse_resource_link(item.link)
        if resource is not None and resource.resource_id not in existing[resource.resource_type]:
            stale_links.add(item.link)
            continue
        kept.append(item)

    if stale_links:
        logger.info("Hiding notifications for %d stale links", len(stale_links))
    return Feed(items=kept, stale_links=stale_links)


def count_unread(
    session: Session,
    recipient_id: int | None,
    *,
    registry: ResourceRegistry | None = None,
) -> int:
    """Return the unread badge count, consistent with :func:`get_feed`."""

    return get_feed(session, recipient_id, registry=registry).unread_count


__all__ = ["count_unread", "get_feed"]
