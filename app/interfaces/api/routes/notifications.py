"""Endpoints for broadcasting notifications and managing recipient feeds."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    InvalidNotificationError,
    MissingRecipientError,
    NotificationStoreError,
    ResourceNotFoundError,
    announce_event as announce_event_uc,
    broadcast_notification as broadcast_notification_uc,
    dismiss as dismiss_uc,
    get_feed as get_feed_uc,
    mark_read as mark_read_uc,
    purge_notifications_for_links as purge_notifications_for_links_uc,
    purge_notifications_for_resource as purge_notifications_for_resource_uc,
)
from app.application.use_cases.notifications.events import EVENT_RESOURCE_TYPE
from app.domain.entities import Feed, FeedItem
from app.infrastructure.database import SessionLocal, get_db
from app.interfaces.api.dependencies import get_recipient_id, require_admin
from app.interfaces.api.schemas import (
    NotificationBroadcastRequest,
    NotificationBroadcastResponse,
    NotificationDismissResponse,
    NotificationFeedItemRead,
    NotificationFeedRead,
    NotificationMarkReadResponse,
    NotificationPurgeResponse,
    NotificationUnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _feed_item_to_schema(item: FeedItem) -> NotificationFeedItemRead:
    return NotificationFeedItemRead(
        id=item.id,
        notification_id=item.notification_id,
        entry_id=item.entry_id,
        title=item.title,
        message=item.message,
        link=item.link,
        created_at=item.created_at,
        is_read=item.is_read,
        seen_at=item.seen_at,
    )


def _schedule_stale_cleanup(background_tasks: BackgroundTasks, feed: Feed) -> None:
    if feed.stale_links:
        background_tasks.add_task(_purge_stale_links_in_background, sorted(feed.stale_links))


def _purge_stale_links_in_background(links: list[str]) -> None:
    """Purge stale notifications using an independent database session."""

    session = SessionLocal()
    try:
        purge_notifications_for_links_uc(session, links)
    except Exception as exc:
        logger.exception("Error purging stale notifications for %s: %s", links, exc)
    finally:
        session.close()


def _load_feed(db: Session, recipient_id: int | None) -> Feed:
    try:
        return get_feed_uc(db, recipient_id)
    except NotificationStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch notifications",
        ) from exc


@router.post(
    "/",
    response_model=NotificationBroadcastResponse,
    status_code=status.HTTP_201_CREATED,
)
def broadcast_notification(
    payload: NotificationBroadcastRequest,
    db: Session = Depends(get_db),
    _: dict[str, Any] = Depends(require_admin),
) -> NotificationBroadcastResponse:
    """Send a notification to every registered user."""

    try:
        notification = broadcast_notification_uc(
            db,
            title=payload.title,
            message=payload.message,
            link=payload.link,
        )
    except InvalidNotificationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NotificationStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create notification",
        ) from exc

    return NotificationBroadcastResponse(notification_id=notification.id)


@router.post(
    "/events/{event_id}",
    response_model=NotificationBroadcastResponse,
    status_code=status.HTTP_201_CREATED,
)
def announce_event(
    event_id: int,
    db: Session = Depends(get_db),
    _: dict[str, Any] = Depends(require_admin),
) -> NotificationBroadcastResponse:
    """Announce a newly created event to every registered user."""

    try:
        notification = announce_event_uc(db, event_id=event_id)
    except ResourceNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except InvalidNotificationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NotificationStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create notification",
        ) from exc

    return NotificationBroadcastResponse(notification_id=notification.id)


@router.delete("/events/{event_id}", response_model=NotificationPurgeResponse)
def purge_event_notifications(
    event_id: int,
    db: Session = Depends(get_db),
    _: dict[str, Any] = Depends(require_admin),
) -> NotificationPurgeResponse:
    """Remove every notification linking to a deleted event."""

    try:
        removed = purge_notifications_for_resource_uc(
            db, resource_type=EVENT_RESOURCE_TYPE, resource_id=event_id
        )
    except NotificationStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to purge notifications",
        ) from exc
    return NotificationPurgeResponse(removed=removed)


@router.get("/", response_model=NotificationFeedRead)
def read_feed(
    background_tasks: BackgroundTasks,
    recipient_id: int | None = Depends(get_recipient_id),
    db: Session = Depends(get_db),
) -> NotificationFeedRead:
    """Return the recipient's notifications, newest first, with the unread count."""

    feed = _load_feed(db, recipient_id)
    _schedule_stale_cleanup(background_tasks, feed)
    return NotificationFeedRead(
        items=[_feed_item_to_schema(item) for item in feed.items],
        unread_count=feed.unread_count,
    )


@router.get("/unread-count", response_model=NotificationUnreadCountRead)
def read_unread_count(
    background_tasks: BackgroundTasks,
    recipient_id: int | None = Depends(get_recipient_id),
    db: Session = Depends(get_db),
) -> NotificationUnreadCountRead:
    """Return only the unread badge count of the recipient."""

    feed = _load_feed(db, recipient_id)
    _schedule_stale_cleanup(background_tasks, feed)
    return NotificationUnreadCountRead(unread_count=feed.unread_count)


@router.patch("/{notification_id}/read", response_model=NotificationMarkReadResponse)
def mark_notification_read(
    notification_id: int,
    recipient_id: int | None = Depends(get_recipient_id),
    db: Session = Depends(get_db),
) -> NotificationMarkReadResponse:
    """Mark a notification as read for the calling recipient only."""

    try:
        mark_read_uc(db, recipient_id=recipient_id, notification_id=notification_id)
    except MissingRecipientError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    except NotificationStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update notification",
        ) from exc
    return NotificationMarkReadResponse()


@router.delete("/{notification_id}", response_model=NotificationDismissResponse)
def dismiss_notification(
    notification_id: int,
    recipient_id: int | None = Depends(get_recipient_id),
    db: Session = Depends(get_db),
) -> NotificationDismissResponse:
    """Remove a notification from the calling recipient's feed."""

    try:
        removed = dismiss_uc(db, recipient_id=recipient_id, notification_id=notification_id)
    except MissingRecipientError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    except NotificationStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete notification",
        ) from exc
    return NotificationDismissResponse(removed=removed)
