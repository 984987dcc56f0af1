"""Announcements for changes made to events."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import Event, Notification
from app.infrastructure.repositories import EventRepository
from app.utils import build_resource_link

from .broadcast import TITLE_MAX_LENGTH, broadcast_notification
from .errors import NotificationStoreError, ResourceNotFoundError

EVENT_RESOURCE_TYPE = "events"
DEFAULT_ANNOUNCEMENT = "A new event has been posted."


def compose_event_announcement(event: Event, *, limit: int | None = None) -> tuple[str, str]:
    """Return the ``(title, message)`` used to announce ``event``.

    The message is the start of the description when there is one, otherwise
    the location and start time, otherwise a generic sentence.
    """

    if limit is None:
        limit = get_settings().announcement_message_limit

    title = f"New Event: {event.title}"[:TITLE_MAX_LENGTH]
    description = (event.description or "").strip()
    if description:
        return title, description[:limit]

    details = []
    if event.location:
        details.append(f"Location: {event.location}")
    if event.start_time:
        details.append(f"Starts: {event.start_time.strftime('%Y-%m-%d %H:%M')}")
    return title, " • ".join(details) or DEFAULT_ANNOUNCEMENT


def announce_event(session: Session, *, event_id: int) -> Notification:
    """Broadcast a "new event" notification linking to ``event_id``."""

    try:
        event = EventRepository(session).get(event_id)
    except SQLAlchemyError as exc:
        session.rollback()
        raise NotificationStoreError("Failed to load event") from exc
    if event is None:
        raise ResourceNotFoundError("Event not found")

    title, message = compose_event_announcement(event)
    return broadcast_notification(
        session,
        title=title,
        message=message,
        link=build_resource_link(EVENT_RESOURCE_TYPE, event.id),
    )


__all__ = [
    "DEFAULT_ANNOUNCEMENT",
    "EVENT_RESOURCE_TYPE",
    "announce_event",
    "compose_event_announcement",
]
