"""Read access to the events table."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from app.domain.entities import Event
from app.infrastructure.models import EventModel
from app.utils import ensure_app_timezone


class EventRepository:
    """Look up events referenced by notification links."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, event_id: int) -> Event | None:
        model = self.session.get(EventModel, event_id)
        return self._to_entity(model) if model else None

    def existing_ids(self, event_ids: Iterable[int]) -> set[int]:
        """Return the subset of ``event_ids`` that still exist, in one query."""

        ids = {int(event_id) for event_id in event_ids}
        if not ids:
            return set()
        query = self.session.query(EventModel.event_id).filter(EventModel.event_id.in_(ids))
        return {int(event_id) for (event_id,) in query.all()}

    @staticmethod
    def _to_entity(model: EventModel) -> Event:
        return Event(
            id=model.event_id,
            title=model.event_title,
            description=model.description,
            location=model.location,
            start_time=ensure_app_timezone(model.start_time),
            end_time=ensure_app_timezone(model.end_time),
        )


__all__ = ["EventRepository"]
