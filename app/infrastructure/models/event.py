"""SQLAlchemy model for the events table.

Events are synchronised and edited elsewhere; notifications only link to them
and check that they still exist.
"""

from sqlalchemy import Column, DateTime, Integer, String, Text

from app.infrastructure.database import Base


class EventModel(Base):
    """Event that notifications may deep-link to via ``/events/{event_id}``."""

    __tablename__ = "events"

    event_id = Column(Integer, primary_key=True, autoincrement=False)
    event_title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(200), nullable=True)
    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)


__all__ = ["EventModel"]
