"""Domain entity for an event notifications can announce."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Event:
    """Subset of event attributes used to compose announcements."""

    id: int
    title: str
    description: str | None
    location: str | None
    start_time: datetime | None
    end_time: datetime | None
