"""Existence checks for resources referenced by notification links."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from sqlalchemy.orm import Session

from app.infrastructure.repositories import EventRepository

ExistenceChecker = Callable[[Session, set[int]], set[int]]


def _existing_events(session: Session, event_ids: set[int]) -> set[int]:
    return EventRepository(session).existing_ids(event_ids)


class ResourceRegistry:
    """Map link resource types to batch existence checkers."""

    def __init__(self) -> None:
        self._checkers: dict[str, ExistenceChecker] = {}

    def register(self, resource_type: str, checker: ExistenceChecker) -> None:
        self._checkers[resource_type] = checker

    def supports(self, resource_type: str) -> bool:
        return resource_type in self._checkers

    def existing_ids(
        self, session: Session, resource_type: str, resource_ids: Iterable[int]
    ) -> set[int]:
        """Return the ids of ``resource_type`` that still exist.

        Unknown resource types cannot be verified, so every id is reported as
        existing.
        """

        ids = {int(resource_id) for resource_id in resource_ids}
        if not ids:
            return set()
        checker = self._checkers.get(resource_type)
        if checker is None:
            return ids
        return checker(session, ids)


resource_registry = ResourceRegistry()
resource_registry.register("events", _existing_events)


__all__ = ["ExistenceChecker", "ResourceRegistry", "resource_registry"]
