"""Persistence helpers for notification content."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.infrastructure.models import NotificationModel, RecipientEntryModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Insert, look up and delete :class:`Notification` records.

    Notifications are immutable and have no update method. Deletions remove
    dependent ledger rows first, with or without a foreign key cascade.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            title=notification.title,
            message=notification.message,
            link=notification.link,
            created_at=ensure_app_naive_datetime(
                notification.created_at or now_in_app_timezone()
            ),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_ids_by_links(self, links: Iterable[str]) -> list[int]:
        unique_links = {link for link in links if link}
        if not unique_links:
            return []
        query = self.session.query(NotificationModel.id).filter(
            NotificationModel.link.in_(unique_links)
        )
        return [notification_id for (notification_id,) in query.all()]

    def delete_by_ids(self, notification_ids: Iterable[int]) -> int:
        ids = {int(notification_id) for notification_id in notification_ids}
        if not ids:
            return 0
        self.session.query(RecipientEntryModel).filter(
            RecipientEntryModel.notification_id.in_(ids)
        ).delete(synchronize_session=False)
        removed = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id.in_(ids))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return removed

    def delete_by_links(self, links: Iterable[str]) -> int:
        """Delete every notification whose link is in ``links``.

        Returns the number of notifications removed; rows already deleted by a
        concurrent call are simply not counted.
        """

        return self.delete_by_ids(self.list_ids_by_links(links))

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            title=model.title,
            message=model.message,
            link=model.link,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
