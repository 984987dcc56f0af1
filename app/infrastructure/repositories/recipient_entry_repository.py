"""Persistence helpers for the per-recipient notification ledger."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import insert
from sqlalchemy.orm import Session

from app.domain.entities import Notification, RecipientEntry
from app.infrastructure.models import NotificationModel, RecipientEntryModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class RecipientEntryRepository:
    """Provide ledger operations for :class:`RecipientEntry` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def bulk_create(self, notification_id: int, recipient_ids: Iterable[int]) -> int:
        """Insert one unread entry per recipient in a single statement.

        Duplicated recipient ids are collapsed, preserving first-seen order.
        Returns the number of rows inserted.
        """

        unique_ids = list(dict.fromkeys(int(recipient_id) for recipient_id in recipient_ids))
        if not unique_ids:
            return 0
        rows = [
            {
                "recipient_id": recipient_id,
                "notification_id": notification_id,
                "is_read": False,
                "seen_at": None,
            }
            for recipient_id in unique_ids
        ]
        self.session.execute(insert(RecipientEntryModel), rows)
        self.session.commit()
        return len(rows)

    def list_feed_rows(
        self, recipient_id: int
    ) -> Sequence[tuple[RecipientEntry, Notification]]:
        query = (
            self.session.query(RecipientEntryModel, NotificationModel)
            .join(
                NotificationModel,
                RecipientEntryModel.notification_id == NotificationModel.id,
            )
            .filter(RecipientEntryModel.recipient_id == recipient_id)
            .order_by(NotificationModel.created_at.desc(), RecipientEntryModel.id.desc())
        )
        return [
            (self._to_entity(entry), self._notification_to_entity(notification))
            for entry, notification in query.all()
        ]

    def list_for_notification(self, notification_id: int) -> Sequence[RecipientEntry]:
        query = (
            self.session.query(RecipientEntryModel)
            .filter(RecipientEntryModel.notification_id == notification_id)
            .order_by(RecipientEntryModel.recipient_id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, *, recipient_id: int, notification_id: int) -> RecipientEntry | None:
        model = (
            self.session.query(RecipientEntryModel)
            .filter(
                RecipientEntryModel.recipient_id == recipient_id,
                RecipientEntryModel.notification_id == notification_id,
            )
            .first()
        )
        return self._to_entity(model) if model else None

    def mark_read(self, *, recipient_id: int, notification_id: int) -> int:
        """Flag the recipient's entry as read, returning the rows changed.

        Entries that are already read are left untouched so ``seen_at`` keeps
        the first read time.
        """

        updated = (
            self.session.query(RecipientEntryModel)
            .filter(
                RecipientEntryModel.recipient_id == recipient_id,
                RecipientEntryModel.notification_id == notification_id,
                RecipientEntryModel.is_read.is_(False),
            )
            .update(
                {
                    RecipientEntryModel.is_read: True,
                    RecipientEntryModel.seen_at: ensure_app_naive_datetime(
                        now_in_app_timezone()
                    ),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated

    def delete_for_recipient(self, *, recipient_id: int, notification_id: int) -> int:
        removed = (
            self.session.query(RecipientEntryModel)
            .filter(
                RecipientEntryModel.recipient_id == recipient_id,
                RecipientEntryModel.notification_id == notification_id,
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return removed

    def delete_by_notification_ids(self, notification_ids: Iterable[int]) -> int:
        ids = {int(notification_id) for notification_id in notification_ids}
        if not ids:
            return 0
        removed = (
            self.session.query(RecipientEntryModel)
            .filter(RecipientEntryModel.notification_id.in_(ids))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return removed

    def count_for_notification(self, notification_id: int) -> int:
        return (
            self.session.query(RecipientEntryModel)
            .filter(RecipientEntryModel.notification_id == notification_id)
            .count()
        )

    @staticmethod
    def _to_entity(model: RecipientEntryModel) -> RecipientEntry:
        return RecipientEntry(
            id=model.id,
            recipient_id=model.recipient_id,
            notification_id=model.notification_id,
            is_read=bool(model.is_read),
            seen_at=ensure_app_timezone(model.seen_at),
        )

    @staticmethod
    def _notification_to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            title=model.title,
            message=model.message,
            link=model.link,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["RecipientEntryRepository"]
