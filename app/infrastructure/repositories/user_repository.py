"""Read access to the user directory."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.infrastructure.models import UserModel


class UserRepository:
    """Enumerate the users that can receive notifications."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_recipient_ids(self) -> list[int]:
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.deleted.is_(False))
            .filter(UserModel.is_active.is_(True))
            .order_by(UserModel.id.asc())
        )
        return [user_id for (user_id,) in query.all()]


__all__ = ["UserRepository"]
