"""SQLAlchemy model for broadcast notification content."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Shared content of a notification, written once per broadcast."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(150), nullable=False)
    message = Column(Text, nullable=False)
    link = Column(String(500), nullable=True, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    recipients = relationship(
        "RecipientEntryModel",
        back_populates="notification",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["NotificationModel"]
