"""SQLAlchemy model for the per-recipient notification ledger."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from app.infrastructure.database import Base


class RecipientEntryModel(Base):
    """Read state of one notification for one recipient."""

    __tablename__ = "recipient_entry"
    __table_args__ = (
        UniqueConstraint(
            "recipient_id",
            "notification_id",
            name="uq_recipient_entry_recipient_notification",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    notification_id = Column(
        Integer,
        ForeignKey("notification.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    # NULL while unread; written together with is_read.
    seen_at = Column(DateTime(), nullable=True)

    notification = relationship("NotificationModel", back_populates="recipients")


__all__ = ["RecipientEntryModel"]
