"""SQLAlchemy model for the user table.

Accounts are managed by the authentication service; this service only reads
the table to enumerate notification recipients.
"""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.sql import expression

from app.infrastructure.database import Base


class UserModel(Base):
    """Registered platform user."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False, index=True)
    is_admin = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    is_active = Column(Boolean, nullable=False, default=True)
    deleted = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["UserModel"]
