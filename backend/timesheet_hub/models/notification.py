"""
In-app notification model.
"""

from sqlalchemy import Column, String, Boolean, ForeignKey, DateTime, Uuid, func, Enum as SQLEnum
import uuid
import enum

from timesheet_hub.db.base import Base


class NotificationLevel(str, enum.Enum):
    """Notification severity."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


class Notification(Base):
    """Message shown to a user, e.g. when a timesheet is approved."""

    __tablename__ = "notifications"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    message = Column(String(1000), nullable=False)
    level = Column(
        SQLEnum(NotificationLevel, values_callable=lambda x: [e.value for e in NotificationLevel]),
        nullable=False,
        default=NotificationLevel.INFO,
    )
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
