"""
Rejection note model: the approver's message for a rejected week.
"""

from sqlalchemy import Column, String, Date, ForeignKey, DateTime, Uuid, func
from sqlalchemy.orm import relationship
import uuid

from timesheet_hub.db.base import Base


class RejectionNote(Base):
    """At most one active note per user and week window."""

    __tablename__ = "rejection_notes"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    message = Column(String(2000), nullable=False)
    week_start = Column(Date, nullable=False, index=True)
    week_end = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User")
