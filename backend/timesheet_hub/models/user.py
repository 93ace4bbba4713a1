"""
User model: employees who log time and approvers who review it.
"""

from sqlalchemy import Column, String, Boolean, DateTime, Uuid, func
from sqlalchemy.orm import relationship
import uuid

from timesheet_hub.db.base import Base


class User(Base):
    """Employee account referenced by timesheets, notes and notifications."""

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    full_name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(String(100), nullable=False, default="Employee")
    location = Column(String(100), nullable=True)  # holiday calendar, e.g. "India", "Dubai"
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    timesheets = relationship("TimesheetEntry", back_populates="user")
