"""
Timesheet models for time entry and approval workflows.
"""

from sqlalchemy import Column, String, Date, ForeignKey, Integer, Boolean, DateTime, UniqueConstraint, Uuid, func, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid
import enum

from timesheet_hub.db.base import Base
from timesheet_hub.utils.hours import MAX_HOURS_LENGTH, ZERO_HOURS


class TimesheetStatus(str, enum.Enum):
    """Timesheet status enumeration."""
    IN_PROGRESS = "in_progress"
    SAVED = "saved"
    SUBMITTED = "submitted"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class TimesheetEntry(Base):
    """One project/category/task row for one user and one week window."""

    __tablename__ = "timesheet_entries"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    project_id = Column(Uuid(as_uuid=True), ForeignKey("projects.id"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    task_category_id = Column(Uuid(as_uuid=True), ForeignKey("task_categories.id"), nullable=False, index=True)
    task_detail = Column(String(1000), nullable=False)
    week_start = Column(Date, nullable=False, index=True)
    week_end = Column(Date, nullable=False, index=True)
    status = Column(
        SQLEnum(TimesheetStatus, values_callable=lambda x: [e.value for e in TimesheetStatus]),
        nullable=False,
        default=TimesheetStatus.IN_PROGRESS,
        index=True,
    )
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    project = relationship("Project", back_populates="timesheets")
    user = relationship("User", back_populates="timesheets")
    task_category = relationship("TaskCategory")
    days = relationship("TimesheetDay", back_populates="entry", cascade="all, delete-orphan", order_by="TimesheetDay.work_date")


class TimesheetDay(Base):
    """Hours logged on one calendar day of an entry (sparse: only days with data)."""

    __tablename__ = "timesheet_days"
    __table_args__ = (
        UniqueConstraint("entry_id", "work_date", name="uq_timesheet_day_entry_date"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    entry_id = Column(Uuid(as_uuid=True), ForeignKey("timesheet_entries.id", ondelete="CASCADE"), nullable=False, index=True)
    work_date = Column(Date, nullable=False, index=True)
    hours = Column(String(MAX_HOURS_LENGTH), nullable=False, default=ZERO_HOURS)  # legacy string format, parsed on read
    is_holiday = Column(Boolean, nullable=False, default=False)

    # Relationships
    entry = relationship("TimesheetEntry", back_populates="days")
