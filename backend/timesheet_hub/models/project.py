"""
Project and task category models (reference data for timesheet entries).
"""

from sqlalchemy import Column, String, ForeignKey, DateTime, Uuid, func, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid
import enum

from timesheet_hub.db.base import Base


class ProjectStatus(str, enum.Enum):
    """Project delivery status."""
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"
    CANCELLED = "Cancelled"


class TimeEntryState(str, enum.Enum):
    """Whether employees may still log time against a project."""
    OPENED = "opened"
    CLOSED = "closed"


class Project(Base):
    """Client project that time is logged against."""

    __tablename__ = "projects"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    project_name = Column(String(255), nullable=False)
    client_name = Column(String(255), nullable=False)
    project_lead_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True, index=True)
    status = Column(SQLEnum(ProjectStatus), nullable=False, default=ProjectStatus.IN_PROGRESS)
    open_for_time_entry = Column(
        SQLEnum(TimeEntryState, values_callable=lambda x: [e.value for e in TimeEntryState]),
        nullable=False,
        default=TimeEntryState.OPENED,
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    project_lead = relationship("User", foreign_keys=[project_lead_id])
    timesheets = relationship("TimesheetEntry", back_populates="project")


class TaskCategory(Base):
    """Kind of work (development, testing, meetings...)."""

    __tablename__ = "task_categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    category = Column(String(100), nullable=False, unique=True)
