"""
Holiday model: the dataset consulted when rendering timesheet calendars.
"""

from sqlalchemy import Column, String, Date, DateTime, Uuid, func, Enum as SQLEnum
import uuid
import enum

from timesheet_hub.db.base import Base


class HolidayType(str, enum.Enum):
    """Holiday classification."""
    NATIONAL = "National Holiday"
    PUBLIC = "Public Holiday"
    RESTRICTED = "Restricted Holiday"
    OFFICE_SHUTDOWN = "Office Shutdown"


class Holiday(Base):
    """A holiday spanning [start_date, end_date] at one location."""

    __tablename__ = "holidays"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    holiday_name = Column(String(255), nullable=False)
    holiday_type = Column(SQLEnum(HolidayType), nullable=False, default=HolidayType.PUBLIC)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    location = Column(String(100), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
