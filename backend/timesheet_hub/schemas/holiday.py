"""
Holiday Pydantic schemas.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date, datetime
from uuid import UUID

from timesheet_hub.models.holiday import HolidayType


class HolidayCreate(BaseModel):
    """Create schema for a holiday."""
    holiday_name: str = Field(..., min_length=1, max_length=255)
    holiday_type: HolidayType = HolidayType.PUBLIC
    start_date: date
    end_date: Optional[date] = None
    location: str = Field(..., min_length=1, max_length=100)

    @model_validator(mode="after")
    def _default_end_date(self):
        if self.end_date is None:
            self.end_date = self.start_date
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class HolidayResponse(BaseModel):
    """Response schema for a holiday."""
    id: UUID
    holiday_name: str
    holiday_type: HolidayType
    start_date: date
    end_date: date
    location: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class HolidayCheckResponse(BaseModel):
    day: date = Field(..., alias="date")
    location: Optional[str] = None
    is_holiday: bool

    class Config:
        populate_by_name = True


class HolidayUpdate(HolidayCreate):
    """Full replacement of a holiday; end_date defaults to start_date."""
