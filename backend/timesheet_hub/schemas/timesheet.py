"""
Timesheet Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal, Union
from datetime import date
from uuid import UUID

from timesheet_hub.models.timesheet import TimesheetStatus
from timesheet_hub.utils.hours import MAX_HOURS_LENGTH, format_hours, parse_hours


class DaySheetItem(BaseModel):
    """Hours logged for one day, as sent by the client."""
    date: str
    hours: Union[float, str]
    is_holiday: Optional[bool] = Field(None, alias="isHoliday")

    @field_validator("hours")
    @classmethod
    def validate_hours(cls, v):
        if parse_hours(v) < 0:
            raise ValueError("Hours cannot be negative")
        if len(format_hours(v)) > MAX_HOURS_LENGTH:
            raise ValueError(f"Hours must fit in {MAX_HOURS_LENGTH} characters")
        return v

    class Config:
        populate_by_name = True


class TimesheetSaveItem(BaseModel):
    """One row of the weekly grid to create or update."""
    timesheet_id: Optional[UUID] = Field(None, alias="timesheetId")
    project_id: UUID
    task_category_id: UUID
    task_detail: str = Field(..., min_length=1, max_length=1000)
    data_sheet: List[DaySheetItem] = Field(default_factory=list)
    status: Optional[Literal["saved", "in_progress"]] = None
    passed_date: Optional[str] = Field(None, alias="passedDate")
    version: Optional[int] = Field(None, ge=1)

    class Config:
        populate_by_name = True


class TimesheetSaveRequest(BaseModel):
    """Batch save request."""
    timesheets: List[TimesheetSaveItem] = Field(..., min_length=1)


class TimesheetSubmitRequest(BaseModel):
    """Batch submit request."""
    timesheets: List[UUID] = Field(..., min_length=1)


class WeeklyTimesheetRequest(BaseModel):
    """Week view request; missing dates default to the caller's current week."""
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    direction: Optional[str] = None

    class Config:
        populate_by_name = True


class DueTimesheetRequest(BaseModel):
    """Due/missing hours request."""
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")

    class Config:
        populate_by_name = True


class SnapshotRequest(BaseModel):
    """Status counts for a month (defaults to the current month)."""
    year: Optional[int] = Field(None, ge=1970, le=9999)
    month: Optional[int] = Field(None, ge=1, le=12)


class TimesheetDayResponse(BaseModel):
    """Stored day row."""
    work_date: date = Field(..., alias="date")
    hours: str
    is_holiday: bool = Field(False, alias="isHoliday")

    class Config:
        populate_by_name = True


class WeekDate(BaseModel):
    """Header cell of the weekly grid."""
    day: date = Field(..., alias="date")
    normalized_date: str = Field(..., alias="normalizedDate")
    day_of_week: str = Field(..., alias="dayOfWeek")
    is_holiday: bool = Field(False, alias="isHoliday")
    is_disabled: bool = Field(False, alias="isDisabled")

    class Config:
        populate_by_name = True


class ReconciledDay(WeekDate):
    """Dense per-day cell of an entry, real or synthesised."""
    hours: str


class TimesheetEntryResponse(BaseModel):
    """Response schema for a timesheet entry."""
    id: UUID
    user_id: UUID
    user_name: Optional[str] = None
    project_id: UUID
    project_name: Optional[str] = None
    task_category_id: UUID
    task_category: Optional[str] = None
    task_detail: str
    week_start: date
    week_end: date
    status: TimesheetStatus
    version: int
    data_sheet: List[TimesheetDayResponse] = []


class ReconciledTimesheetResponse(BaseModel):
    """Entry with its day sheet expanded over the displayed week."""
    id: UUID
    project_id: UUID
    project_name: Optional[str] = None
    task_category_id: UUID
    task_category: Optional[str] = None
    task_detail: str
    week_start: date
    week_end: date
    status: TimesheetStatus
    version: int
    data_sheet: List[ReconciledDay] = []
    total_hours: float = Field(0, alias="totalHours")

    class Config:
        populate_by_name = True


class DateRange(BaseModel):
    start_date: date = Field(..., alias="startDate")
    end_date: date = Field(..., alias="endDate")

    class Config:
        populate_by_name = True


class RejectionNoteResponse(BaseModel):
    """Approver's message for a rejected week."""
    id: UUID
    message: str
    week_start: date
    week_end: date

    class Config:
        from_attributes = True


class WeeklyTimesheetResponse(BaseModel):
    """Weekly grid payload."""
    data: List[ReconciledTimesheetResponse] = []
    week_dates: List[WeekDate] = Field(default_factory=list, alias="weekDates")
    date_range: DateRange
    rejection_note: Optional[RejectionNoteResponse] = Field(None, alias="rejectionNote")

    class Config:
        populate_by_name = True


class DueDayResponse(BaseModel):
    """Open hours on one date, or the trailing TOTAL row."""
    date: str
    day_of_week: Optional[str] = Field(None, alias="dayOfWeek")
    is_holiday: bool = Field(False, alias="isHoliday")
    hours: float

    class Config:
        populate_by_name = True


class TodayProjectHours(BaseModel):
    project_id: UUID
    project_name: str
    hours: float


class TodayTimesheetResponse(BaseModel):
    """Hours logged today, per project."""
    day: date = Field(..., alias="date")
    total_hours: float = Field(0, alias="totalHours")
    projects: List[TodayProjectHours] = []

    class Config:
        populate_by_name = True


class TimesheetSnapshotResponse(BaseModel):
    """Entry counts per status for a period."""
    in_progress: int = 0
    saved: int = 0
    submitted: int = 0
    approved: int = 0
    rejected: int = 0
