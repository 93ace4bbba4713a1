"""
Timesheet approval Pydantic schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import date
from uuid import UUID

from timesheet_hub.models.timesheet import TimesheetStatus

ReviewState = Literal["accepted", "approved", "rejected"]


class ManageTimesheetRequest(BaseModel):
    """Accept or reject a single entry."""
    timesheet_id: UUID = Field(..., alias="timesheetid")
    state: ReviewState
    notes: Optional[str] = Field(None, max_length=2000)

    class Config:
        populate_by_name = True


class ManageAllTimesheetsRequest(BaseModel):
    """Accept or reject every submitted entry of a user's week."""
    timesheet_id: UUID = Field(..., alias="timesheetid")
    status: ReviewState
    user_id: UUID = Field(..., alias="userid")
    notes: Optional[str] = Field(None, max_length=2000)

    class Config:
        populate_by_name = True


class ManageAllTimesheetsResponse(BaseModel):
    """Outcome of a whole-week review."""
    user_id: UUID
    week_start: date
    week_end: date
    status: TimesheetStatus
    updated: int
