"""
Timesheet report Pydantic schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from uuid import UUID


class TimesheetReportRequest(BaseModel):
    """Report filters; an explicit date range overrides year/month."""
    year: Optional[int] = Field(None, ge=1970, le=9999)
    month: Optional[int] = Field(None, ge=1, le=12)
    project_ids: Optional[List[UUID]] = Field(None, alias="projectIds")
    user_ids: Optional[List[UUID]] = Field(None, alias="userIds")
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    tab_key: str = Field(..., alias="tabKey")

    class Config:
        populate_by_name = True


class ProjectReportRow(BaseModel):
    project_name: str = Field(..., alias="projectName")
    year: int
    month: int
    logged_hours: float = Field(0, alias="loggedHours")
    approved_hours: float = Field(0, alias="approvedHours")
    date_range: Optional[str] = Field(None, alias="dateRange")

    class Config:
        populate_by_name = True


class EmployeeReportRow(BaseModel):
    employee_name: str = Field(..., alias="employeeName")
    project_name: str = Field(..., alias="projectName")
    year: int
    month: int
    logged_hours: float = Field(0, alias="loggedHours")
    approved_hours: float = Field(0, alias="approvedHours")
    total_logged: float = Field(0, alias="totalLogged")
    total_approved: float = Field(0, alias="totalApproved")
    date_range: Optional[str] = Field(None, alias="dateRange")

    class Config:
        populate_by_name = True


class TimesheetReportResponse(BaseModel):
    """Rows of one report tab."""
    tab_key: str = Field(..., alias="tabKey")
    start_date: str = Field(..., alias="startDate")
    end_date: str = Field(..., alias="endDate")
    rows: List[Dict[str, Any]] = []

    class Config:
        populate_by_name = True
