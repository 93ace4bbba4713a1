"""
Timesheet approval API endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_hub.api.v1.middleware import require_acting_user
from timesheet_hub.controllers.timesheet_controller import TimesheetController
from timesheet_hub.db.session import get_db
from timesheet_hub.schemas.approval import (
    ManageAllTimesheetsRequest,
    ManageAllTimesheetsResponse,
    ManageTimesheetRequest,
)
from timesheet_hub.schemas.common import ApiResponse, ok
from timesheet_hub.schemas.timesheet import TimesheetEntryResponse
from timesheet_hub.schemas.user import ActingUser

router = APIRouter()


@router.post("/manage", response_model=ApiResponse[TimesheetEntryResponse])
async def manage_timesheet(
    body: ManageTimesheetRequest,
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
):
    """Accept or reject a single timesheet."""
    controller = TimesheetController(db)
    data = await controller.manage_timesheet(acting, body)
    return ok(data, f"Timesheet {data.status.value} successfully")


@router.post("/manage-all", response_model=ApiResponse[ManageAllTimesheetsResponse])
async def manage_all_timesheets(
    body: ManageAllTimesheetsRequest,
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
):
    """Accept or reject every submitted timesheet of a user's week."""
    controller = TimesheetController(db)
    data = await controller.manage_all_timesheets(acting, body)
    return ok(data, f"Timesheets {data.status.value} successfully")


@router.get("/pending", response_model=ApiResponse[List[TimesheetEntryResponse]])
async def list_pending_approvals(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
):
    """Submitted timesheets awaiting review."""
    controller = TimesheetController(db)
    data = await controller.list_pending_approvals(acting, skip=skip, limit=limit)
    return ok(data, "Pending timesheets fetched successfully")
