"""
Timesheet API endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from timesheet_hub.api.v1.middleware import client_ip, get_geo_client, require_acting_user
from timesheet_hub.controllers.timesheet_controller import TimesheetController
from timesheet_hub.core.integrations.geolocation import GeoTimezoneClient
from timesheet_hub.db.session import get_db
from timesheet_hub.schemas.common import ApiResponse, ok
from timesheet_hub.schemas.timesheet import (
    DueDayResponse,
    DueTimesheetRequest,
    SnapshotRequest,
    TimesheetEntryResponse,
    TimesheetSaveRequest,
    TimesheetSnapshotResponse,
    TimesheetSubmitRequest,
    TodayTimesheetResponse,
    WeeklyTimesheetRequest,
    WeeklyTimesheetResponse,
)
from timesheet_hub.schemas.user import ActingUser

router = APIRouter()


@router.post("/save", response_model=ApiResponse[List[TimesheetEntryResponse]])
async def save_timesheets(
    body: TimesheetSaveRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
    geo_client: GeoTimezoneClient = Depends(get_geo_client),
):
    """Create or update timesheet rows for a week."""
    controller = TimesheetController(db, geo_client)
    data = await controller.save_timesheets(acting, body, client_ip(request))
    return ok(data, "Timesheets saved successfully")


@router.post("/submit", response_model=ApiResponse[List[TimesheetEntryResponse]])
async def submit_timesheets(
    body: TimesheetSubmitRequest,
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
):
    """Submit saved timesheets for approval."""
    controller = TimesheetController(db)
    data = await controller.submit_timesheets(acting, body)
    return ok(data, "Timesheets submitted successfully")


@router.post("/weekly", response_model=ApiResponse[WeeklyTimesheetResponse])
async def get_weekly_timesheets(
    body: WeeklyTimesheetRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
    geo_client: GeoTimezoneClient = Depends(get_geo_client),
):
    """Weekly grid with holidays and disabled days marked."""
    controller = TimesheetController(db, geo_client)
    data = await controller.get_weekly_timesheets(acting, body, client_ip(request))
    return ok(data, "Weekly timesheets fetched successfully")


@router.post("/due", response_model=ApiResponse[List[DueDayResponse]])
async def get_due_timesheets(
    body: DueTimesheetRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
    geo_client: GeoTimezoneClient = Depends(get_geo_client),
):
    """Hours not yet submitted, per date."""
    controller = TimesheetController(db, geo_client)
    data = await controller.get_due_timesheets(acting, body, client_ip(request))
    return ok(data, "Due timesheets fetched successfully")


@router.get("/today", response_model=ApiResponse[TodayTimesheetResponse])
async def get_today_timesheet(
    request: Request,
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
    geo_client: GeoTimezoneClient = Depends(get_geo_client),
):
    """Hours logged today, per project."""
    controller = TimesheetController(db, geo_client)
    data = await controller.get_today(acting, client_ip(request))
    return ok(data, "Current day timesheet fetched successfully")


@router.post("/snapshot", response_model=ApiResponse[TimesheetSnapshotResponse])
async def get_timesheet_snapshot(
    body: SnapshotRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
    geo_client: GeoTimezoneClient = Depends(get_geo_client),
):
    """Entry counts per status for a month."""
    controller = TimesheetController(db, geo_client)
    data = await controller.get_snapshot(acting, body, client_ip(request))
    return ok(data, "Timesheet snapshot fetched successfully")


@router.post("/{timesheet_id}/reopen", response_model=ApiResponse[TimesheetEntryResponse])
async def reopen_timesheet(
    timesheet_id: UUID,
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
):
    """Move a rejected timesheet back to saved."""
    controller = TimesheetController(db)
    data = await controller.reopen_timesheet(acting, timesheet_id)
    return ok(data, "Timesheet reopened successfully")


@router.delete("/{timesheet_id}", response_model=ApiResponse[None])
async def delete_timesheet(
    timesheet_id: UUID,
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
):
    """Delete a timesheet that has not been submitted."""
    controller = TimesheetController(db)
    await controller.delete_timesheet(acting, timesheet_id)
    return ok(None, "Timesheet deleted successfully")
