"""
Timesheet controller - coordinates service calls.
"""

from datetime import date
from typing import Optional, List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_hub.controllers.base_controller import BaseController
from timesheet_hub.core.integrations.geolocation import GeoTimezoneClient
from timesheet_hub.schemas.approval import (
    ManageAllTimesheetsRequest,
    ManageAllTimesheetsResponse,
    ManageTimesheetRequest,
)
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
from timesheet_hub.services.timesheet_approval_service import TimesheetApprovalService
from timesheet_hub.services.timesheet_service import TimesheetService


class TimesheetController(BaseController):
    """Controller for timesheet operations."""

    def __init__(self, session: AsyncSession, geo_client: Optional[GeoTimezoneClient] = None):
        self.timesheet_service = TimesheetService(session)
        self.approval_service = TimesheetApprovalService(session)
        self.geo_client = geo_client

    async def _today(self, client_ip: Optional[str]) -> date:
        """Current date in the caller's timezone."""
        if self.geo_client is None:
            return date.today()
        return await self.geo_client.today_for_ip(client_ip)

    async def save_timesheets(
        self,
        acting: ActingUser,
        request: TimesheetSaveRequest,
        client_ip: Optional[str] = None,
    ) -> List[TimesheetEntryResponse]:
        today = await self._today(client_ip)
        return await self.timesheet_service.save_timesheets(acting, request.timesheets, today)

    async def submit_timesheets(
        self,
        acting: ActingUser,
        request: TimesheetSubmitRequest,
    ) -> List[TimesheetEntryResponse]:
        return await self.timesheet_service.submit_timesheets(acting, request.timesheets)

    async def get_weekly_timesheets(
        self,
        acting: ActingUser,
        request: WeeklyTimesheetRequest,
        client_ip: Optional[str] = None,
    ) -> WeeklyTimesheetResponse:
        today = await self._today(client_ip)
        return await self.timesheet_service.get_weekly_timesheets(
            acting, today, request.start_date, request.end_date, request.direction
        )

    async def get_due_timesheets(
        self,
        acting: ActingUser,
        request: DueTimesheetRequest,
        client_ip: Optional[str] = None,
    ) -> List[DueDayResponse]:
        today = await self._today(client_ip)
        return await self.timesheet_service.get_due_timesheets(
            acting, today, request.start_date, request.end_date
        )

    async def get_today(self, acting: ActingUser, client_ip: Optional[str] = None) -> TodayTimesheetResponse:
        today = await self._today(client_ip)
        return await self.timesheet_service.get_today(acting, today)

    async def get_snapshot(
        self,
        acting: ActingUser,
        request: SnapshotRequest,
        client_ip: Optional[str] = None,
    ) -> TimesheetSnapshotResponse:
        today = await self._today(client_ip)
        return await self.timesheet_service.get_snapshot(acting, today, request.year, request.month)

    async def delete_timesheet(self, acting: ActingUser, timesheet_id: UUID) -> None:
        await self.timesheet_service.delete_timesheet(acting, timesheet_id)

    async def reopen_timesheet(self, acting: ActingUser, timesheet_id: UUID) -> TimesheetEntryResponse:
        return await self.timesheet_service.reopen_timesheet(acting, timesheet_id)

    async def manage_timesheet(
        self,
        acting: ActingUser,
        request: ManageTimesheetRequest,
    ) -> TimesheetEntryResponse:
        return await self.approval_service.manage_timesheet(
            acting, request.timesheet_id, request.state, request.notes
        )

    async def manage_all_timesheets(
        self,
        acting: ActingUser,
        request: ManageAllTimesheetsRequest,
    ) -> ManageAllTimesheetsResponse:
        return await self.approval_service.manage_all_timesheets(
            acting, request.timesheet_id, request.status, request.user_id, request.notes
        )

    async def list_pending_approvals(
        self,
        acting: ActingUser,
        skip: int = 0,
        limit: int = 100,
    ) -> List[TimesheetEntryResponse]:
        return await self.approval_service.list_pending_approvals(acting, skip, limit)
