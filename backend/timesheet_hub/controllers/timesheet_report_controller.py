"""
Timesheet report controller.
"""

from datetime import date
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_hub.controllers.base_controller import BaseController
from timesheet_hub.schemas.report import TimesheetReportRequest, TimesheetReportResponse
from timesheet_hub.services.timesheet_report_service import TimesheetReportService


class TimesheetReportController(BaseController):
    """Controller for timesheet reports."""

    def __init__(self, session: AsyncSession):
        self.report_service = TimesheetReportService(session)

    async def generate_report(
        self,
        request: TimesheetReportRequest,
        today: Optional[date] = None,
    ) -> TimesheetReportResponse:
        return await self.report_service.generate_report(request, today or date.today())
