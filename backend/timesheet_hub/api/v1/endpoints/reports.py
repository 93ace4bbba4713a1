"""
Timesheet report API endpoints.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_hub.api.v1.middleware import client_ip, get_geo_client, require_acting_user
from timesheet_hub.controllers.timesheet_report_controller import TimesheetReportController
from timesheet_hub.core.exceptions import UnauthorizedError
from timesheet_hub.core.integrations.geolocation import GeoTimezoneClient
from timesheet_hub.db.session import get_db
from timesheet_hub.schemas.common import ApiResponse, ok
from timesheet_hub.schemas.report import TimesheetReportRequest, TimesheetReportResponse
from timesheet_hub.schemas.user import ActingUser

router = APIRouter()


@router.post("/timesheets", response_model=ApiResponse[TimesheetReportResponse])
async def timesheet_report(
    body: TimesheetReportRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
    geo_client: GeoTimezoneClient = Depends(get_geo_client),
):
    """Logged and approved hours grouped by project or employee."""
    if not acting.can_review:
        raise UnauthorizedError("You are not authorized to view timesheet reports")
    today = await geo_client.today_for_ip(client_ip(request))
    controller = TimesheetReportController(db)
    data = await controller.generate_report(body, today)
    return ok(data, "Timesheet report generated successfully")
