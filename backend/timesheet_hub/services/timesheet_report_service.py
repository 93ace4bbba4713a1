"""
Timesheet report service - logged vs approved hours per project or employee.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_hub.core.exceptions import InvalidInputError, UnknownReportError
from timesheet_hub.db.repositories.timesheet_repository import TimesheetRepository
from timesheet_hub.schemas.report import (
    EmployeeReportRow,
    ProjectReportRow,
    TimesheetReportRequest,
    TimesheetReportResponse,
)
from timesheet_hub.services.base_service import BaseService
from timesheet_hub.services.timesheet_workflow import counts_as_approved
from timesheet_hub.utils.hours import parse_hours
from timesheet_hub.utils.week_range import WeekWindow, month_range, normalize_date

logger = logging.getLogger(__name__)


class HoursTotals:
    """Running logged/approved totals for one group."""

    __slots__ = ("logged", "approved")

    def __init__(self):
        self.logged = 0.0
        self.approved = 0.0

    def add(self, hours: float, approved: bool) -> None:
        self.logged += hours
        if approved:
            self.approved += hours


def _round(value: float) -> float:
    return round(value, 2)


class TimesheetReportService(BaseService):
    """Service for timesheet reports."""

    def __init__(self, session: AsyncSession, approved_predicate: Optional[str] = None):
        self.session = session
        self.approved_predicate = approved_predicate
        self.timesheet_repo = TimesheetRepository(session)
        self._builders: Dict[str, Callable[..., List[Dict[str, Any]]]] = {
            "projectSummary": lambda rows, period, year, month: self._project_rows(rows, period, year, month, False),
            "projectDetail": lambda rows, period, year, month: self._project_rows(rows, period, year, month, True),
            "employeeSummary": lambda rows, period, year, month: self._employee_rows(rows, period, year, month, False),
            "employeeDetail": lambda rows, period, year, month: self._employee_rows(rows, period, year, month, True),
        }

    def _period(self, request: TimesheetReportRequest, today: date) -> Tuple[WeekWindow, int, int]:
        if request.start_date and request.end_date:
            period = WeekWindow(normalize_date(request.start_date), normalize_date(request.end_date))
            if period.end < period.start:
                raise InvalidInputError(
                    "endDate must not be before startDate",
                    details={"startDate": request.start_date, "endDate": request.end_date},
                )
            return period, period.start.year, period.start.month
        year = request.year or today.year
        month = request.month or today.month
        return month_range(year, month), year, month

    def _project_rows(self, rows, period: WeekWindow, year: int, month: int, detail: bool) -> List[Dict[str, Any]]:
        totals: Dict[Any, HoursTotals] = defaultdict(HoursTotals)
        names: Dict[Any, str] = {}
        for row in rows:
            names[row.project_id] = row.project_name
            totals[row.project_id].add(parse_hours(row.hours), counts_as_approved(row.status, self.approved_predicate))

        report = [
            ProjectReportRow(
                project_name=names[project_id],
                year=year,
                month=month,
                logged_hours=_round(t.logged),
                approved_hours=_round(t.approved),
                date_range=period.label() if detail else None,
            )
            for project_id, t in totals.items()
        ]
        report.sort(key=lambda r: r.project_name.lower())
        return [r.model_dump(by_alias=True, exclude_none=True) for r in report]

    def _employee_rows(self, rows, period: WeekWindow, year: int, month: int, detail: bool) -> List[Dict[str, Any]]:
        by_employee: Dict[Any, Dict[Any, HoursTotals]] = defaultdict(lambda: defaultdict(HoursTotals))
        employee_names: Dict[Any, str] = {}
        project_names: Dict[Any, str] = {}
        for row in rows:
            employee_names[row.user_id] = row.user_name
            project_names[row.project_id] = row.project_name
            by_employee[row.user_id][row.project_id].add(
                parse_hours(row.hours), counts_as_approved(row.status, self.approved_predicate)
            )

        report = []
        for user_id in sorted(by_employee, key=lambda u: employee_names[u].lower()):
            projects = by_employee[user_id]
            total_logged = sum(t.logged for t in projects.values())
            total_approved = sum(t.approved for t in projects.values())
            for project_id in sorted(projects, key=lambda p: project_names[p].lower()):
                t = projects[project_id]
                report.append(
                    EmployeeReportRow(
                        employee_name=employee_names[user_id],
                        project_name=project_names[project_id],
                        year=year,
                        month=month,
                        logged_hours=_round(t.logged),
                        approved_hours=_round(t.approved),
                        total_logged=_round(total_logged),
                        total_approved=_round(total_approved),
                        date_range=period.label() if detail else None,
                    )
                )
        return [r.model_dump(by_alias=True, exclude_none=True) for r in report]

    async def generate_report(self, request: TimesheetReportRequest, today: date) -> TimesheetReportResponse:
        """
        Build one report tab.

        Raises:
            UnknownReportError: If tab_key is not a known report
            InvalidInputError: If the date range is malformed
        """
        builder = self._builders.get(request.tab_key)
        if builder is None:
            raise UnknownReportError(request.tab_key)

        period, year, month = self._period(request, today)
        rows = await self.timesheet_repo.report_rows(
            period.start, period.end, request.project_ids, request.user_ids
        )
        logger.info(
            "Timesheet report generated",
            extra={"tab_key": request.tab_key, "window": period.label(), "rows": len(rows)},
        )
        return TimesheetReportResponse(
            tab_key=request.tab_key,
            start_date=period.start.isoformat(),
            end_date=period.end.isoformat(),
            rows=builder(rows, period, year, month),
        )
