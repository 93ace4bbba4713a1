"""
Calendar reconciliation: expands sparse day sheets into a dense week grid.

Persisted entries only carry the days that have hours. The grid needs every
date of the displayed window, each flagged as holiday and/or disabled.
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Set

from timesheet_hub.models.timesheet import TimesheetStatus
from timesheet_hub.schemas.timesheet import (
    DueDayResponse,
    ReconciledDay,
    ReconciledTimesheetResponse,
    WeekDate,
)
from timesheet_hub.services.holiday_service import HolidayService
from timesheet_hub.utils.hours import ZERO_HOURS, format_hours, parse_hours
from timesheet_hub.utils.week_range import DateSpan, WeekWindow, dates_between, day_of_week

logger = logging.getLogger(__name__)

CLOSED_STATUSES = {TimesheetStatus.SUBMITTED, TimesheetStatus.ACCEPTED}
TOTAL_ROW = "TOTAL"

__all__ = [
    "CalendarReconciler",
    "build_week_dates",
    "reconcile_entries",
    "due_rows",
    "parse_hours",
    "format_hours",
]


def build_week_dates(days: DateSpan, holidays: Dict[date, bool], requested: WeekWindow) -> List[WeekDate]:
    """Header cells for every date of the displayed window."""
    return [
        WeekDate(
            day=d,
            normalized_date=d.isoformat(),
            day_of_week=day_of_week(d),
            is_holiday=holidays.get(d, False),
            is_disabled=not requested.contains(d),
        )
        for d in days
    ]


def reconcile_entries(
    entries: Iterable,
    days: DateSpan,
    holidays: Dict[date, bool],
    requested: WeekWindow,
) -> List[ReconciledTimesheetResponse]:
    """
    Expand each entry's stored days over every date of the window.

    Dates without a stored row get the "00:00" sentinel. Holiday flags always
    come from the holiday lookup, not from the stored row.
    """
    header = build_week_dates(days, holidays, requested)
    reconciled = []
    for entry in entries:
        stored = {day.work_date: day for day in entry.days}
        data_sheet = []
        for cell in header:
            row = stored.get(cell.day)
            data_sheet.append(
                ReconciledDay(
                    **cell.model_dump(),
                    hours=row.hours if row is not None else ZERO_HOURS,
                )
            )
        total = sum(parse_hours(day.hours) for day in data_sheet)
        reconciled.append(
            ReconciledTimesheetResponse(
                id=entry.id,
                project_id=entry.project_id,
                project_name=entry.project.project_name if entry.project else None,
                task_category_id=entry.task_category_id,
                task_category=entry.task_category.category if entry.task_category else None,
                task_detail=entry.task_detail,
                week_start=entry.week_start,
                week_end=entry.week_end,
                status=entry.status,
                version=entry.version,
                data_sheet=data_sheet,
                total_hours=total,
            )
        )
    return reconciled


def due_rows(reconciled: Iterable[ReconciledTimesheetResponse], days: DateSpan) -> List[DueDayResponse]:
    """
    Open hours per calendar date plus a trailing TOTAL row.

    Only entries not yet submitted or accepted contribute.
    """
    per_day: Dict[date, float] = {d: 0.0 for d in days}
    holiday_flags: Dict[date, bool] = {}
    for entry in reconciled:
        for cell in entry.data_sheet:
            holiday_flags[cell.day] = cell.is_holiday
            if entry.status in CLOSED_STATUSES:
                continue
            per_day[cell.day] = per_day.get(cell.day, 0.0) + parse_hours(cell.hours)

    rows = [
        DueDayResponse(
            date=d.isoformat(),
            day_of_week=day_of_week(d),
            is_holiday=holiday_flags.get(d, False),
            hours=hours,
        )
        for d, hours in sorted(per_day.items())
    ]
    rows.append(DueDayResponse(date=TOTAL_ROW, hours=sum(per_day.values())))
    return rows


class CalendarReconciler:
    """Binds the pure reconciliation steps to the holiday lookup."""

    def __init__(self, holiday_service: HolidayService):
        self.holiday_service = holiday_service

    async def holiday_flags(self, days: DateSpan, location: Optional[str]) -> Dict[date, bool]:
        """One holiday answer per date of the window."""
        if not len(days):
            return {}
        holiday_dates: Set[date] = await self.holiday_service.holidays_between(days.start, days.end, location)
        return {d: d in holiday_dates for d in days}

    async def week_dates(self, window: WeekWindow, requested: WeekWindow, location: Optional[str]) -> List[WeekDate]:
        days = window.dates()
        return build_week_dates(days, await self.holiday_flags(days, location), requested)

    async def reconcile(
        self,
        entries: Iterable,
        window_start: date,
        window_end: date,
        sub_start: date,
        sub_end: date,
        location: Optional[str] = None,
    ) -> List[ReconciledTimesheetResponse]:
        """Dense grid for entries over [window_start, window_end]."""
        days = dates_between(window_start, window_end)
        holidays = await self.holiday_flags(days, location)
        logger.debug(
            "Reconciling timesheets",
            extra={"window": f"{window_start} - {window_end}", "location": location},
        )
        return reconcile_entries(entries, days, holidays, WeekWindow(sub_start, sub_end))

    async def due(
        self,
        entries: Iterable,
        start: date,
        end: date,
        location: Optional[str] = None,
    ) -> List[DueDayResponse]:
        """Open hours per date over [start, end]."""
        reconciled = await self.reconcile(entries, start, end, start, end, location)
        return due_rows(reconciled, dates_between(start, end))
