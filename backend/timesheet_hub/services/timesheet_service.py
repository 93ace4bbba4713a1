"""
Timesheet service - save, submit, weekly grid, due hours and snapshots.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Optional, List, Dict, Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_hub.core.exceptions import ConflictError, InvalidInputError, NotFoundError, UnauthorizedError
from timesheet_hub.db.repositories.project_repository import ProjectRepository, TaskCategoryRepository
from timesheet_hub.db.repositories.rejection_note_repository import RejectionNoteRepository
from timesheet_hub.db.repositories.timesheet_repository import TimesheetRepository
from timesheet_hub.models.project import TimeEntryState
from timesheet_hub.models.timesheet import TimesheetEntry, TimesheetStatus
from timesheet_hub.schemas.timesheet import (
    DateRange,
    DueDayResponse,
    RejectionNoteResponse,
    TimesheetDayResponse,
    TimesheetEntryResponse,
    TimesheetSaveItem,
    TimesheetSnapshotResponse,
    TodayProjectHours,
    TodayTimesheetResponse,
    WeeklyTimesheetResponse,
)
from timesheet_hub.schemas.user import ActingUser
from timesheet_hub.services.base_service import BaseService
from timesheet_hub.services.calendar_reconciler import CalendarReconciler
from timesheet_hub.services.holiday_service import HolidayService
from timesheet_hub.services.timesheet_workflow import EditPolicy
from timesheet_hub.utils.hours import parse_hours
from timesheet_hub.utils.week_range import (
    WeekWindow,
    full_week,
    month_range,
    normalize_date,
    shift_week,
    week_range,
)

logger = logging.getLogger(__name__)


def to_entry_response(entry: TimesheetEntry) -> TimesheetEntryResponse:
    """Build the API view of a stored entry."""
    return TimesheetEntryResponse(
        id=entry.id,
        user_id=entry.user_id,
        user_name=entry.user.full_name if entry.user else None,
        project_id=entry.project_id,
        project_name=entry.project.project_name if entry.project else None,
        task_category_id=entry.task_category_id,
        task_category=entry.task_category.category if entry.task_category else None,
        task_detail=entry.task_detail,
        week_start=entry.week_start,
        week_end=entry.week_end,
        status=entry.status,
        version=entry.version,
        data_sheet=[
            TimesheetDayResponse(work_date=day.work_date, hours=day.hours, is_holiday=day.is_holiday)
            for day in entry.days
        ],
    )


class TimesheetService(BaseService):
    """Service for an employee's own timesheets."""

    def __init__(self, session: AsyncSession, policy: Optional[EditPolicy] = None):
        self.session = session
        self.policy = policy or EditPolicy()
        self.timesheet_repo = TimesheetRepository(session)
        self.project_repo = ProjectRepository(session)
        self.category_repo = TaskCategoryRepository(session)
        self.rejection_note_repo = RejectionNoteRepository(session)
        self.reconciler = CalendarReconciler(HolidayService(session))

    async def _get_owned(self, timesheet_id: UUID, user_id: UUID) -> TimesheetEntry:
        entry = await self.timesheet_repo.get_owned(timesheet_id, user_id)
        if entry:
            return entry
        if await self.timesheet_repo.get(timesheet_id):
            raise UnauthorizedError(
                "You are not allowed to access this timesheet",
                details={"timesheet_id": str(timesheet_id)},
            )
        raise NotFoundError("Timesheet not found", details={"timesheet_id": str(timesheet_id)})

    def _day_sheet(self, item: TimesheetSaveItem, window: WeekWindow) -> List[Dict[str, Any]]:
        days = []
        for day in item.data_sheet:
            work_date = normalize_date(day.date)
            if not window.contains(work_date):
                raise InvalidInputError(
                    f"{work_date.isoformat()} is outside the week {window.label()}",
                    details={"date": work_date.isoformat(), "week": window.label()},
                )
            days.append({"date": work_date, "hours": day.hours, "isHoliday": day.is_holiday})
        return days

    async def _save_one(self, acting: ActingUser, item: TimesheetSaveItem, today: date) -> TimesheetEntry:
        if not await self.project_repo.get(item.project_id):
            raise NotFoundError("Project not found", details={"project_id": str(item.project_id)})
        if not await self.category_repo.get(item.task_category_id):
            raise NotFoundError("Task category not found", details={"task_category_id": str(item.task_category_id)})

        status = TimesheetStatus(item.status) if item.status else TimesheetStatus.SAVED

        if item.timesheet_id:
            entry = await self._get_owned(item.timesheet_id, acting.id)
            window = WeekWindow(entry.week_start, entry.week_end)
        else:
            anchor = item.passed_date or (item.data_sheet[0].date if item.data_sheet else today)
            window = week_range(anchor)
            entry = await self.timesheet_repo.find_matching(
                acting.id, item.project_id, item.task_category_id, item.task_detail, window.start, window.end
            )

        day_sheet = self._day_sheet(item, window)

        if entry is None:
            return await self.timesheet_repo.create(
                project_id=item.project_id,
                user_id=acting.id,
                task_category_id=item.task_category_id,
                task_detail=item.task_detail,
                week_start=window.start,
                week_end=window.end,
                day_sheet=day_sheet,
                status=status,
            )

        self.policy.ensure_transition(entry.status, status)
        return await self.timesheet_repo.update_day_sheet(
            entry.id,
            day_sheet,
            status,
            self.policy.editable_statuses,
            expected_version=item.version,
        )

    async def save_timesheets(
        self,
        acting: ActingUser,
        items: List[TimesheetSaveItem],
        today: date,
    ) -> List[TimesheetEntryResponse]:
        """
        Create or update a batch of entries.

        The batch is all-or-nothing: the first failing item aborts it and
        nothing is committed.
        """
        saved = [await self._save_one(acting, item, today) for item in items]
        await self.session.commit()
        logger.info(
            "Timesheets saved",
            extra={"user_id": str(acting.id), "count": len(saved)},
        )
        return [to_entry_response(entry) for entry in saved]

    async def submit_timesheets(self, acting: ActingUser, timesheet_ids: List[UUID]) -> List[TimesheetEntryResponse]:
        """Submit saved entries for approval."""
        submitted = []
        for timesheet_id in timesheet_ids:
            entry = await self._get_owned(timesheet_id, acting.id)
            self.policy.ensure_transition(entry.status, TimesheetStatus.SUBMITTED)
            if entry.project is None or entry.project.open_for_time_entry != TimeEntryState.OPENED:
                raise ConflictError(
                    "Project is closed for time entry",
                    details={"timesheet_id": str(timesheet_id), "project_id": str(entry.project_id)},
                )
            submitted.append(await self.timesheet_repo.set_status(entry, TimesheetStatus.SUBMITTED))
        await self.session.commit()
        logger.info(
            "Timesheets submitted",
            extra={"user_id": str(acting.id), "count": len(submitted)},
        )
        return [to_entry_response(entry) for entry in submitted]

    async def get_weekly_timesheets(
        self,
        acting: ActingUser,
        today: date,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        direction: Optional[str] = None,
    ) -> WeeklyTimesheetResponse:
        """
        Weekly grid for the canonical week containing start_date (or today).

        The grid always shows the full Sunday-Saturday week; days outside the
        requested range are disabled.
        """
        start = normalize_date(start_date) if start_date else today
        end = normalize_date(end_date) if end_date else None
        if end is not None and end < start:
            raise InvalidInputError(
                "endDate must not be before startDate",
                details={"startDate": start.isoformat(), "endDate": end.isoformat()},
            )

        window = week_range(start)
        if direction in ("prev", "next"):
            window = shift_week(window.start, window.end, direction)
            requested = window
        else:
            # without an explicit startDate the whole current week stays enabled
            first = max(start, window.start) if start_date else window.start
            requested = WeekWindow(first, min(end or window.end, window.end))
        display = full_week(window.start)
        location = acting.holiday_location

        entries = await self.timesheet_repo.find_by_window(acting.id, window.start, window.end)
        data = await self.reconciler.reconcile(
            entries, display.start, display.end, requested.start, requested.end, location
        )
        week_dates = await self.reconciler.week_dates(display, requested, location)
        note = await self.rejection_note_repo.get_by_week(acting.id, window.start, window.end)

        return WeeklyTimesheetResponse(
            data=data,
            week_dates=week_dates,
            date_range=DateRange(start_date=window.start, end_date=window.end),
            rejection_note=RejectionNoteResponse.model_validate(note) if note else None,
        )

    async def get_due_timesheets(
        self,
        acting: ActingUser,
        today: date,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[DueDayResponse]:
        """Hours still open (not submitted or accepted) per date, with a TOTAL row."""
        if start_date and end_date:
            window = WeekWindow(normalize_date(start_date), normalize_date(end_date))
            if window.end < window.start:
                raise InvalidInputError(
                    "endDate must not be before startDate",
                    details={"startDate": start_date, "endDate": end_date},
                )
        else:
            window = week_range(start_date or today)

        entries = await self.timesheet_repo.find_overlapping(acting.id, window.start, window.end)
        return await self.reconciler.due(entries, window.start, window.end, acting.holiday_location)

    async def get_today(self, acting: ActingUser, today: date) -> TodayTimesheetResponse:
        """Hours the user logged today, per project."""
        entries = await self.timesheet_repo.find_for_day(acting.id, today)
        per_project: Dict[UUID, float] = defaultdict(float)
        names: Dict[UUID, str] = {}
        for entry in entries:
            for day in entry.days:
                if day.work_date == today:
                    per_project[entry.project_id] += parse_hours(day.hours)
            names[entry.project_id] = entry.project.project_name if entry.project else ""

        projects = [
            TodayProjectHours(project_id=project_id, project_name=names[project_id], hours=hours)
            for project_id, hours in sorted(per_project.items(), key=lambda item: names[item[0]])
        ]
        return TodayTimesheetResponse(
            day=today,
            total_hours=sum(p.hours for p in projects),
            projects=projects,
        )

    async def delete_timesheet(self, acting: ActingUser, timesheet_id: UUID) -> None:
        """Delete an entry that has not been submitted or accepted."""
        entry = await self._get_owned(timesheet_id, acting.id)
        if entry.status in (TimesheetStatus.SUBMITTED, TimesheetStatus.ACCEPTED):
            raise ConflictError(
                f"Timesheet is {entry.status.value} and cannot be deleted",
                details={"timesheet_id": str(timesheet_id), "status": entry.status.value},
            )
        await self.timesheet_repo.delete(timesheet_id)
        await self.session.commit()
        logger.info("Timesheet deleted", extra={"timesheet_id": str(timesheet_id), "user_id": str(acting.id)})

    async def reopen_timesheet(self, acting: ActingUser, timesheet_id: UUID) -> TimesheetEntryResponse:
        """Move a rejected entry back to saved so it can be edited."""
        entry = await self._get_owned(timesheet_id, acting.id)
        if entry.status != TimesheetStatus.REJECTED:
            raise ConflictError(
                "Only rejected timesheets can be reopened",
                details={"timesheet_id": str(timesheet_id), "status": entry.status.value},
            )
        entry = await self.timesheet_repo.set_status(entry, TimesheetStatus.SAVED)
        await self.session.commit()
        return to_entry_response(entry)

    async def get_snapshot(
        self,
        acting: ActingUser,
        today: date,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> TimesheetSnapshotResponse:
        """Entry counts per status for weeks ending in a month."""
        period = month_range(year or today.year, month or today.month)
        counts = await self.timesheet_repo.count_by_status(acting.id, period.start, period.end)
        return TimesheetSnapshotResponse(
            in_progress=counts.get(TimesheetStatus.IN_PROGRESS, 0),
            saved=counts.get(TimesheetStatus.SAVED, 0),
            submitted=counts.get(TimesheetStatus.SUBMITTED, 0),
            approved=counts.get(TimesheetStatus.ACCEPTED, 0),
            rejected=counts.get(TimesheetStatus.REJECTED, 0),
        )
