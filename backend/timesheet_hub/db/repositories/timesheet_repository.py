"""
Timesheet repository for database operations.
Every user-facing query is scoped by the owning user id.
"""

from typing import Optional, List, Dict, Any, Iterable
from uuid import UUID
from datetime import date
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, and_
from sqlalchemy.orm import selectinload

from timesheet_hub.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from timesheet_hub.db.repositories.base_repository import BaseRepository
from timesheet_hub.models.project import Project
from timesheet_hub.models.timesheet import TimesheetEntry, TimesheetDay, TimesheetStatus
from timesheet_hub.models.user import User
from timesheet_hub.utils.hours import format_hours
from timesheet_hub.utils.week_range import normalize_date

logger = logging.getLogger(__name__)


def _day_value(day: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in day and day[key] is not None:
            return day[key]
    return None


class TimesheetRepository(BaseRepository[TimesheetEntry]):
    """Repository for timesheet entry operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(TimesheetEntry, session)

    def _query(self):
        return (
            select(TimesheetEntry)
            .options(
                selectinload(TimesheetEntry.days),
                selectinload(TimesheetEntry.project),
                selectinload(TimesheetEntry.task_category),
                selectinload(TimesheetEntry.user),
            )
            .execution_options(populate_existing=True)
        )

    async def _all(self, query) -> List[TimesheetEntry]:
        result = await self.session.execute(query)
        return list(result.scalars().unique().all())

    def _build_days(self, day_sheet: Iterable[Dict[str, Any]]) -> Dict[date, Dict[str, Any]]:
        """Validate a day sheet and key it by calendar date (last value wins)."""
        days: Dict[date, Dict[str, Any]] = {}
        for index, day in enumerate(day_sheet or []):
            raw_date = _day_value(day, "date", "work_date")
            raw_hours = _day_value(day, "hours")
            if raw_date is None or raw_hours is None:
                raise InvalidInputError(
                    "Each day must include a date and hours",
                    details={"index": index},
                )
            days[normalize_date(raw_date)] = {
                "hours": format_hours(raw_hours),
                "is_holiday": bool(_day_value(day, "isHoliday", "is_holiday")),
            }
        return days

    async def create(
        self,
        project_id: UUID,
        user_id: UUID,
        task_category_id: UUID,
        task_detail: str,
        week_start: Any,
        week_end: Any,
        day_sheet: Optional[List[Dict[str, Any]]] = None,
        status: TimesheetStatus = TimesheetStatus.IN_PROGRESS,
    ) -> TimesheetEntry:
        """Persist a new entry with its initial day rows."""
        days = self._build_days(day_sheet or [])
        entry = TimesheetEntry(
            project_id=project_id,
            user_id=user_id,
            task_category_id=task_category_id,
            task_detail=task_detail,
            week_start=normalize_date(week_start),
            week_end=normalize_date(week_end),
            status=status,
            version=1,
            days=[
                TimesheetDay(work_date=work_date, hours=values["hours"], is_holiday=values["is_holiday"])
                for work_date, values in sorted(days.items())
            ],
        )
        self.session.add(entry)
        await self.session.flush()
        return await self.get(entry.id)

    async def get(self, id: UUID) -> Optional[TimesheetEntry]:
        """Get entry by ID with its day rows."""
        result = await self.session.execute(self._query().where(TimesheetEntry.id == id))
        return result.scalar_one_or_none()

    async def get_owned(self, id: UUID, user_id: UUID) -> Optional[TimesheetEntry]:
        """Get entry by ID only if it belongs to the user."""
        result = await self.session.execute(
            self._query().where(TimesheetEntry.id == id, TimesheetEntry.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def update_day_sheet(
        self,
        id: UUID,
        day_sheet: List[Dict[str, Any]],
        status: TimesheetStatus,
        editable_statuses: Iterable[TimesheetStatus],
        expected_version: Optional[int] = None,
    ) -> TimesheetEntry:
        """
        Merge day rows into an entry and set its status.

        Rows on a date that already exists overwrite it; other rows are appended.

        Raises:
            NotFoundError: If the entry does not exist
            ConflictError: If the entry is not editable or the version is stale
            InvalidInputError: If a day lacks a date or hours
        """
        entry = await self.get(id)
        if not entry:
            raise NotFoundError("Timesheet not found", details={"timesheet_id": str(id)})
        if entry.status not in set(editable_statuses):
            raise ConflictError(
                f"Timesheet is {entry.status.value} and cannot be modified",
                details={"timesheet_id": str(id), "status": entry.status.value},
            )
        if expected_version is not None and expected_version != entry.version:
            raise ConflictError(
                "Timesheet was modified by another request",
                details={"timesheet_id": str(id), "expected_version": expected_version, "version": entry.version},
            )

        incoming = self._build_days(day_sheet)
        existing = {day.work_date: day for day in entry.days}
        for work_date, values in sorted(incoming.items()):
            day = existing.get(work_date)
            if day is not None:
                day.hours = values["hours"]
                day.is_holiday = values["is_holiday"]
            else:
                entry.days.append(
                    TimesheetDay(work_date=work_date, hours=values["hours"], is_holiday=values["is_holiday"])
                )

        entry.status = status
        entry.version = entry.version + 1
        await self.session.flush()
        return await self.get(id)

    async def find_by_owner(
        self,
        user_id: UUID,
        status: Optional[TimesheetStatus] = None,
    ) -> List[TimesheetEntry]:
        """All entries of a user, newest window first."""
        query = self._query().where(TimesheetEntry.user_id == user_id)
        if status:
            query = query.where(TimesheetEntry.status == status)
        return await self._all(query.order_by(TimesheetEntry.week_start.desc(), TimesheetEntry.created_at))

    async def find_by_window(
        self,
        user_id: UUID,
        start: date,
        end: date,
        status: Optional[TimesheetStatus] = None,
    ) -> List[TimesheetEntry]:
        """Entries whose window equals [start, end] exactly."""
        query = self._query().where(
            TimesheetEntry.user_id == user_id,
            TimesheetEntry.week_start == start,
            TimesheetEntry.week_end == end,
        )
        if status:
            query = query.where(TimesheetEntry.status == status)
        return await self._all(query.order_by(TimesheetEntry.created_at))

    async def find_matching(
        self,
        user_id: UUID,
        project_id: UUID,
        task_category_id: UUID,
        task_detail: str,
        start: date,
        end: date,
    ) -> Optional[TimesheetEntry]:
        """Existing entry for the same project, category, task and window."""
        query = self._query().where(
            TimesheetEntry.user_id == user_id,
            TimesheetEntry.project_id == project_id,
            TimesheetEntry.task_category_id == task_category_id,
            TimesheetEntry.task_detail == task_detail,
            TimesheetEntry.week_start == start,
            TimesheetEntry.week_end == end,
        )
        entries = await self._all(query.order_by(TimesheetEntry.created_at).limit(1))
        return entries[0] if entries else None

    async def find_overlapping(self, user_id: UUID, start: date, end: date) -> List[TimesheetEntry]:
        """Entries whose window shares at least one day with [start, end]."""
        query = self._query().where(
            TimesheetEntry.user_id == user_id,
            TimesheetEntry.week_start <= end,
            TimesheetEntry.week_end >= start,
        )
        return await self._all(query.order_by(TimesheetEntry.week_start, TimesheetEntry.created_at))

    async def find_for_day(self, user_id: UUID, day: date) -> List[TimesheetEntry]:
        """Entries with a day row on the given date."""
        query = (
            self._query()
            .join(TimesheetDay, TimesheetDay.entry_id == TimesheetEntry.id)
            .where(TimesheetEntry.user_id == user_id, TimesheetDay.work_date == day)
        )
        return await self._all(query.order_by(TimesheetEntry.created_at))

    async def list_by_status(
        self,
        status: TimesheetStatus,
        skip: int = 0,
        limit: int = 100,
        exclude_user_id: Optional[UUID] = None,
        project_lead_id: Optional[UUID] = None,
        owner_roles: Optional[List[str]] = None,
    ) -> List[TimesheetEntry]:
        """
        Entries in a given status, oldest window first.

        Args:
            exclude_user_id: Leave out this user's own entries
            project_lead_id: Only entries on projects led by this user
            owner_roles: Only entries whose owner has one of these roles
        """
        query = self._query().where(TimesheetEntry.status == status)
        if exclude_user_id is not None:
            query = query.where(TimesheetEntry.user_id != exclude_user_id)
        if project_lead_id is not None:
            query = query.where(
                TimesheetEntry.project_id.in_(select(Project.id).where(Project.project_lead_id == project_lead_id))
            )
        if owner_roles:
            query = query.where(TimesheetEntry.user_id.in_(select(User.id).where(User.role.in_(owner_roles))))
        query = (
            query
            .order_by(TimesheetEntry.week_start, TimesheetEntry.created_at)
            .offset(skip)
            .limit(limit)
        )
        return await self._all(query)

    async def count_by_status(self, user_id: UUID, start: date, end: date) -> Dict[TimesheetStatus, int]:
        """Entry counts per status for windows ending inside [start, end]."""
        result = await self.session.execute(
            select(TimesheetEntry.status, func.count(TimesheetEntry.id))
            .where(
                and_(
                    TimesheetEntry.user_id == user_id,
                    TimesheetEntry.week_end >= start,
                    TimesheetEntry.week_end <= end,
                )
            )
            .group_by(TimesheetEntry.status)
        )
        return {row[0]: row[1] for row in result.all()}

    async def report_rows(
        self,
        start: date,
        end: date,
        project_ids: Optional[List[UUID]] = None,
        user_ids: Optional[List[UUID]] = None,
    ) -> List[Any]:
        """
        Flat day rows joined with project and user for reporting.

        Returns:
            Rows of (project_id, project_name, user_id, user_name, status, work_date, hours)
        """
        query = (
            select(
                Project.id.label("project_id"),
                Project.project_name.label("project_name"),
                User.id.label("user_id"),
                User.full_name.label("user_name"),
                TimesheetEntry.status.label("status"),
                TimesheetDay.work_date.label("work_date"),
                TimesheetDay.hours.label("hours"),
            )
            .select_from(TimesheetDay)
            .join(TimesheetEntry, TimesheetDay.entry_id == TimesheetEntry.id)
            .join(Project, TimesheetEntry.project_id == Project.id)
            .join(User, TimesheetEntry.user_id == User.id)
            .where(TimesheetDay.work_date >= start, TimesheetDay.work_date <= end)
        )
        if project_ids:
            query = query.where(TimesheetEntry.project_id.in_(project_ids))
        if user_ids:
            query = query.where(TimesheetEntry.user_id.in_(user_ids))
        result = await self.session.execute(query.order_by(TimesheetDay.work_date))
        return list(result.all())

    async def set_status(self, entry: TimesheetEntry, status: TimesheetStatus) -> TimesheetEntry:
        """Move an entry to a new status."""
        logger.info(
            "Timesheet status change",
            extra={"timesheet_id": str(entry.id), "from": entry.status.value, "to": status.value},
        )
        entry.status = status
        await self.session.flush()
        return await self.get(entry.id)

    async def delete(self, id: UUID) -> bool:
        """Delete an entry together with its day rows."""
        entry = await self.get(id)
        if not entry:
            return False
        await self.session.delete(entry)
        await self.session.flush()
        return True
