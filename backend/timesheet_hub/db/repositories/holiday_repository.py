"""
Holiday repository for database operations.
"""

from typing import Optional, List, Set
from datetime import date
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, extract

from timesheet_hub.db.repositories.base_repository import BaseRepository
from timesheet_hub.models.holiday import Holiday, HolidayType
from timesheet_hub.utils.week_range import dates_between


class HolidayRepository(BaseRepository[Holiday]):
    """Repository for holiday operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Holiday, session)

    def _scoped(self, query, location: Optional[str]):
        if location:
            query = query.where(Holiday.location == location)
        return query

    async def find_covering(self, day: date, location: Optional[str] = None) -> Optional[Holiday]:
        """First holiday whose [start_date, end_date] contains the day."""
        query = select(Holiday).where(
            and_(Holiday.start_date <= day, Holiday.end_date >= day)
        )
        result = await self.session.execute(self._scoped(query, location).limit(1))
        return result.scalar_one_or_none()

    async def list_overlapping(self, start: date, end: date, location: Optional[str] = None) -> List[Holiday]:
        """Holidays with at least one day inside [start, end]."""
        query = select(Holiday).where(
            and_(Holiday.start_date <= end, Holiday.end_date >= start)
        ).order_by(Holiday.start_date)
        result = await self.session.execute(self._scoped(query, location))
        return list(result.scalars().all())

    async def dates_between(self, start: date, end: date, location: Optional[str] = None) -> Set[date]:
        """Every holiday date inside [start, end]."""
        days: Set[date] = set()
        for holiday in await self.list_overlapping(start, end, location):
            days.update(
                d for d in dates_between(max(holiday.start_date, start), min(holiday.end_date, end))
            )
        return days

    async def find_duplicate(
        self,
        holiday_name: str,
        location: str,
        start: date,
        end: date,
        exclude_id: Optional[UUID] = None,
    ) -> Optional[Holiday]:
        """Existing holiday with the same name and location overlapping the range."""
        query = select(Holiday).where(
            and_(
                Holiday.holiday_name == holiday_name,
                Holiday.location == location,
                Holiday.start_date <= end,
                Holiday.end_date >= start,
            )
        )
        if exclude_id is not None:
            query = query.where(Holiday.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def list_holidays(
        self,
        location: Optional[str] = None,
        holiday_type: Optional[HolidayType] = None,
        year: Optional[int] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Holiday]:
        """List holidays, optionally filtered by location, type and year."""
        query = self._scoped(select(Holiday), location)
        if holiday_type:
            query = query.where(Holiday.holiday_type == holiday_type)
        if year:
            query = query.where(extract("year", Holiday.start_date) == year)
        query = query.order_by(Holiday.start_date).offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())
