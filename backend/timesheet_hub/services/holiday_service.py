"""
Holiday service: answers "is this date a holiday here?" and manages the dataset.
"""

import logging
from datetime import date
from typing import Optional, List, Set, Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_hub.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from timesheet_hub.db.repositories.holiday_repository import HolidayRepository
from timesheet_hub.models.holiday import HolidayType
from timesheet_hub.schemas.holiday import HolidayCreate, HolidayUpdate, HolidayResponse, HolidayCheckResponse
from timesheet_hub.services.base_service import BaseService
from timesheet_hub.utils.week_range import normalize_date

logger = logging.getLogger(__name__)


class HolidayService(BaseService):
    """Service for holiday lookups and administration."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.holiday_repo = HolidayRepository(session)

    async def is_holiday(self, day: Any, location: Optional[str] = None) -> bool:
        """
        Check whether a calendar day falls inside any holiday.

        Args:
            day: Date, datetime or ISO date string
            location: Restrict the lookup to one location's calendar

        Raises:
            InvalidInputError: If the day cannot be parsed
        """
        holiday = await self.holiday_repo.find_covering(normalize_date(day), location)
        return holiday is not None

    async def holidays_between(self, start: Any, end: Any, location: Optional[str] = None) -> Set[date]:
        """All holiday dates inside [start, end] for a location."""
        start, end = normalize_date(start), normalize_date(end)
        if end < start:
            return set()
        return await self.holiday_repo.dates_between(start, end, location)

    async def check_holiday(self, day: Any, location: Optional[str] = None) -> HolidayCheckResponse:
        day = normalize_date(day)
        return HolidayCheckResponse(day=day, location=location, is_holiday=await self.is_holiday(day, location))

    async def create_holiday(self, holiday_data: HolidayCreate) -> HolidayResponse:
        """Create a holiday, rejecting overlapping duplicates at the same location."""
        end_date = holiday_data.end_date or holiday_data.start_date
        if end_date < holiday_data.start_date:
            raise InvalidInputError(
                "end_date must not be before start_date",
                details={"start_date": str(holiday_data.start_date), "end_date": str(end_date)},
            )
        duplicate = await self.holiday_repo.find_duplicate(
            holiday_data.holiday_name, holiday_data.location, holiday_data.start_date, end_date
        )
        if duplicate:
            raise ConflictError(
                f"Holiday '{holiday_data.holiday_name}' already exists for {holiday_data.location}",
                details={"holiday_id": str(duplicate.id)},
            )

        holiday = await self.holiday_repo.create(
            holiday_name=holiday_data.holiday_name,
            holiday_type=holiday_data.holiday_type,
            start_date=holiday_data.start_date,
            end_date=end_date,
            location=holiday_data.location,
        )
        await self.session.commit()
        logger.info(
            "Holiday created",
            extra={"holiday_id": str(holiday.id), "location": holiday.location},
        )
        return HolidayResponse.model_validate(holiday)

    async def update_holiday(self, holiday_id: UUID, holiday_data: HolidayUpdate) -> HolidayResponse:
        """Replace a holiday's fields, keeping the duplicate check against every other holiday."""
        if not await self.holiday_repo.get(holiday_id):
            raise NotFoundError("Holiday not found", details={"holiday_id": str(holiday_id)})
        end_date = holiday_data.end_date or holiday_data.start_date
        duplicate = await self.holiday_repo.find_duplicate(
            holiday_data.holiday_name,
            holiday_data.location,
            holiday_data.start_date,
            end_date,
            exclude_id=holiday_id,
        )
        if duplicate:
            raise ConflictError(
                f"Holiday '{holiday_data.holiday_name}' already exists for {holiday_data.location}",
                details={"holiday_id": str(duplicate.id)},
            )

        holiday = await self.holiday_repo.update(
            holiday_id,
            holiday_name=holiday_data.holiday_name,
            holiday_type=holiday_data.holiday_type,
            start_date=holiday_data.start_date,
            end_date=end_date,
            location=holiday_data.location,
        )
        await self.session.commit()
        logger.info("Holiday updated", extra={"holiday_id": str(holiday_id), "location": holiday.location})
        return HolidayResponse.model_validate(holiday)

    async def get_holiday(self, holiday_id: UUID) -> HolidayResponse:
        holiday = await self.holiday_repo.get(holiday_id)
        if not holiday:
            raise NotFoundError("Holiday not found", details={"holiday_id": str(holiday_id)})
        return HolidayResponse.model_validate(holiday)

    async def list_holidays(
        self,
        location: Optional[str] = None,
        holiday_type: Optional[HolidayType] = None,
        year: Optional[int] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[HolidayResponse]:
        holidays = await self.holiday_repo.list_holidays(location, holiday_type, year, skip, limit)
        return [HolidayResponse.model_validate(h) for h in holidays]

    async def delete_holiday(self, holiday_id: UUID) -> None:
        deleted = await self.holiday_repo.delete(holiday_id)
        if not deleted:
            raise NotFoundError("Holiday not found", details={"holiday_id": str(holiday_id)})
        await self.session.commit()
        logger.info("Holiday deleted", extra={"holiday_id": str(holiday_id)})
