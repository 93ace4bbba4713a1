"""
Holiday controller - coordinates service calls.
"""

from typing import Optional, List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_hub.controllers.base_controller import BaseController
from timesheet_hub.models.holiday import HolidayType
from timesheet_hub.schemas.holiday import HolidayCreate, HolidayUpdate, HolidayResponse, HolidayCheckResponse
from timesheet_hub.services.holiday_service import HolidayService


class HolidayController(BaseController):
    """Controller for holiday operations."""

    def __init__(self, session: AsyncSession):
        self.holiday_service = HolidayService(session)

    async def create_holiday(self, holiday_data: HolidayCreate) -> HolidayResponse:
        return await self.holiday_service.create_holiday(holiday_data)

    async def update_holiday(self, holiday_id: UUID, holiday_data: HolidayUpdate) -> HolidayResponse:
        return await self.holiday_service.update_holiday(holiday_id, holiday_data)

    async def get_holiday(self, holiday_id: UUID) -> HolidayResponse:
        return await self.holiday_service.get_holiday(holiday_id)

    async def list_holidays(
        self,
        location: Optional[str] = None,
        holiday_type: Optional[HolidayType] = None,
        year: Optional[int] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[HolidayResponse]:
        return await self.holiday_service.list_holidays(location, holiday_type, year, skip, limit)

    async def check_holiday(self, day: str, location: Optional[str] = None) -> HolidayCheckResponse:
        return await self.holiday_service.check_holiday(day, location)

    async def delete_holiday(self, holiday_id: UUID) -> None:
        await self.holiday_service.delete_holiday(holiday_id)
