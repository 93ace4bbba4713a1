"""
Holiday API endpoints.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from timesheet_hub.api.v1.middleware import require_acting_user
from timesheet_hub.controllers.holiday_controller import HolidayController
from timesheet_hub.core.exceptions import UnauthorizedError
from timesheet_hub.db.session import get_db
from timesheet_hub.models.holiday import HolidayType
from timesheet_hub.schemas.common import ApiResponse, ok
from timesheet_hub.schemas.holiday import HolidayCheckResponse, HolidayCreate, HolidayResponse, HolidayUpdate
from timesheet_hub.schemas.user import ActingUser

router = APIRouter()


def _require_admin(acting: ActingUser) -> None:
    if not acting.is_admin:
        raise UnauthorizedError("Only administrators can manage holidays")


@router.post("", response_model=ApiResponse[HolidayResponse], status_code=status.HTTP_201_CREATED)
async def create_holiday(
    holiday_data: HolidayCreate,
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
):
    """Create a holiday."""
    _require_admin(acting)
    controller = HolidayController(db)
    data = await controller.create_holiday(holiday_data)
    return ok(data, "Holiday created successfully")


@router.get("", response_model=ApiResponse[List[HolidayResponse]])
async def list_holidays(
    location: Optional[str] = Query(None),
    holiday_type: Optional[HolidayType] = Query(None),
    year: Optional[int] = Query(None, ge=1970, le=9999),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
):
    """List holidays with optional filters."""
    controller = HolidayController(db)
    data = await controller.list_holidays(location, holiday_type, year, skip, limit)
    return ok(data, "Holidays fetched successfully")


@router.get("/check", response_model=ApiResponse[HolidayCheckResponse])
async def check_holiday(
    date: str = Query(..., description="Date YYYY-MM-DD"),
    location: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
):
    """Whether a date is a holiday; defaults to the caller's location."""
    controller = HolidayController(db)
    data = await controller.check_holiday(date, location or acting.holiday_location)
    return ok(data)


@router.get("/{holiday_id}", response_model=ApiResponse[HolidayResponse])
async def get_holiday(
    holiday_id: UUID,
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
):
    """Get holiday by ID."""
    controller = HolidayController(db)
    data = await controller.get_holiday(holiday_id)
    return ok(data)


@router.put("/{holiday_id}", response_model=ApiResponse[HolidayResponse])
async def update_holiday(
    holiday_id: UUID,
    holiday_data: HolidayUpdate,
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
):
    """Replace a holiday."""
    _require_admin(acting)
    controller = HolidayController(db)
    data = await controller.update_holiday(holiday_id, holiday_data)
    return ok(data, "Holiday updated successfully")


@router.delete("/{holiday_id}", response_model=ApiResponse[None])
async def delete_holiday(
    holiday_id: UUID,
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
):
    """Delete a holiday."""
    _require_admin(acting)
    controller = HolidayController(db)
    await controller.delete_holiday(holiday_id)
    return ok(None, "Holiday deleted successfully")
