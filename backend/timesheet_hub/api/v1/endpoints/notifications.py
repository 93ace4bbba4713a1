"""
Notification API endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_hub.api.v1.middleware import require_acting_user
from timesheet_hub.controllers.notification_controller import NotificationController
from timesheet_hub.db.session import get_db
from timesheet_hub.schemas.common import ApiResponse, ok
from timesheet_hub.schemas.notification import NotificationResponse
from timesheet_hub.schemas.user import ActingUser

router = APIRouter()


@router.get("", response_model=ApiResponse[List[NotificationResponse]])
async def list_notifications(
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    acting: ActingUser = Depends(require_acting_user),
):
    """Latest notifications for the current user."""
    controller = NotificationController(db)
    data = await controller.list_notifications(acting, limit)
    return ok(data, "Notifications fetched successfully")
