"""
Notification controller.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_hub.controllers.base_controller import BaseController
from timesheet_hub.schemas.notification import NotificationResponse
from timesheet_hub.schemas.user import ActingUser
from timesheet_hub.services.notification_service import NotificationService


class NotificationController(BaseController):
    """Controller for notification operations."""

    def __init__(self, session: AsyncSession):
        self.notification_service = NotificationService(session)

    async def list_notifications(self, acting: ActingUser, limit: int = 20) -> List[NotificationResponse]:
        return await self.notification_service.list_notifications(acting, limit)
