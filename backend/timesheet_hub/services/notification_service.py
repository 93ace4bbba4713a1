"""
Notification service.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_hub.db.repositories.notification_repository import NotificationRepository
from timesheet_hub.schemas.notification import NotificationResponse
from timesheet_hub.schemas.user import ActingUser
from timesheet_hub.services.base_service import BaseService


class NotificationService(BaseService):
    """Service for reading a user's notifications."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.notification_repo = NotificationRepository(session)

    async def list_notifications(self, acting: ActingUser, limit: int = 20) -> List[NotificationResponse]:
        notifications = await self.notification_repo.list_for_user(acting.id, limit)
        return [NotificationResponse.model_validate(n) for n in notifications]
