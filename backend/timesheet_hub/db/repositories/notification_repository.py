"""
Notification repository for database operations.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from timesheet_hub.db.repositories.base_repository import BaseRepository
from timesheet_hub.models.notification import Notification, NotificationLevel


class NotificationRepository(BaseRepository[Notification]):
    """Repository for notification operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Notification, session)

    async def create_notification(
        self,
        user_id: UUID,
        message: str,
        level: NotificationLevel = NotificationLevel.INFO,
    ) -> Notification:
        """Persist a notification for a user."""
        return await self.create(user_id=user_id, message=message, level=level)

    async def list_for_user(self, user_id: UUID, limit: int = 20) -> List[Notification]:
        """Latest notifications for a user, newest first."""
        result = await self.session.execute(
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
