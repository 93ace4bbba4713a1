"""
Rejection note repository for database operations.
"""

from typing import Optional, List
from uuid import UUID
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_

from timesheet_hub.db.repositories.base_repository import BaseRepository
from timesheet_hub.models.rejection_note import RejectionNote


class RejectionNoteRepository(BaseRepository[RejectionNote]):
    """Repository for rejection note operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(RejectionNote, session)

    async def get_by_week(self, user_id: UUID, start: date, end: date) -> Optional[RejectionNote]:
        """Note whose window lies inside [start, end] for the user."""
        result = await self.session.execute(
            select(RejectionNote)
            .where(
                and_(
                    RejectionNote.user_id == user_id,
                    RejectionNote.week_start >= start,
                    RejectionNote.week_end <= end,
                )
            )
            .order_by(RejectionNote.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: UUID) -> List[RejectionNote]:
        result = await self.session.execute(
            select(RejectionNote)
            .where(RejectionNote.user_id == user_id)
            .order_by(RejectionNote.week_start.desc())
        )
        return list(result.scalars().all())

    async def update_message(self, id: UUID, message: str) -> Optional[RejectionNote]:
        """Replace a note's message in place."""
        return await self.update(id, message=message)
