"""
Project and task category repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_hub.db.repositories.base_repository import BaseRepository
from timesheet_hub.models.project import Project, TaskCategory


class ProjectRepository(BaseRepository[Project]):
    """Repository for project operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Project, session)


class TaskCategoryRepository(BaseRepository[TaskCategory]):
    """Repository for task category operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(TaskCategory, session)
