"""
Notification Pydantic schemas.
"""

from pydantic import BaseModel
from datetime import datetime
from uuid import UUID

from timesheet_hub.models.notification import NotificationLevel


class NotificationResponse(BaseModel):
    """Response schema for a notification."""
    id: UUID
    message: str
    level: NotificationLevel
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True
