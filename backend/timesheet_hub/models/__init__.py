"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from timesheet_hub.models.user import User
from timesheet_hub.models.project import Project, TaskCategory
from timesheet_hub.models.holiday import Holiday
from timesheet_hub.models.notification import Notification
from timesheet_hub.models.rejection_note import RejectionNote
from timesheet_hub.models.timesheet import TimesheetEntry, TimesheetDay

__all__ = [
    "User",
    "Project",
    "TaskCategory",
    "Holiday",
    "Notification",
    "RejectionNote",
    "TimesheetEntry",
    "TimesheetDay",
]
