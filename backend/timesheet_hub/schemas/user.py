"""
Acting user passed explicitly from the HTTP layer into services.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from timesheet_hub.core.config import settings


@dataclass(frozen=True)
class ActingUser:
    """Identity and capabilities of the caller for one request."""
    id: UUID
    role: str = "Employee"
    location: Optional[str] = None
    full_name: Optional[str] = None
    is_admin: bool = False
    is_approver: bool = False

    @property
    def can_review(self) -> bool:
        return self.is_admin or self.is_approver

    @property
    def is_team_lead(self) -> bool:
        return self.role == settings.TEAM_LEAD_ROLE

    @property
    def holiday_location(self) -> str:
        return self.location or settings.DEFAULT_HOLIDAY_LOCATION

    @classmethod
    def from_user(cls, user) -> "ActingUser":
        """Build from a User row, deriving capabilities from the role name."""
        return cls(
            id=user.id,
            role=user.role,
            location=user.location,
            full_name=user.full_name,
            is_admin=user.role in settings.ADMIN_ROLES,
            is_approver=user.role in settings.APPROVER_ROLES,
        )
