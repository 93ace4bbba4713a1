"""
Timesheet approval service - accept or reject submitted entries.
"""

import logging
from datetime import date
from typing import Optional, List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_hub.core.config import settings
from timesheet_hub.core.exceptions import ConflictError, InvalidInputError, NotFoundError, UnauthorizedError
from timesheet_hub.db.repositories.notification_repository import NotificationRepository
from timesheet_hub.db.repositories.rejection_note_repository import RejectionNoteRepository
from timesheet_hub.db.repositories.timesheet_repository import TimesheetRepository
from timesheet_hub.models.notification import NotificationLevel
from timesheet_hub.models.timesheet import TimesheetEntry, TimesheetStatus
from timesheet_hub.schemas.approval import ManageAllTimesheetsResponse
from timesheet_hub.schemas.timesheet import TimesheetEntryResponse
from timesheet_hub.schemas.user import ActingUser
from timesheet_hub.services.base_service import BaseService
from timesheet_hub.services.timesheet_service import to_entry_response
from timesheet_hub.services.timesheet_workflow import EditPolicy, review_target
from timesheet_hub.utils.week_range import WeekWindow

logger = logging.getLogger(__name__)


class TimesheetApprovalService(BaseService):
    """Service for timesheet approval operations."""

    def __init__(self, session: AsyncSession, policy: Optional[EditPolicy] = None):
        self.session = session
        self.policy = policy or EditPolicy()
        self.timesheet_repo = TimesheetRepository(session)
        self.rejection_note_repo = RejectionNoteRepository(session)
        self.notification_repo = NotificationRepository(session)

    def _ensure_reviewer(self, acting: ActingUser, owner_id: Optional[UUID] = None) -> None:
        if not acting.can_review:
            raise UnauthorizedError("You are not authorized to review timesheets")
        if owner_id is not None and owner_id == acting.id:
            raise UnauthorizedError("You cannot review your own timesheet")

    def _review_target(self, state: str, notes: Optional[str]) -> TimesheetStatus:
        target = review_target(state)
        if target == TimesheetStatus.REJECTED and not (notes or "").strip():
            raise InvalidInputError("Notes are required when rejecting a timesheet", details={"field": "notes"})
        return target

    async def _get_entry(self, timesheet_id: UUID) -> TimesheetEntry:
        entry = await self.timesheet_repo.get(timesheet_id)
        if not entry:
            raise NotFoundError("Timesheet not found", details={"timesheet_id": str(timesheet_id)})
        return entry

    async def _record_review(
        self,
        user_id: UUID,
        week_start: date,
        week_end: date,
        target: TimesheetStatus,
        notes: Optional[str],
    ) -> None:
        """Keep at most one rejection note per user and week, and notify the owner."""
        window = WeekWindow(week_start, week_end)
        note = await self.rejection_note_repo.get_by_week(user_id, week_start, week_end)

        if target == TimesheetStatus.ACCEPTED:
            if note:
                await self.rejection_note_repo.delete(note.id)
            await self.notification_repo.create_notification(
                user_id,
                f"Your timesheet for {window.label()} has been approved",
                NotificationLevel.SUCCESS,
            )
            return

        message = notes.strip()
        if note:
            await self.rejection_note_repo.update_message(note.id, message)
        else:
            await self.rejection_note_repo.create(
                user_id=user_id,
                message=message,
                week_start=week_start,
                week_end=week_end,
            )
        await self.notification_repo.create_notification(
            user_id,
            f"Your timesheet for {window.label()} has been rejected: {message}",
            NotificationLevel.WARNING,
        )

    async def manage_timesheet(
        self,
        acting: ActingUser,
        timesheet_id: UUID,
        state: str,
        notes: Optional[str] = None,
    ) -> TimesheetEntryResponse:
        """Accept or reject one submitted entry."""
        self._ensure_reviewer(acting)
        target = self._review_target(state, notes)
        entry = await self._get_entry(timesheet_id)
        self._ensure_reviewer(acting, entry.user_id)
        self.policy.ensure_transition(entry.status, target)

        entry = await self.timesheet_repo.set_status(entry, target)
        await self._record_review(entry.user_id, entry.week_start, entry.week_end, target, notes)
        await self.session.commit()
        logger.info(
            "Timesheet reviewed",
            extra={"timesheet_id": str(timesheet_id), "reviewer_id": str(acting.id), "status": target.value},
        )
        return to_entry_response(entry)

    async def manage_all_timesheets(
        self,
        acting: ActingUser,
        timesheet_id: UUID,
        status: str,
        user_id: UUID,
        notes: Optional[str] = None,
    ) -> ManageAllTimesheetsResponse:
        """
        Accept or reject every submitted entry of a user in one week.

        The week is taken from the referenced entry. Either every submitted
        entry moves or none does.
        """
        self._ensure_reviewer(acting)
        target = self._review_target(status, notes)
        reference = await self._get_entry(timesheet_id)
        if reference.user_id != user_id:
            raise InvalidInputError(
                "Timesheet does not belong to the given user",
                details={"timesheet_id": str(timesheet_id), "user_id": str(user_id)},
            )
        self._ensure_reviewer(acting, user_id)

        entries = await self.timesheet_repo.find_by_window(
            user_id, reference.week_start, reference.week_end, status=TimesheetStatus.SUBMITTED
        )
        if not entries:
            raise ConflictError(
                "No submitted timesheets for this week",
                details={"user_id": str(user_id), "week_start": str(reference.week_start)},
            )
        for entry in entries:
            self.policy.ensure_transition(entry.status, target)
            await self.timesheet_repo.set_status(entry, target)

        await self._record_review(user_id, reference.week_start, reference.week_end, target, notes)
        await self.session.commit()
        logger.info(
            "Timesheet week reviewed",
            extra={
                "user_id": str(user_id),
                "reviewer_id": str(acting.id),
                "status": target.value,
                "count": len(entries),
            },
        )
        return ManageAllTimesheetsResponse(
            user_id=user_id,
            week_start=reference.week_start,
            week_end=reference.week_end,
            status=target,
            updated=len(entries),
        )

    async def list_pending_approvals(
        self,
        acting: ActingUser,
        skip: int = 0,
        limit: int = 100,
    ) -> List[TimesheetEntryResponse]:
        """
        Submitted entries awaiting the caller's review.

        Admins see every other user's entries. A team lead sees entries on the
        projects they lead; other approvers see entries of team leads.
        """
        self._ensure_reviewer(acting)
        scope = {}
        if not acting.is_admin:
            if acting.is_team_lead:
                scope["project_lead_id"] = acting.id
            else:
                scope["owner_roles"] = [settings.TEAM_LEAD_ROLE]
        entries = await self.timesheet_repo.list_by_status(
            TimesheetStatus.SUBMITTED, skip, limit, exclude_user_id=acting.id, **scope
        )
        return [to_entry_response(e) for e in entries]
