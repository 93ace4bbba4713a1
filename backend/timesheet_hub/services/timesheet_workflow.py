"""
Timesheet status rules shared by the save, submit and review paths.
"""

from typing import Dict, FrozenSet, Optional, Set

from timesheet_hub.core.config import settings
from timesheet_hub.core.exceptions import ConflictError, InvalidInputError
from timesheet_hub.models.timesheet import TimesheetStatus

DRAFT_STATUSES = frozenset({TimesheetStatus.IN_PROGRESS, TimesheetStatus.SAVED})
REVIEW_STATES = {
    "accepted": TimesheetStatus.ACCEPTED,
    "approved": TimesheetStatus.ACCEPTED,
    "rejected": TimesheetStatus.REJECTED,
}


class EditPolicy:
    """Which statuses still allow the day sheet to change."""

    def __init__(self, rejected_editable: Optional[bool] = None):
        if rejected_editable is None:
            rejected_editable = settings.REJECTED_TIMESHEETS_EDITABLE
        self.rejected_editable = rejected_editable

    @property
    def editable_statuses(self) -> FrozenSet[TimesheetStatus]:
        if self.rejected_editable:
            return DRAFT_STATUSES | {TimesheetStatus.REJECTED}
        return DRAFT_STATUSES

    def is_editable(self, status: TimesheetStatus) -> bool:
        return status in self.editable_statuses

    def ensure_editable(self, status: TimesheetStatus) -> None:
        if not self.is_editable(status):
            raise ConflictError(
                f"Timesheet is {status.value} and cannot be modified",
                details={"status": status.value},
            )

    def transitions(self) -> Dict[TimesheetStatus, Set[TimesheetStatus]]:
        """Allowed target statuses for each current status."""
        table: Dict[TimesheetStatus, Set[TimesheetStatus]] = {
            status: set(DRAFT_STATUSES) for status in self.editable_statuses
        }
        table[TimesheetStatus.SAVED].add(TimesheetStatus.SUBMITTED)
        table.setdefault(TimesheetStatus.SUBMITTED, set()).update(
            {TimesheetStatus.ACCEPTED, TimesheetStatus.REJECTED}
        )
        # reopen
        table.setdefault(TimesheetStatus.REJECTED, set()).add(TimesheetStatus.SAVED)
        return table

    def ensure_transition(self, current: TimesheetStatus, target: TimesheetStatus) -> None:
        """
        Raises:
            ConflictError: If the move from current to target is not allowed
        """
        if target not in self.transitions().get(current, set()):
            raise ConflictError(
                f"Cannot move timesheet from {current.value} to {target.value}",
                details={"from": current.value, "to": target.value},
            )


def review_target(state: str) -> TimesheetStatus:
    """Map a review verb ("accepted", "approved", "rejected") to a status."""
    target = REVIEW_STATES.get((state or "").strip().lower())
    if target is None:
        raise InvalidInputError(
            f"Invalid review state: {state!r}",
            details={"allowed": sorted(REVIEW_STATES)},
        )
    return target


def counts_as_approved(status: TimesheetStatus, predicate: Optional[str] = None) -> bool:
    """Whether hours in this status count towards approved totals."""
    predicate = predicate or settings.APPROVED_HOURS_PREDICATE
    if predicate == "not_rejected":
        return status != TimesheetStatus.REJECTED
    return status == TimesheetStatus.ACCEPTED
