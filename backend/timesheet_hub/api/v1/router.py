"""
API v1 router that aggregates all endpoint routers.
All routes require an acting user except health.
"""

from fastapi import APIRouter, Depends

from timesheet_hub.api.v1.middleware import require_acting_user
from timesheet_hub.api.v1.endpoints import (
    health,
    timesheets,
    approvals,
    reports,
    holidays,
    notifications,
)

api_router = APIRouter()

# Public routes
api_router.include_router(health.router, tags=["health"])

# Protected routes
api_router.include_router(
    timesheets.router,
    prefix="/timesheets",
    tags=["timesheets"],
    dependencies=[Depends(require_acting_user)],
)
api_router.include_router(
    approvals.router,
    prefix="/approvals",
    tags=["approvals"],
    dependencies=[Depends(require_acting_user)],
)
api_router.include_router(
    reports.router,
    prefix="/reports",
    tags=["reports"],
    dependencies=[Depends(require_acting_user)],
)
api_router.include_router(
    holidays.router,
    prefix="/holidays",
    tags=["holidays"],
    dependencies=[Depends(require_acting_user)],
)
api_router.include_router(
    notifications.router,
    prefix="/notifications",
    tags=["notifications"],
    dependencies=[Depends(require_acting_user)],
)
