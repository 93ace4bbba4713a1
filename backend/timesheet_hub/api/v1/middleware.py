"""
API middleware for authentication and common concerns.
Resolves the acting user for every protected route.
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from uuid import UUID

from timesheet_hub.core.integrations.geolocation import GeoTimezoneClient
from timesheet_hub.core.security import decode_access_token
from timesheet_hub.db.session import get_db
from timesheet_hub.db.repositories.user_repository import UserRepository
from timesheet_hub.deps.di_container import get_container
from timesheet_hub.schemas.user import ActingUser

security = HTTPBearer()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def require_acting_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> ActingUser:
    """
    Centralized authentication dependency.

    Usage:
        @router.get("/endpoint")
        async def my_endpoint(acting: ActingUser = Depends(require_acting_user)):
            ...

    Raises:
        HTTPException: If the token is invalid or the user does not exist
    """
    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise _unauthorized("Invalid authentication token")

    user_id_str = payload.get("user_id") or payload.get("sub")
    if not user_id_str:
        raise _unauthorized("Token missing user ID")

    try:
        user_id = UUID(user_id_str)
    except ValueError:
        raise _unauthorized("Invalid user ID in token")

    user = await UserRepository(db).get(user_id)
    if not user or not user.is_active:
        raise _unauthorized("User not found")

    return ActingUser.from_user(user)


def get_geo_client() -> GeoTimezoneClient:
    """Shared timezone lookup client."""
    return get_container().geo_timezone_client()


def client_ip(request: Request) -> Optional[str]:
    """Originating address, honouring a proxy's X-Forwarded-For header."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None
