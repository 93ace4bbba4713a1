"""
Response envelope shared by every endpoint.
"""

from pydantic import BaseModel
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: ``{"status": true, "message": ..., "data": ...}``."""
    status: bool = True
    message: str = "Success"
    data: Optional[T] = None


def ok(data=None, message: str = "Success") -> ApiResponse:
    """Wrap a payload in the success envelope."""
    return ApiResponse(status=True, message=message, data=data)
