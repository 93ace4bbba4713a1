"""
Bearer token decoding.
Tokens are issued by the identity service; this module only verifies them.
"""

from typing import Any, Dict, Optional
import logging

from jose import jwt, JWTError

from timesheet_hub.core.config import settings

logger = logging.getLogger(__name__)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode and verify a JWT access token.

    Returns:
        The token payload, or None when the token is invalid or expired
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.warning(f"Rejected access token: {e}")
        return None
