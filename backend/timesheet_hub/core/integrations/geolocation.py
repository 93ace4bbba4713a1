"""
IP geolocation lookup used to resolve the caller's local "today".
"""

import asyncio
import ipaddress
from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

import aiohttp

from timesheet_hub.core.integrations.http.http_client import HttpClient

logger = logging.getLogger(__name__)


def resolve_tz(name: Optional[str]) -> tzinfo:
    """Map an IANA timezone name to a tzinfo, falling back to UTC."""
    if not name or name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone {name!r}, using UTC")
        return timezone.utc


def _is_public_ip(ip: Optional[str]) -> bool:
    if not ip:
        return False
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return False
    return address.is_global


class GeoTimezoneClient:
    """Resolves the timezone of a request's originating IP address."""

    def __init__(self, http_client: HttpClient, enabled: bool = True, default_timezone: str = "UTC"):
        self.http_client = http_client
        self.enabled = enabled
        self.default_timezone = default_timezone

    async def timezone_for_ip(self, ip: Optional[str]) -> str:
        """
        Look up the IANA timezone for an IP address.

        Private, loopback and unparseable addresses, as well as lookup failures,
        resolve to the configured default timezone.
        """
        if not self.enabled or not _is_public_ip(ip):
            return self.default_timezone
        try:
            payload = await self.http_client.get(f"/{ip}", params={"fields": "status,timezone"})
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(
                "Timezone lookup failed, using default",
                extra={"ip": ip, "error": str(e), "default": self.default_timezone},
            )
            return self.default_timezone
        tz_name = payload.get("timezone") if isinstance(payload, dict) else None
        return tz_name or self.default_timezone

    async def today_for_ip(self, ip: Optional[str]) -> date:
        """Return the current calendar date in the caller's timezone."""
        tz_name = await self.timezone_for_ip(ip)
        return datetime.now(resolve_tz(tz_name)).date()

