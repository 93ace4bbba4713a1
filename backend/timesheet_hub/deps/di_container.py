"""
Dependency injection container using dependency-injector.
Wires shared clients, services, and controllers.
"""

from dependency_injector import containers, providers

from timesheet_hub.core.config import settings
from timesheet_hub.core.integrations.geolocation import GeoTimezoneClient
from timesheet_hub.core.integrations.http.http_client import HttpClient
from timesheet_hub.services.health_service import HealthService
from timesheet_hub.controllers.health_controller import HealthController


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    config = providers.Configuration()

    # Shared aiohttp client for the timezone lookup
    geo_http_client = providers.Singleton(
        HttpClient,
        base_url=config.geolocation_api_url,
        timeout=config.geolocation_timeout,
        max_retries=2,
        retry_delay=0.5,
    )

    geo_timezone_client = providers.Singleton(
        GeoTimezoneClient,
        http_client=geo_http_client,
        enabled=config.geolocation_enabled,
        default_timezone=config.default_timezone,
    )

    # Services
    health_service = providers.Singleton(
        HealthService,
    )

    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )


def container_config() -> dict:
    """Container configuration derived from settings."""
    return {
        "geolocation_api_url": settings.GEOLOCATION_API_URL,
        "geolocation_timeout": settings.GEOLOCATION_TIMEOUT,
        "geolocation_enabled": settings.GEOLOCATION_ENABLED,
        "default_timezone": settings.DEFAULT_TIMEZONE,
    }


# Global container instance
_container: Container = None


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        _container = Container()
        _container.config.from_dict(container_config())
    return _container
