"""
Structured logging setup.
"""

import logging
import sys

from timesheet_hub.core.config import settings


def setup_logging() -> None:
    """
    Configure root logging for the service.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    # Set log levels for specific libraries
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(
        "Logging configured",
        extra={
            "project": settings.PROJECT_NAME,
            "rejected_editable": settings.REJECTED_TIMESHEETS_EDITABLE,
            "approved_predicate": settings.APPROVED_HOURS_PREDICATE,
        },
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module."""
    return logging.getLogger(name)
