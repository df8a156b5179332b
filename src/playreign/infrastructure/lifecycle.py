"""Application startup.

Hey future me - whoever embeds the timeline engine (web app, CLI, job) calls
``startup()`` once before building timelines. It wires logging from the
settings; the engine itself never configures logging.
"""

import logging

from playreign.config import Settings, get_settings
from playreign.infrastructure.observability.logging import configure_logging

logger = logging.getLogger(__name__)


def startup(settings: Settings | None = None) -> Settings:
    """Configure logging from settings and return the settings in use.

    Args:
        settings: Settings to use (default: process settings)

    Returns:
        The effective settings
    """
    settings = settings or get_settings()

    configure_logging(
        log_level=settings.log_level,
        json_format=settings.observability.log_json_format,
        app_name=settings.app_name,
    )
    logger.info(
        "Starting %s (display cutoff %s, podium size %d)",
        settings.app_name,
        settings.timeline.display_cutoff.isoformat(),
        settings.timeline.podium_size,
    )
    return settings
