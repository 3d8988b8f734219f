# reviewpulse/core/logging_config.py

import logging
from typing import Optional

from .config import AnalyticsSettings, get_settings


def configure_logging(settings: Optional[AnalyticsSettings] = None) -> None:
    """Configure root logging from analytics settings"""
    settings = settings or get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=settings.log_format,
    )

    # SQL echo is only useful while debugging the store adapter
    if not settings.debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
