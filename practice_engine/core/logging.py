"""
Logging setup for the practice engine
FILE: practice_engine/core/logging.py
"""
import logging
from typing import Optional

from practice_engine.core.config import Settings, settings as default_settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure root logging from settings

    Args:
        settings: Settings instance (defaults to the module-level settings)
    """
    settings = settings or default_settings
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=settings.log_format)
    logging.getLogger(__name__).debug(f"Logging configured at level {settings.log_level}")
