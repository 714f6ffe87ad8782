"""
Logging configuration
"""

import logging
import sys
from typing import Optional

from core.config import settings

TRACE = 5

LOG_LEVELS = {
    "off": None,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}

logging.addLevelName(TRACE, "TRACE")


def resolve_level(level_name: Optional[str]) -> Optional[int]:
    """Map a level name to a logging level, None meaning logging is off."""
    if not level_name:
        return logging.INFO
    return LOG_LEVELS.get(level_name.strip().lower(), logging.INFO)


def setup_logging(level_name: Optional[str] = None):
    """Configure application logging"""

    level_name = level_name or settings.LOG_LEVEL
    log_level = resolve_level(level_name)

    if log_level is None:
        logging.disable(logging.CRITICAL)
        return

    logging.disable(logging.NOTSET)

    # Configure root logger; stdout is left for command output
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stderr)
        ],
        force=True
    )

    # Keep driver chatter out of the E2E output
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at {logging.getLevelName(log_level)} level")
