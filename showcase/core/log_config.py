"""Process-wide logging setup for the web app and the CLI scripts."""

import logging
import time

from showcase.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
# Timestamps are rendered in UTC to match the Z suffix.
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(level: str | None = None) -> None:
    """Apply basicConfig with the shared format; level defaults to LOG_LEVEL."""
    logging.Formatter.converter = time.gmtime
    logging.basicConfig(
        level=level or get_settings().LOG_LEVEL,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
