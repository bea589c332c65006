"""Standard library logging setup.

Structured events and spans go through logfire; this only sets levels and
the format for plain log records from bygd and its libraries.
"""

import logging
import sys

from bygd.config import Settings

_QUIET = ("httpx", "httpcore", "dishka")


def _level(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "production":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure root logging for the given environment."""
    level = _level(settings)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for name in _QUIET:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    logging.getLogger("bygd").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured for %s at %s",
        settings.environment,
        logging.getLevelName(level),
    )
