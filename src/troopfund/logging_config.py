"""Logging setup for the troopfund command line."""

import logging
import sys

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "troopfund-stream"


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Send ``troopfund`` log records at ``level`` and above to stderr.

    Calling it again replaces the handler installed by the previous call, so
    records always go to the current ``sys.stderr``.

    Raises:
        ValueError: If ``level`` is not a known level name
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level '{level}'")
        level = resolved

    package_logger = logging.getLogger("troopfund")
    package_logger.setLevel(level)
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    package_logger.addHandler(handler)
