"""Logging setup for the tablekit command line.

Library modules only create loggers; handlers are installed here, once,
by the entry point.
"""

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LOGGING_CONFIGURED = False


def resolve_level(level: Union[int, str]) -> int:
    """Map a level name or number to a logging level (unknown names -> WARNING)."""
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.WARNING)


def configure_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Configure process-wide logging.

    The first call installs the handler; later calls only adjust the level.
    """
    global _LOGGING_CONFIGURED
    resolved = resolve_level(level)
    if _LOGGING_CONFIGURED:
        logging.getLogger().setLevel(resolved)
        return

    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    _LOGGING_CONFIGURED = True
