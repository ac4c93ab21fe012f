"""
Logging setup shared by every synapse_voice module.

Loggers are configured once per name.  Output goes through Rich when stdout
is a terminal and ``NO_COLOR`` is unset, otherwise through a plain stream
handler with a compact ``[time] [level] [name] message`` format.  The level
comes from ``LOG_LEVEL`` unless the caller passes one explicitly.
"""
from __future__ import annotations

import logging
import os
import sys

from rich.logging import RichHandler

_PLAIN_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_DATE_FORMAT = "%H:%M:%S"


def _resolve_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    level_str = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, level_str, logging.INFO)


def setup_log_system(name: str, *, level: str | int | None = None) -> logging.Logger:
    """
    Create (or return) a configured logger.

    - Honours the LOG_LEVEL env var (default INFO) unless ``level`` is passed.
    - Uses RichHandler when stdout is a TTY and NO_COLOR is not set.
    - Never attaches a second handler to a logger that already has one.
    """
    log_level = _resolve_level(level)

    logger = logging.getLogger(name)
    if logger.handlers:
        logger.setLevel(log_level)
        return logger

    use_rich = os.getenv("NO_COLOR") is None and sys.stdout.isatty()

    handler: logging.Handler
    if use_rich:
        handler = RichHandler(
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
        )
        # RichHandler renders time and level itself
        handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT, datefmt=_DATE_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(log_level)
    # Let pytest's caplog and any root handlers see the records too.
    logger.propagate = True
    return logger


get_logger = setup_log_system
