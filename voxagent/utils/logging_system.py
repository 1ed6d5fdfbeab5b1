"""
Logging setup shared by every voxagent module.

Loggers are configured once per name.  On an interactive terminal the
output goes through Rich; otherwise a plain stream handler is used so that
log files and CI output stay free of escape codes.  ``LOG_LEVEL`` selects
the verbosity and ``NO_COLOR`` forces the plain handler.
"""
import logging
import os
import sys

from rich.logging import RichHandler

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_log_system(name: str, *, level: str | None = None) -> logging.Logger:
    """
    Create (or return) a configured logger.

    - Honours LOG_LEVEL env var (default INFO) unless a ``level`` is explicitly passed.
    - Uses RichHandler when stdout is a TTY and NO_COLOR is not set.
    - Avoids duplicate handlers if called multiple times for the same logger.
    """
    level_str = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_level = getattr(logging, level_str, logging.INFO)

    logger = logging.getLogger(name)
    if logger.handlers:
        logger.setLevel(log_level)
        return logger

    no_colour = os.getenv("NO_COLOR") is not None
    is_tty = sys.stdout.isatty()

    handler: logging.Handler
    if not no_colour and is_tty:
        handler = RichHandler(
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
        )
        # RichHandler renders time and level itself
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(log_level)
    # The web UI collects records from the root logger.
    logger.propagate = True
    root_logger = logging.getLogger()
    if root_logger.level > log_level:
        root_logger.setLevel(log_level)
    return logger
