"""
Console logging setup for scripts and host processes.

Dependencies: logging (stdlib)
System role: One place that decides log format, level and library noise
"""

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty at INFO; only their warnings are useful here
QUIET_LOGGERS = ("httpx", "httpcore", "openai", "botocore", "boto3", "sqlalchemy.engine")


def configure_logging(level: str | int = logging.INFO, stream: TextIO | None = None) -> logging.Logger:
    """
    Route all records through a single stream handler on the root logger.

    Safe to call more than once: previously installed root handlers are
    replaced rather than duplicated.

    Args:
        level: Root level, as a name ("DEBUG") or a logging constant
        stream: Destination, stdout by default

    Returns:
        logging.Logger: The configured root logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return root
