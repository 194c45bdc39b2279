"""Logging configuration helpers."""

import logging
import sys
from typing import Optional, TextIO


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Configure application-wide logging.

    Args:
        level: Minimum logging level.
        stream: Destination stream, stdout when omitted.
    """
    handler = logging.StreamHandler(stream=stream or sys.stdout)
    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)s %(name)s - %(message)s", "%Y-%m-%d %H:%M:%S"
    )
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]
