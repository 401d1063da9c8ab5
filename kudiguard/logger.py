# kudiguard/logger.py
import logging
import sys
from typing import Optional, Union

from kudiguard.config import settings


def get_logger(name: str = "kudiguard", level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Returns a configured logger that can be safely imported anywhere.
    Avoids duplicate handlers when imported multiple times.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level or settings.LOG_LEVEL)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
            "%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


# default shared logger instance
logger = get_logger("kudiguard")
