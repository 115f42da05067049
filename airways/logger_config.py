"""Centralized logging configuration."""

import sys

from loguru import logger

from airways.config import settings


log_format = ' | '.join(
    (
        '<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>',
        '<lvl>{level:<8}</>',
        '<c>{name}::{function}:{line}</>',
        '{message}',
    )
)

logger.remove()  # Drop the default handler so output is not duplicated
logger.add(sys.stdout, format=log_format, level=settings.LOG_LEVEL)

__all__ = ['logger']
