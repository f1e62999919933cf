# -*- coding: utf-8 -*-
"""
Logging setup for the LMS analytics service, built on loguru.
"""
import logging
import sys

from loguru import logger

from lms_analytics.config.settings import settings

# Drop the default loguru handler
logger.remove()

# Chatty third-party loggers that only add noise at INFO
_MUTED_PREFIXES = ("httpx", "httpcore", "urllib3", "asyncio", "aiosqlite")


class InterceptHandler(logging.Handler):
    """Route standard logging records into loguru."""

    def emit(self, record):
        # uvicorn INFO lines (Started server, Waiting for application...)
        if record.name.startswith("uvicorn") and record.levelno == logging.INFO:
            return

        if record.name.startswith(_MUTED_PREFIXES):
            return

        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

console_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# Request lines from the access gate carry no source location
request_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>REQUEST</cyan> | "
    "<level>{message}</level>"
)

logger.add(
    sys.stdout,
    format=console_format,
    level=settings.log_level.upper(),
    colorize=True,
    backtrace=False,
    diagnose=False,
    filter=lambda record: record["extra"].get("request") is not True,
)

logger.add(
    sys.stdout,
    format=request_format,
    level="INFO",
    colorize=True,
    backtrace=False,
    diagnose=False,
    filter=lambda record: record["extra"].get("request") is True,
)


def configure_logger(name: str = "lms_analytics"):
    """
    Return the shared loguru logger.

    Args:
        name: Kept for call-site readability; loguru uses the module name.

    Returns:
        loguru.Logger: The configured logger
    """
    return logger


def get_request_logger():
    """Logger for per-request lines written by the access gate."""
    return logger.bind(request=True)
