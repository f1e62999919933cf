# -*- coding: utf-8 -*-
"""
Uvicorn / framework logger wiring.
"""

import logging

from lms_analytics.config.logger import InterceptHandler


def setup_uvicorn_logging():
    """Send uvicorn, FastAPI and SQLAlchemy logs through loguru."""

    for logger_name in [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "fastapi",
        "sqlalchemy.engine",
        "sqlalchemy.pool",
    ]:
        logger_obj = logging.getLogger(logger_name)
        logger_obj.handlers.clear()
        logger_obj.propagate = False

    logging.getLogger("uvicorn").handlers = [InterceptHandler()]
    logging.getLogger("uvicorn.error").handlers = [InterceptHandler()]
    logging.getLogger("fastapi").handlers = [InterceptHandler()]

    # SQLAlchemy: warnings and errors only
    for name in ("sqlalchemy.engine", "sqlalchemy.pool"):
        sa_logger = logging.getLogger(name)
        sa_logger.handlers = [InterceptHandler()]
        sa_logger.setLevel(logging.WARNING)
