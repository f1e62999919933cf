# -*- coding: utf-8 -*-
"""
Small helpers shared by the statistics repositories.
"""

from datetime import datetime, timezone

from lms_analytics.api.v1.statistics.shared.schemas import Failure
from lms_analytics.config.logger import configure_logger

logger = configure_logger()


def to_calendar_day(moment: datetime) -> str:
    """Render a timestamp as a UTC ``YYYY-MM-DD`` string; naive values are UTC."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date().isoformat()


def failure(message: str, exc: Exception) -> Failure:
    logger.error(f"{message}: {type(exc).__name__}: {exc}")
    return Failure(error=message, details=str(exc))
