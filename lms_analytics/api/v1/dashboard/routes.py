# -*- coding: utf-8 -*-
"""
Leaderboard endpoints of the student dashboard.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lms_analytics.clients.database_client import get_db
from lms_analytics.config.logger import configure_logger
from lms_analytics.domain.principal import Principal
from lms_analytics.repository.analytics import (get_dashboard_data,
                                                get_leaderboard_data)
from lms_analytics.security.security import get_current_principal

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])
logger = configure_logger()


@router.get("/leaderboard")
async def leaderboard(
    session: AsyncSession = Depends(get_db),
    principal: Optional[Principal] = Depends(get_current_principal),
):
    """
    Submissions of the caller's courses ranked by their points.

    Answers ``null`` for anonymous callers or when the data is unavailable.
    """
    if principal is None:
        return None

    return await get_leaderboard_data(session, principal)


@router.get("/summary")
async def summary(
    session: AsyncSession = Depends(get_db),
    principal: Optional[Principal] = Depends(get_current_principal),
):
    """Caller's position, points and number of submitted assignments."""
    if principal is None:
        return None

    data = await get_dashboard_data(session, principal)
    if data is not None:
        logger.info(
            f"Dashboard for {principal.username}: position {data.position}, "
            f"{data.assignments_submitted} submissions"
        )
    return data
