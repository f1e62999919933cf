# -*- coding: utf-8 -*-
"""
Course statistics endpoints for the mentor / instructor dashboards.

Operations report failures in the body (``{"error", "details"}``) with a 200
status. Anonymous callers get ``null``, except the rosters which answer
``{"error": "Unauthorized"}``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lms_analytics.api.v1.statistics.shared.schemas import (Failure,
                                                            StatisticsResult)
from lms_analytics.clients.database_client import get_db
from lms_analytics.domain.principal import Principal
from lms_analytics.repository.analytics import (get_all_mentees,
                                                get_all_mentors,
                                                get_barchart_data,
                                                get_linechart_data,
                                                get_piechart_data,
                                                get_student_heatmap,
                                                get_student_progress)
from lms_analytics.security.security import get_current_principal

router = APIRouter(prefix="/statistics", tags=["Statistics"])

UNAUTHORIZED = Failure(error="Unauthorized").model_dump(exclude_none=True)


def render_result(result: StatisticsResult):
    if isinstance(result, Failure):
        return result
    return result.data


@router.get("/piechart")
async def piechart(
    course_id: int = Query(..., ge=1, description="Course ID"),
    mentor_username: Optional[str] = Query(None, description="Mentor cohort"),
    session: AsyncSession = Depends(get_db),
    principal: Optional[Principal] = Depends(get_current_principal),
):
    """
    Completion breakdown: ``[with_points, without_points, not_submitted]``.
    """
    if principal is None:
        return None

    result = await get_piechart_data(session, principal, course_id, mentor_username)
    return render_result(result)


@router.get("/linechart")
async def linechart(
    course_id: int = Query(..., ge=1, description="Course ID"),
    mentees_count: int = Query(..., ge=0, description="Cohort size"),
    mentor_username: Optional[str] = Query(None, description="Mentor cohort"),
    session: AsyncSession = Depends(get_db),
    principal: Optional[Principal] = Depends(get_current_principal),
):
    """Attendees and absentees of every class, oldest first."""
    if principal is None:
        return None

    result = await get_linechart_data(
        session, principal, course_id, mentees_count, mentor_username
    )
    return render_result(result)


@router.get("/barchart")
async def barchart(
    course_id: int = Query(..., ge=1, description="Course ID"),
    mentor_username: Optional[str] = Query(None, description="Mentor cohort"),
    session: AsyncSession = Depends(get_db),
    principal: Optional[Principal] = Depends(get_current_principal),
):
    """Submission count per assignment."""
    if principal is None:
        return None

    result = await get_barchart_data(session, principal, course_id, mentor_username)
    return render_result(result)


@router.get("/mentees")
async def mentees(
    course_id: int = Query(..., ge=1, description="Course ID"),
    mentor_username: Optional[str] = Query(None, description="Mentor cohort"),
    session: AsyncSession = Depends(get_db),
    principal: Optional[Principal] = Depends(get_current_principal),
):
    if principal is None:
        return UNAUTHORIZED

    result = await get_all_mentees(session, principal, course_id, mentor_username)
    return render_result(result)


@router.get("/mentors")
async def mentors(
    course_id: int = Query(..., ge=1, description="Course ID"),
    session: AsyncSession = Depends(get_db),
    principal: Optional[Principal] = Depends(get_current_principal),
):
    if principal is None:
        return UNAUTHORIZED

    result = await get_all_mentors(session, principal, course_id)
    return render_result(result)


@router.get("/student/progress")
async def student_progress(
    course_id: int = Query(..., ge=1, description="Course ID"),
    student_username: Optional[str] = Query(None, description="Student username"),
    session: AsyncSession = Depends(get_db),
    principal: Optional[Principal] = Depends(get_current_principal),
):
    """Evaluated / unreviewed / unsubmitted counts and total points."""
    if principal is None:
        return None

    result = await get_student_progress(
        session, principal, course_id, student_username
    )
    return render_result(result)


@router.get("/student/heatmap")
async def student_heatmap(
    course_id: int = Query(..., ge=1, description="Course ID"),
    student_username: Optional[str] = Query(None, description="Student username"),
    session: AsyncSession = Depends(get_db),
    principal: Optional[Principal] = Depends(get_current_principal),
):
    """Class dates and the dates the student attended."""
    if principal is None:
        return None

    result = await get_student_heatmap(
        session, principal, course_id, student_username
    )
    return render_result(result)
