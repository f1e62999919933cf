# -*- coding: utf-8 -*-
"""
Per-student statistics: submission progress and attendance heatmap.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lms_analytics.api.v1.statistics.shared.schemas import (StatisticsResult,
                                                            StudentHeatmap,
                                                            StudentProgress,
                                                            Success)
from lms_analytics.config.logger import configure_logger
from lms_analytics.domain.enums import AttachmentType
from lms_analytics.domain.models import (Attachment, Attendance, Class,
                                         EnrolledUser, Submission)
from lms_analytics.domain.principal import Principal
from lms_analytics.repository.analytics.helpers import (failure,
                                                        to_calendar_day)

logger = configure_logger()


async def get_student_progress(
    session: AsyncSession,
    principal: Principal,
    course_id: int,
    student_username: Optional[str] = None,
) -> StatisticsResult:
    """
    Submission breakdown of one student in one course.

    Args:
        session: Database session
        principal: Calling user
        course_id: Course ID
        student_username: Student to report on; defaults to the caller

    Returns:
        ``StudentProgress`` where ``evaluated + unreviewed + unsubmitted``
        equals the summed ``max_submissions`` of the course's assignments
    """
    username = student_username or principal.username
    try:
        submissions = (
            await session.execute(
                select(Submission)
                .join(Submission.enrolled_user)
                .join(Submission.attachment)
                .where(
                    EnrolledUser.username == username,
                    Attachment.course_id == course_id,
                )
                .options(selectinload(Submission.points))
                .order_by(Submission.id)
            )
        ).scalars().all()

        evaluated = [submission for submission in submissions if submission.is_evaluated]
        unreviewed = len(submissions) - len(evaluated)
        total_points = sum(submission.total_score for submission in evaluated)

        total_expected = (
            await session.execute(
                select(
                    func.coalesce(
                        func.sum(func.coalesce(Attachment.max_submissions, 0)), 0
                    )
                ).where(
                    Attachment.attachment_type == AttachmentType.ASSIGNMENT,
                    Attachment.course_id == course_id,
                )
            )
        ).scalar_one()

        logger.debug(
            f"Progress of {username} in course {course_id}: "
            f"{len(evaluated)} evaluated, {unreviewed} unreviewed of {total_expected}"
        )
        return Success(
            data=StudentProgress(
                evaluated=len(evaluated),
                unreviewed=unreviewed,
                unsubmitted=total_expected - len(evaluated) - unreviewed,
                total_points=total_points,
            )
        )
    except Exception as e:
        return failure("Failed to fetch student progress", e)


async def get_student_heatmap(
    session: AsyncSession,
    principal: Principal,
    course_id: int,
    student_username: Optional[str] = None,
) -> StatisticsResult:
    """
    Class dates of a course next to the dates a student attended.

    Only classes with at least one attendance record are listed, so
    ``attendance_dates`` is a subset of ``classes``.
    """
    username = student_username or principal.username
    try:
        attended = (
            await session.execute(
                select(Class.created_at)
                .join(Attendance, Attendance.class_id == Class.id)
                .where(
                    Attendance.username == username,
                    Attendance.attended.is_(True),
                    Class.course_id == course_id,
                )
                .order_by(Class.created_at, Class.id)
            )
        ).scalars().all()

        classes = (
            await session.execute(
                select(Class.created_at)
                .where(Class.course_id == course_id, Class.attendance.any())
                .order_by(Class.created_at, Class.id)
            )
        ).scalars().all()

        return Success(
            data=StudentHeatmap(
                classes=[to_calendar_day(moment) for moment in classes],
                attendance_dates=[to_calendar_day(moment) for moment in attended],
            )
        )
    except Exception as e:
        return failure("Failed to fetch student heatmap", e)
