# -*- coding: utf-8 -*-
"""
Leaderboard over the courses the caller is enrolled in.

Ranking is per submission record: every submission carries the total of its
own points and the caller's position is the index of their best submission.
A user with several submissions therefore appears several times.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lms_analytics.api.v1.statistics.shared.schemas import (CourseSummary,
                                                            DashboardSummary,
                                                            LeaderboardData,
                                                            LeaderboardEntry,
                                                            LeaderboardUser)
from lms_analytics.config.logger import configure_logger
from lms_analytics.domain.models import (Attachment, Course, EnrolledUser,
                                         Submission)
from lms_analytics.domain.principal import Principal

logger = configure_logger()


async def get_enrolled_courses(
    session: AsyncSession, principal: Principal
) -> List[Course]:
    """Courses in which the principal holds an enrollment."""
    result = await session.execute(
        select(Course)
        .join(EnrolledUser, EnrolledUser.course_id == Course.id)
        .where(EnrolledUser.username == principal.username)
        .order_by(Course.start_date, Course.id)
    )
    return list(result.scalars().all())


def rank_entries(entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
    """Sort by total points, highest first; equal totals keep their order."""
    return sorted(entries, key=lambda entry: entry.total_points, reverse=True)


async def get_leaderboard_data(
    session: AsyncSession, principal: Principal
) -> Optional[LeaderboardData]:
    """
    Rank every submission of the caller's enrolled courses.

    Args:
        session: Database session
        principal: Calling user

    Returns:
        Ranked entries with the caller and their courses, or ``None`` when
        the data cannot be loaded
    """
    try:
        courses = await get_enrolled_courses(session, principal)
        course_ids = [course.id for course in courses]

        submissions = (
            await session.execute(
                select(Submission)
                .join(Submission.enrolled_user)
                .where(EnrolledUser.course_id.in_(course_ids))
                .options(
                    selectinload(Submission.points),
                    selectinload(Submission.enrolled_user).selectinload(
                        EnrolledUser.user
                    ),
                    selectinload(Submission.attachment).selectinload(
                        Attachment.course
                    ),
                )
                .order_by(Submission.created_at, Submission.id)
            )
        ).scalars().all()

        entries = [
            LeaderboardEntry(
                submission_id=submission.id,
                user=LeaderboardUser.model_validate(submission.enrolled_user.user),
                course=CourseSummary.model_validate(submission.attachment.course),
                total_points=submission.total_score,
            )
            for submission in submissions
        ]

        logger.debug(
            f"Leaderboard for {principal.username}: {len(entries)} submissions in {len(course_ids)} courses"
        )
        return LeaderboardData(
            entries=rank_entries(entries),
            current_user=principal,
            enrolled_courses=[CourseSummary.model_validate(c) for c in courses],
        )
    except Exception as e:
        logger.error(f"Failed to build leaderboard for {principal.username}: {e}")
        return None


async def get_dashboard_data(
    session: AsyncSession, principal: Principal
) -> Optional[DashboardSummary]:
    """Caller's position, points and submission count on the leaderboard."""
    leaderboard = await get_leaderboard_data(session, principal)
    if leaderboard is None:
        return None

    own_entries = [
        index
        for index, entry in enumerate(leaderboard.entries)
        if entry.user.id == principal.id
    ]
    position = own_entries[0] if own_entries else None
    points = leaderboard.entries[position].total_points if position is not None else None

    return DashboardSummary(
        position=position,
        points=points,
        assignments_submitted=len(own_entries),
        current_user=principal,
    )
