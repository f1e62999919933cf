# -*- coding: utf-8 -*-
"""
Course statistics for mentors and instructors.

Each function resolves its own query scope from the principal and returns a
``Success`` / ``Failure`` result; database errors never leave this module as
exceptions.
"""

from typing import Dict, List, Optional

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lms_analytics.api.v1.statistics.shared.schemas import (BarchartPoint,
                                                            LinechartPoint,
                                                            QueryScope,
                                                            StatisticsResult,
                                                            Success,
                                                            UserSummary)
from lms_analytics.config.logger import configure_logger
from lms_analytics.domain.enums import AttachmentType, Role, ScopeKind
from lms_analytics.domain.models import (Attachment, Attendance, Class,
                                         EnrolledUser, Submission, User)
from lms_analytics.domain.principal import Principal
from lms_analytics.repository.analytics.helpers import (failure,
                                                        to_calendar_day)
from lms_analytics.repository.analytics.scope import plan_scope

logger = configure_logger()


async def _count_mentees(
    session: AsyncSession, course_id: int, scope: QueryScope
) -> int:
    if scope.kind is ScopeKind.MENTOR_COHORT:
        stmt = (
            select(func.count())
            .select_from(EnrolledUser)
            .where(
                EnrolledUser.mentor_username == scope.mentor_username,
                EnrolledUser.course_id == course_id,
            )
        )
    elif scope.kind is ScopeKind.WHOLE_COURSE:
        stmt = (
            select(func.count())
            .select_from(EnrolledUser)
            .join(User, User.username == EnrolledUser.username)
            .where(EnrolledUser.course_id == course_id, User.role == Role.STUDENT)
        )
    else:
        return 0
    return (await session.execute(stmt)).scalar_one()


async def _scoped_submissions(
    session: AsyncSession, course_id: int, scope: QueryScope
) -> List[Submission]:
    if scope.kind is ScopeKind.MENTOR_COHORT:
        stmt = (
            select(Submission)
            .join(Submission.enrolled_user)
            .where(
                EnrolledUser.mentor_username == scope.mentor_username,
                EnrolledUser.course_id == course_id,
            )
        )
    elif scope.kind is ScopeKind.WHOLE_COURSE:
        stmt = (
            select(Submission)
            .join(Submission.attachment)
            .where(Attachment.course_id == course_id)
        )
    else:
        return []

    stmt = stmt.options(selectinload(Submission.points)).order_by(Submission.id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_piechart_data(
    session: AsyncSession,
    principal: Principal,
    course_id: int,
    mentor_username: Optional[str] = None,
) -> StatisticsResult:
    """
    Completion breakdown of a course's assignments.

    Returns ``[with_points, without_points, not_submitted]`` where
    ``not_submitted = total_assignments * mentee_count - with_points -
    without_points``. The last value goes negative when the mentee count is
    stale; it is reported as is.
    """
    try:
        scope = plan_scope(principal, mentor_username)
        logger.debug(f"Piechart for course {course_id}, scope {scope.kind.value}")

        submissions = await _scoped_submissions(session, course_id, scope)
        mentee_count = await _count_mentees(session, course_id, scope)

        with_points = sum(1 for submission in submissions if submission.is_evaluated)
        without_points = len(submissions) - with_points

        total_assignments = (
            await session.execute(
                select(func.count())
                .select_from(Attachment)
                .where(
                    Attachment.attachment_type == AttachmentType.ASSIGNMENT,
                    Attachment.course_id == course_id,
                )
            )
        ).scalar_one()

        not_submitted = total_assignments * mentee_count - with_points - without_points
        return Success(data=[with_points, without_points, not_submitted])
    except Exception as e:
        return failure("Failed to fetch piechart data", e)


async def get_linechart_data(
    session: AsyncSession,
    principal: Principal,
    course_id: int,
    mentees_count: int,
    mentor_username: Optional[str] = None,
) -> StatisticsResult:
    """
    Attendance per class, oldest class first.

    ``absentees`` is ``mentees_count - attendees`` with the caller supplied
    ``mentees_count``.
    """
    try:
        scope = plan_scope(principal, mentor_username)

        classes = (
            await session.execute(
                select(Class)
                .where(Class.course_id == course_id)
                .order_by(Class.created_at, Class.id)
            )
        ).scalars().all()

        attendance_by_class: Dict[int, int] = {}
        if scope.kind is not ScopeKind.NONE:
            stmt = (
                select(Attendance.class_id, func.count(Attendance.id))
                .join(Class, Class.id == Attendance.class_id)
                .where(Attendance.attended.is_(True), Class.course_id == course_id)
                .group_by(Attendance.class_id)
            )
            if scope.kind is ScopeKind.MENTOR_COHORT:
                cohort = select(EnrolledUser.username).where(
                    EnrolledUser.mentor_username == scope.mentor_username,
                    EnrolledUser.course_id == course_id,
                )
                stmt = stmt.where(Attendance.username.in_(cohort))
            attendance_by_class = dict((await session.execute(stmt)).all())

        points = []
        for class_ in classes:
            attendees = attendance_by_class.get(class_.id, 0)
            points.append(
                LinechartPoint(
                    class_date=to_calendar_day(class_.created_at),
                    attendees=attendees,
                    absentees=mentees_count - attendees,
                )
            )
        return Success(data=points)
    except Exception as e:
        return failure("Failed to fetch linechart data", e)


async def get_barchart_data(
    session: AsyncSession,
    principal: Principal,
    course_id: int,
    mentor_username: Optional[str] = None,
) -> StatisticsResult:
    """Submission count of every assignment in the course, oldest first."""
    try:
        scope = plan_scope(principal, mentor_username)
        if scope.kind is ScopeKind.NONE:
            return Success(data=[])

        assignments = (
            await session.execute(
                select(Attachment)
                .where(
                    Attachment.attachment_type == AttachmentType.ASSIGNMENT,
                    Attachment.course_id == course_id,
                )
                .order_by(Attachment.created_at, Attachment.id)
            )
        ).scalars().all()

        counts_stmt = (
            select(Submission.attachment_id, func.count(Submission.id))
            .where(Submission.attachment_id.in_([a.id for a in assignments]))
            .group_by(Submission.attachment_id)
        )
        if scope.kind is ScopeKind.MENTOR_COHORT:
            counts_stmt = counts_stmt.join(Submission.enrolled_user).where(
                EnrolledUser.mentor_username == scope.mentor_username
            )
        counts = dict((await session.execute(counts_stmt)).all())

        return Success(
            data=[
                BarchartPoint(
                    assignment=assignment.title,
                    submissions=counts.get(assignment.id, 0),
                )
                for assignment in assignments
            ]
        )
    except Exception as e:
        return failure("Failed to fetch barchart data", e)


async def get_all_mentees(
    session: AsyncSession,
    principal: Principal,
    course_id: int,
    mentor_username: Optional[str] = None,
) -> StatisticsResult:
    """Students of the caller's organization enrolled in the course."""
    try:
        scope = plan_scope(principal, mentor_username)
        if scope.kind is ScopeKind.MENTOR_COHORT:
            enrollment_filter = and_(
                EnrolledUser.course_id == course_id,
                EnrolledUser.mentor_username == scope.mentor_username,
            )
        elif scope.kind is ScopeKind.WHOLE_COURSE:
            enrollment_filter = EnrolledUser.course_id == course_id
        else:
            return Success(data=[])

        students = (
            await session.execute(
                select(User)
                .where(
                    User.enrollments.any(enrollment_filter),
                    User.role == Role.STUDENT,
                    User.organization_id == principal.organization_id,
                )
                .order_by(User.id)
            )
        ).scalars().all()

        logger.debug(f"Found {len(students)} mentees in course {course_id}")
        return Success(data=[UserSummary.model_validate(user) for user in students])
    except Exception as e:
        return failure("Failed to fetch mentees", e)


async def get_all_mentors(
    session: AsyncSession,
    principal: Principal,
    course_id: int,
) -> StatisticsResult:
    """Mentors of the caller's organization enrolled in the course."""
    try:
        mentors = (
            await session.execute(
                select(User)
                .where(
                    User.enrollments.any(EnrolledUser.course_id == course_id),
                    User.role == Role.MENTOR,
                    User.organization_id == principal.organization_id,
                )
                .order_by(User.id)
            )
        ).scalars().all()

        return Success(data=[UserSummary.model_validate(user) for user in mentors])
    except Exception as e:
        return failure("Failed to fetch mentors", e)
