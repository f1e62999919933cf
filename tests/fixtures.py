# -*- coding: utf-8 -*-
"""
Test data builders.
"""

from datetime import date, datetime
from typing import Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from lms_analytics.domain.enums import AttachmentType, Role
from lms_analytics.domain.models import (Attachment, Attendance, Class,
                                         Course, EnrolledUser, Point,
                                         Submission, User)
from lms_analytics.domain.principal import Principal


async def create_test_data(session: AsyncSession, instance):
    session.add(instance)
    await session.commit()
    await session.refresh(instance)
    return instance


async def create_test_user(
    session: AsyncSession,
    username: str,
    role: Role = Role.STUDENT,
    organization_id: Optional[int] = 1,
) -> User:
    return await create_test_data(
        session,
        User(
            username=username,
            name=username.title(),
            email=f"{username}@example.com",
            role=role,
            organization_id=organization_id,
        ),
    )


async def create_test_course(
    session: AsyncSession,
    title: str = "Python Basics",
    start_date: Optional[date] = None,
    organization_id: Optional[int] = 1,
) -> Course:
    return await create_test_data(
        session,
        Course(
            title=title,
            start_date=start_date or date(2024, 1, 1),
            organization_id=organization_id,
        ),
    )


async def enroll(
    session: AsyncSession,
    user: User,
    course: Course,
    mentor: Optional[User] = None,
) -> EnrolledUser:
    return await create_test_data(
        session,
        EnrolledUser(
            username=user.username,
            course_id=course.id,
            mentor_username=mentor.username if mentor else None,
        ),
    )


async def create_test_class(
    session: AsyncSession, course: Course, held_at: datetime, title: str = "Class"
) -> Class:
    return await create_test_data(
        session, Class(title=title, course_id=course.id, created_at=held_at)
    )


async def mark_attendance(
    session: AsyncSession, user: User, class_: Class, attended: bool = True
) -> Attendance:
    return await create_test_data(
        session,
        Attendance(username=user.username, class_id=class_.id, attended=attended),
    )


async def create_test_assignment(
    session: AsyncSession,
    course: Course,
    title: str,
    created_at: datetime,
    max_submissions: Optional[int] = 1,
    attachment_type: AttachmentType = AttachmentType.ASSIGNMENT,
) -> Attachment:
    return await create_test_data(
        session,
        Attachment(
            title=title,
            course_id=course.id,
            attachment_type=attachment_type,
            max_submissions=max_submissions,
            created_at=created_at,
        ),
    )


async def submit(
    session: AsyncSession,
    enrollment: EnrolledUser,
    assignment: Attachment,
    scores: Iterable[float] = (),
    created_at: Optional[datetime] = None,
) -> Submission:
    """Create a submission, graded with one point per score."""
    submission = await create_test_data(
        session,
        Submission(
            enrolled_user_id=enrollment.id,
            attachment_id=assignment.id,
            created_at=created_at or datetime(2024, 2, 1, 12, 0),
        ),
    )
    for score in scores:
        session.add(Point(submission_id=submission.id, category="task", score=score))
    await session.commit()
    return submission


def principal_of(user: User) -> Principal:
    return Principal(
        id=user.id,
        username=user.username,
        role=user.role,
        organization_id=user.organization_id,
    )
