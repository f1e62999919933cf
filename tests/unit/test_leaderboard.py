# -*- coding: utf-8 -*-
"""
Unit tests for the leaderboard and dashboard summary
"""

from datetime import date, datetime
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from lms_analytics.api.v1.statistics.shared.schemas import (CourseSummary,
                                                            LeaderboardEntry,
                                                            LeaderboardUser)
from lms_analytics.domain.enums import Role
from lms_analytics.domain.principal import Principal
from lms_analytics.repository.analytics import (get_dashboard_data,
                                                get_enrolled_courses,
                                                get_leaderboard_data)
from lms_analytics.repository.analytics.leaderboard import rank_entries
from tests.fixtures import (create_test_assignment, create_test_course,
                            create_test_user, enroll, principal_of, submit)


@pytest.fixture
async def ranked_course(test_session):
    """
    Submissions in creation order: sam 5, sue 10, sam 5, sue 0.
    """
    course = await create_test_course(test_session, "Algorithms")
    sam = await create_test_user(test_session, "sam")
    sue = await create_test_user(test_session, "sue")
    sam_enrollment = await enroll(test_session, sam, course)
    sue_enrollment = await enroll(test_session, sue, course)
    hw1 = await create_test_assignment(test_session, course, "HW1", datetime(2024, 1, 1))
    hw2 = await create_test_assignment(test_session, course, "HW2", datetime(2024, 1, 2))

    first = await submit(
        test_session, sam_enrollment, hw1, [2, 3], created_at=datetime(2024, 2, 1)
    )
    top = await submit(
        test_session, sue_enrollment, hw1, [10], created_at=datetime(2024, 2, 2)
    )
    tied = await submit(
        test_session, sam_enrollment, hw2, [5], created_at=datetime(2024, 2, 3)
    )
    last = await submit(
        test_session, sue_enrollment, hw2, created_at=datetime(2024, 2, 4)
    )
    test_session.expunge_all()

    return {
        "course": course,
        "sam": sam,
        "sue": sue,
        "submissions": [first, top, tied, last],
    }


def make_entry(submission_id: int, total_points: float) -> LeaderboardEntry:
    return LeaderboardEntry(
        submission_id=submission_id,
        user=LeaderboardUser(id=1, username="sam"),
        course=CourseSummary(id=1, title="Algorithms"),
        total_points=total_points,
    )


class TestRankEntries:
    def test_sorted_descending(self):
        entries = [make_entry(1, 3), make_entry(2, 7), make_entry(3, 5)]

        ranked = rank_entries(entries)

        assert [entry.submission_id for entry in ranked] == [2, 3, 1]

    def test_ties_keep_input_order(self):
        entries = [make_entry(1, 4), make_entry(2, 4), make_entry(3, 9), make_entry(4, 4)]

        ranked = rank_entries(entries)

        assert [entry.submission_id for entry in ranked] == [3, 1, 2, 4]


class TestLeaderboard:
    """Leaderboard over enrolled courses"""

    @pytest.mark.asyncio
    async def test_entries_ranked_per_submission(self, test_session, ranked_course):
        first, top, tied, last = ranked_course["submissions"]

        data = await get_leaderboard_data(test_session, principal_of(ranked_course["sam"]))

        assert [entry.submission_id for entry in data.entries] == [
            top.id,
            first.id,
            tied.id,
            last.id,
        ]
        assert [entry.total_points for entry in data.entries] == [10, 5, 5, 0]
        assert data.entries[0].user.username == "sue"
        assert data.entries[0].course.title == "Algorithms"
        assert data.current_user.username == "sam"
        assert [course.title for course in data.enrolled_courses] == ["Algorithms"]

    @pytest.mark.asyncio
    async def test_other_courses_are_excluded(self, test_session, ranked_course):
        other_course = await create_test_course(test_session, "Databases")
        outsider = await create_test_user(test_session, "oli")
        enrollment = await enroll(test_session, outsider, other_course)
        hw = await create_test_assignment(
            test_session, other_course, "SQL", datetime(2024, 1, 1)
        )
        await submit(test_session, enrollment, hw, [100])
        test_session.expunge_all()

        data = await get_leaderboard_data(test_session, principal_of(ranked_course["sam"]))

        assert all(entry.user.username != "oli" for entry in data.entries)
        assert len(data.entries) == 4

    @pytest.mark.asyncio
    async def test_not_enrolled_caller_gets_empty_board(self, test_session):
        loner = await create_test_user(test_session, "lee")

        data = await get_leaderboard_data(test_session, principal_of(loner))

        assert data.entries == []
        assert data.enrolled_courses == []

    @pytest.mark.asyncio
    async def test_enrolled_courses_by_start_date(self, test_session):
        student = await create_test_user(test_session, "sam")
        later = await create_test_course(test_session, "Later", date(2024, 9, 1))
        earlier = await create_test_course(test_session, "Earlier", date(2024, 2, 1))
        await create_test_course(test_session, "Not enrolled", date(2024, 1, 1))
        await enroll(test_session, student, later)
        await enroll(test_session, student, earlier)

        courses = await get_enrolled_courses(test_session, principal_of(student))

        assert [course.title for course in courses] == ["Earlier", "Later"]

    @pytest.mark.asyncio
    async def test_database_error_returns_none(self):
        session = AsyncMock()
        session.execute.side_effect = SQLAlchemyError("gone")
        principal = Principal(id=1, username="sam", role=Role.STUDENT)

        assert await get_leaderboard_data(session, principal) is None
        assert await get_dashboard_data(session, principal) is None


class TestDashboardSummary:
    @pytest.mark.asyncio
    async def test_position_is_best_submission(self, test_session, ranked_course):
        summary = await get_dashboard_data(test_session, principal_of(ranked_course["sam"]))

        assert summary.position == 1
        assert summary.points == 5
        assert summary.assignments_submitted == 2
        assert summary.current_user.username == "sam"

    @pytest.mark.asyncio
    async def test_leader_is_position_zero(self, test_session, ranked_course):
        summary = await get_dashboard_data(test_session, principal_of(ranked_course["sue"]))

        assert summary.position == 0
        assert summary.points == 10
        assert summary.assignments_submitted == 2

    @pytest.mark.asyncio
    async def test_caller_without_submissions(self, test_session, ranked_course):
        newcomer = await create_test_user(test_session, "nia")
        await enroll(test_session, newcomer, ranked_course["course"])
        test_session.expunge_all()

        summary = await get_dashboard_data(test_session, principal_of(newcomer))

        assert summary.position is None
        assert summary.points is None
        assert summary.assignments_submitted == 0
