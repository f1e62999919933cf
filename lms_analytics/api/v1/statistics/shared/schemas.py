# -*- coding: utf-8 -*-
"""
Pydantic schemas for the course statistics and dashboard endpoints.
"""

from datetime import date
from typing import Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

from lms_analytics.domain.enums import Role, ScopeKind
from lms_analytics.domain.principal import Principal

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Operation results
# ---------------------------------------------------------------------------


class Success(BaseModel, Generic[T]):
    """Successful statistics operation."""

    data: T


class Failure(BaseModel):
    """Failed statistics operation, returned as data instead of raised."""

    error: str
    details: Optional[str] = None


StatisticsResult = Union[Success, Failure]


# ---------------------------------------------------------------------------
# Query scope
# ---------------------------------------------------------------------------


class QueryScope(BaseModel):
    """Enrollments a statistics query is allowed to read."""

    model_config = ConfigDict(frozen=True)

    kind: ScopeKind
    mentor_username: Optional[str] = None


# ---------------------------------------------------------------------------
# Chart view models
# ---------------------------------------------------------------------------


class LinechartPoint(BaseModel):
    """Attendance of one class."""

    model_config = ConfigDict(populate_by_name=True)

    class_date: str = Field(alias="class", description="YYYY-MM-DD")
    attendees: int
    absentees: int


class BarchartPoint(BaseModel):
    """Submission count of one assignment."""

    assignment: str
    submissions: int


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None
    role: Role
    organization_id: Optional[int] = None


class StudentProgress(BaseModel):
    """Submission breakdown of one student in one course."""

    evaluated: int
    unreviewed: int
    unsubmitted: int
    total_points: float


class StudentHeatmap(BaseModel):
    """Class dates of a course next to the dates one student attended."""

    classes: List[str]
    attendance_dates: List[str]


# ---------------------------------------------------------------------------
# Leaderboard
# ---------------------------------------------------------------------------


class CourseSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    start_date: Optional[date] = None


class LeaderboardUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: Optional[str] = None
    username: str
    image: Optional[str] = None


class LeaderboardEntry(BaseModel):
    """One submission with the total of its own points."""

    submission_id: int
    user: LeaderboardUser
    course: CourseSummary
    total_points: float


class LeaderboardData(BaseModel):
    entries: List[LeaderboardEntry]
    current_user: Principal
    enrolled_courses: List[CourseSummary]


class DashboardSummary(BaseModel):
    """Caller's standing on the leaderboard."""

    position: Optional[int] = None
    points: Optional[float] = None
    assignments_submitted: int
    current_user: Principal
