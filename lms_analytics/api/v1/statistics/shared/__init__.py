# -*- coding: utf-8 -*-
"""
Shared components of the statistics endpoints.
"""

from .schemas import (BarchartPoint, CourseSummary, DashboardSummary, Failure,
                      LeaderboardData, LeaderboardEntry, LeaderboardUser,
                      LinechartPoint, QueryScope, StatisticsResult,
                      StudentHeatmap, StudentProgress, Success, UserSummary)

__all__ = [
    # Results
    "Success",
    "Failure",
    "StatisticsResult",
    "QueryScope",
    # Charts
    "LinechartPoint",
    "BarchartPoint",
    "UserSummary",
    "StudentProgress",
    "StudentHeatmap",
    # Leaderboard
    "CourseSummary",
    "LeaderboardUser",
    "LeaderboardEntry",
    "LeaderboardData",
    "DashboardSummary",
]
