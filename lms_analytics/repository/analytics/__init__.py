# -*- coding: utf-8 -*-
"""
Repositories for course statistics and the leaderboard.
"""

from .course_analytics import (get_all_mentees, get_all_mentors,
                               get_barchart_data, get_linechart_data,
                               get_piechart_data)
from .leaderboard import (get_dashboard_data, get_enrolled_courses,
                          get_leaderboard_data)
from .scope import plan_scope
from .student_analytics import get_student_heatmap, get_student_progress

__all__ = [
    # Scope
    "plan_scope",
    # Course statistics
    "get_piechart_data",
    "get_linechart_data",
    "get_barchart_data",
    "get_all_mentees",
    "get_all_mentors",
    # Student statistics
    "get_student_progress",
    "get_student_heatmap",
    # Leaderboard
    "get_enrolled_courses",
    "get_leaderboard_data",
    "get_dashboard_data",
]
