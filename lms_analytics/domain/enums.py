# -*- coding: utf-8 -*-
"""
lms_analytics/domain/enums.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Enumerations shared by the domain models and the analytics layer.
"""

import enum


class Role(str, enum.Enum):
    """Roles a user can hold inside an organization."""

    STUDENT = "STUDENT"
    MENTOR = "MENTOR"
    INSTRUCTOR = "INSTRUCTOR"


class AttachmentType(str, enum.Enum):
    """Kinds of course resources; only ASSIGNMENT is gradable."""

    ASSIGNMENT = "ASSIGNMENT"
    LECTURE = "LECTURE"


class ScopeKind(str, enum.Enum):
    """Which enrollments a statistics query may look at."""

    MENTOR_COHORT = "mentor_cohort"  # enrollments under one mentor
    WHOLE_COURSE = "whole_course"  # every student enrollment of the course
    NONE = "none"  # nothing; callers get empty data


class AccessDecision(str, enum.Enum):
    """Outcome of the request access gate."""

    ALLOW = "allow"
    REDIRECT_SIGN_IN = "redirect_sign_in"
    REDIRECT_DASHBOARD = "redirect_dashboard"
