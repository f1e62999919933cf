# -*- coding: utf-8 -*-
"""
Query scope selection for course statistics.

The scope is derived from the caller's role on every call instead of being
accepted from the request, so a mentor only ever sees their own cohort unless
an explicit username is passed.
"""

from typing import Optional, assert_never

from lms_analytics.api.v1.statistics.shared.schemas import QueryScope
from lms_analytics.config.logger import configure_logger
from lms_analytics.domain.enums import Role, ScopeKind
from lms_analytics.domain.principal import Principal

logger = configure_logger()

EMPTY_SCOPE = QueryScope(kind=ScopeKind.NONE)
WHOLE_COURSE_SCOPE = QueryScope(kind=ScopeKind.WHOLE_COURSE)


def plan_scope(
    principal: Principal, target_username: Optional[str] = None
) -> QueryScope:
    """
    Pick the enrollments a statistics query may read.

    Args:
        principal: Calling user
        target_username: Mentor whose cohort should be read instead of the
            caller's own

    Returns:
        MENTOR_COHORT for mentors or any explicit target, WHOLE_COURSE for
        instructors, NONE otherwise
    """
    if target_username:
        if principal.role is Role.STUDENT:
            logger.warning(
                f"Student {principal.username} requested the cohort of mentor {target_username}"
            )
        return QueryScope(kind=ScopeKind.MENTOR_COHORT, mentor_username=target_username)

    role = principal.role
    if role is Role.MENTOR:
        return QueryScope(
            kind=ScopeKind.MENTOR_COHORT, mentor_username=principal.username
        )
    elif role is Role.INSTRUCTOR:
        return WHOLE_COURSE_SCOPE
    elif role is Role.STUDENT:
        return EMPTY_SCOPE
    else:
        assert_never(role)
