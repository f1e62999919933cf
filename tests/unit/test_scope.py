# -*- coding: utf-8 -*-
"""
Unit tests for query scope selection
"""

import pytest
from pydantic import ValidationError

from lms_analytics.domain.enums import Role, ScopeKind
from lms_analytics.domain.principal import Principal
from lms_analytics.repository.analytics.scope import plan_scope


def make_principal(role: Role, username: str = "caller") -> Principal:
    return Principal(id=1, username=username, role=role, organization_id=1)


class TestPlanScope:
    """Scope selection by role"""

    def test_mentor_reads_own_cohort(self):
        scope = plan_scope(make_principal(Role.MENTOR, "mia"))

        assert scope.kind is ScopeKind.MENTOR_COHORT
        assert scope.mentor_username == "mia"

    def test_instructor_reads_whole_course(self):
        scope = plan_scope(make_principal(Role.INSTRUCTOR))

        assert scope.kind is ScopeKind.WHOLE_COURSE
        assert scope.mentor_username is None

    def test_student_reads_nothing(self):
        scope = plan_scope(make_principal(Role.STUDENT))

        assert scope.kind is ScopeKind.NONE

    @pytest.mark.parametrize("role", list(Role))
    def test_explicit_target_selects_that_cohort(self, role):
        scope = plan_scope(make_principal(role), "other_mentor")

        assert scope.kind is ScopeKind.MENTOR_COHORT
        assert scope.mentor_username == "other_mentor"

    def test_empty_target_falls_back_to_role(self):
        scope = plan_scope(make_principal(Role.INSTRUCTOR), "")

        assert scope.kind is ScopeKind.WHOLE_COURSE

    def test_scope_is_immutable(self):
        scope = plan_scope(make_principal(Role.MENTOR, "mia"))

        with pytest.raises(ValidationError):
            scope.mentor_username = "someone_else"
