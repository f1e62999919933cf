# -*- coding: utf-8 -*-
"""
The authenticated caller, passed explicitly to every analytics operation.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from lms_analytics.domain.enums import Role


class Principal(BaseModel):
    """Identity resolved from the request session."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    username: str
    role: Role
    organization_id: Optional[int] = None
