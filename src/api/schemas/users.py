from __future__ import annotations

from typing import Literal

from pydantic import Field

from src.api.schemas.common import ApiModel

UserRole = Literal["parent", "doctor", "admin"]
RoleSource = Literal["user_roles", "profiles", "default"]


class UserRoleResponse(ApiModel):
    """Resolved role for a user, with the lookup that produced it."""

    user_id: str = Field(..., alias="userId")
    role: UserRole = Field(..., description="parent|doctor|admin")
    source: RoleSource = Field(..., description="Which link of the lookup chain resolved the role.")
