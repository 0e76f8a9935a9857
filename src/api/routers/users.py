from __future__ import annotations

from fastapi import APIRouter, Path, Request

from src.api.schemas.users import UserRoleResponse
from src.api.services import users_service

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get(
    "/{user_id}/role",
    response_model=UserRoleResponse,
    summary="Resolve user role",
    description="Resolve a user's role from user_roles, then profiles, defaulting to 'parent'.",
    operation_id="get_user_role",
)
def get_user_role(request: Request, user_id: str = Path(..., description="User identifier")) -> UserRoleResponse:
    """Resolve a user's role."""
    return users_service.get_user_role(request, user_id)
