from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from fastapi import Request
from pymongo.errors import PyMongoError

from src.api.db.mongo import MongoCollections
from src.api.schemas.users import UserRoleResponse
from src.api.state import get_state

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "parent"
KNOWN_ROLES = ("parent", "doctor", "admin")


def _role_from_user_roles(cols: MongoCollections, user_id: str) -> Optional[str]:
    doc = cols.user_roles.find_one({"user_id": user_id}, projection={"_id": 0, "role": 1})
    return (doc or {}).get("role")


def _role_from_profiles(cols: MongoCollections, user_id: str) -> Optional[str]:
    doc = cols.profiles.find_one({"id": user_id}, projection={"_id": 0, "role": 1})
    return (doc or {}).get("role")


_ROLE_CHAIN: List[Tuple[str, Callable[[MongoCollections, str], Optional[str]]]] = [
    ("user_roles", _role_from_user_roles),
    ("profiles", _role_from_profiles),
]


# PUBLIC_INTERFACE
def resolve_role(cols: MongoCollections, user_id: str) -> Tuple[str, str]:
    """
    Resolve a user's role by walking user_roles -> profiles -> DEFAULT_ROLE.

    Returns (role, source). A failed or empty lookup moves on to the next link;
    unrecognized role values are ignored.
    """
    for source, lookup in _ROLE_CHAIN:
        try:
            role = lookup(cols, user_id)
        except PyMongoError:
            logger.exception("Role lookup in %s failed for userId=%s", source, user_id)
            continue
        if role in KNOWN_ROLES:
            return role, source
        if role is not None:
            logger.warning("Ignoring unknown role=%r from %s for userId=%s", role, source, user_id)
    return DEFAULT_ROLE, "default"


# PUBLIC_INTERFACE
def get_user_role(request: Request, user_id: str) -> UserRoleResponse:
    """Resolve the role for a user id."""
    cols = get_state(request.app).mongo.collections()
    role, source = resolve_role(cols, user_id)
    return UserRoleResponse(userId=user_id, role=role, source=source)
