from __future__ import annotations

from typing import Any, Dict, List, Tuple

from fastapi import Request

from src.api.schemas.notifications import Notification
from src.api.services.records import notification_from_doc
from src.api.state import get_state


def _feed_query(user_id: str, unread_only: bool) -> Dict[str, Any]:
    query: Dict[str, Any] = {"user_id": user_id}
    if unread_only:
        query["read"] = False
    return query


# PUBLIC_INTERFACE
def list_notifications(
    request: Request,
    user_id: str,
    *,
    unread_only: bool = False,
    limit: int = 50,
    offset: int = 0,
) -> Tuple[List[Notification], int]:
    """
    List a user's notifications, newest first.

    Returns (items, total_matching).
    """
    cols = get_state(request.app).mongo.collections()
    q = _feed_query(user_id, unread_only)

    total = int(cols.notifications.count_documents(q))
    docs = list(
        cols.notifications.find(q, projection={"_id": 0})
        .sort("created_at", -1)
        .skip(int(offset))
        .limit(int(limit))
    )
    return ([notification_from_doc(d) for d in docs], total)


# PUBLIC_INTERFACE
def unread_count(request: Request, user_id: str) -> int:
    """Number of unread notifications for a user."""
    cols = get_state(request.app).mongo.collections()
    return int(cols.notifications.count_documents(_feed_query(user_id, unread_only=True)))


# PUBLIC_INTERFACE
def mark_read(request: Request, notification_id: str) -> bool:
    """Mark one notification read. Returns False if it does not exist."""
    cols = get_state(request.app).mongo.collections()
    res = cols.notifications.update_one({"id": notification_id}, {"$set": {"read": True}})
    return res.matched_count > 0


# PUBLIC_INTERFACE
def mark_all_read(request: Request, user_id: str) -> int:
    """Mark every unread notification of a user read. Returns the number updated."""
    cols = get_state(request.app).mongo.collections()
    res = cols.notifications.update_many(_feed_query(user_id, unread_only=True), {"$set": {"read": True}})
    return int(res.modified_count)
