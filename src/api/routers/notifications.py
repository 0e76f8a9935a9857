from __future__ import annotations

from fastapi import APIRouter, HTTPException, Path, Query, Request

from src.api.schemas.common import ErrorResponse
from src.api.schemas.notifications import MarkAllReadResponse, NotificationListResponse, UnreadCountResponse
from src.api.services import notifications_service

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get(
    "",
    response_model=NotificationListResponse,
    summary="List notifications",
    description="List a user's notifications (newest first), optionally unread only.",
    operation_id="list_notifications",
)
def list_notifications(
    request: Request,
    user_id: str = Query(..., alias="userId", description="Recipient user id."),
    unread_only: bool = Query(False, alias="unreadOnly"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0, le=100000),
) -> NotificationListResponse:
    """List notifications with pagination."""
    items, total = notifications_service.list_notifications(
        request, user_id, unread_only=unread_only, limit=limit, offset=offset
    )
    return NotificationListResponse(items=items, total=total)


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    summary="Unread notification count",
    operation_id="unread_notification_count",
)
def unread_count(
    request: Request,
    user_id: str = Query(..., alias="userId", description="Recipient user id."),
) -> UnreadCountResponse:
    """Count unread notifications."""
    return UnreadCountResponse(count=notifications_service.unread_count(request, user_id))


@router.post(
    "/read-all",
    response_model=MarkAllReadResponse,
    summary="Mark all notifications read",
    operation_id="mark_all_notifications_read",
)
def mark_all_read(
    request: Request,
    user_id: str = Query(..., alias="userId", description="Recipient user id."),
) -> MarkAllReadResponse:
    """Mark every unread notification of a user as read."""
    return MarkAllReadResponse(updatedCount=notifications_service.mark_all_read(request, user_id))


@router.post(
    "/{notification_id}/read",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
    summary="Mark notification read",
    operation_id="mark_notification_read",
)
def mark_read(
    request: Request,
    notification_id: str = Path(..., description="Notification identifier"),
) -> None:
    """Mark one notification as read."""
    if not notifications_service.mark_read(request, notification_id):
        raise HTTPException(status_code=404, detail="notification not found")
    return None
