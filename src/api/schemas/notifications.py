from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

from pydantic import Field

from src.api.schemas.common import ApiModel

HEALTH_ALERT_TYPE = "health_alert"


class Notification(ApiModel):
    """Response model for a user notification."""

    id: str = Field(..., description="Notification id.")
    user_id: str = Field(..., description="Recipient user id.", alias="userId")
    title: str = Field(..., description="Short title.")
    message: str = Field(..., description="Human-readable body.")
    type: str = Field(..., description="Notification type tag (e.g. 'health_alert').")
    data: Dict[str, Any] = Field(default_factory=dict, description="Structured payload for the client.")
    read: bool = Field(False, description="Whether the user has read the notification.")
    created_at: datetime = Field(..., description="UTC creation timestamp.", alias="createdAt")


class NotificationListResponse(ApiModel):
    """Envelope for listing notifications."""

    items: List[Notification] = Field(..., description="Notifications, newest first.")
    total: int = Field(..., ge=0, description="Total count matching the filter.")


class UnreadCountResponse(ApiModel):
    count: int = Field(..., ge=0)


class MarkAllReadResponse(ApiModel):
    updated_count: int = Field(..., ge=0, alias="updatedCount")
