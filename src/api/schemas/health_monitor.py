from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import Field

from src.api.schemas.common import ApiModel

AlertCategory = Literal["feeding", "sleep", "growth"]


class AlertSeverity(str, Enum):
    """Severity levels for health alerts."""

    high = "high"
    medium = "medium"
    low = "low"


class HealthAlert(ApiModel):
    """A computed, non-persisted warning about a detected care pattern."""

    category: AlertCategory = Field(..., description="feeding|sleep|growth")
    severity: AlertSeverity = Field(..., description="high|medium|low")
    title: str = Field(..., description="Short alert title.")
    message: str = Field(..., description="What was detected, including the measured value.")
    recommended_action: str = Field(..., description="What the caregiver can do next.", alias="recommendedAction")


class AlertSummary(ApiModel):
    """Counts of alerts by severity."""

    total_alerts: int = Field(0, ge=0, alias="totalAlerts")
    high_severity: int = Field(0, ge=0, alias="highSeverity")
    medium_severity: int = Field(0, ge=0, alias="mediumSeverity")
    low_severity: int = Field(0, ge=0, alias="lowSeverity")


class HealthMonitorRequest(ApiModel):
    """Request body for an on-demand evaluation."""

    # Optional at the model level so a missing id yields the evaluator's own error shape.
    baby_id: Optional[str] = Field(default=None, description="Baby to evaluate.", alias="babyId")
    language: Optional[str] = Field(
        default=None, description="Language for alert texts; null or unknown codes fall back to English."
    )


class HealthMonitorResponse(ApiModel):
    """Successful evaluation result."""

    success: bool = Field(True)
    alerts: List[HealthAlert] = Field(default_factory=list)
    summary: AlertSummary = Field(default_factory=AlertSummary)


class HealthMonitorErrorResponse(ApiModel):
    """Failed evaluation result."""

    error: str = Field(..., description="Human-readable error message.")
