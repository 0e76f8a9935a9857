from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from src.api.schemas.common import ApiModel

Gender = Literal["male", "female", "other"]
FeedingType = Literal["breast-left", "breast-right", "bottle", "formula", "solid"]
SleepType = Literal["nap", "night"]
DiaperType = Literal["wet", "dirty", "mixed"]
Mood = Literal["happy", "fussy", "calm", "crying"]


class BabyCreate(ApiModel):
    """Request model for registering a baby."""

    user_id: str = Field(..., description="Owning user id (caregiver account).", alias="userId")
    name: str = Field(..., description="Baby's display name.")
    birth_date: datetime = Field(..., description="Date of birth.", alias="birthDate")
    gender: Gender = Field("other", description="male|female|other")
    weight_kg: Optional[float] = Field(default=None, gt=0, le=50, description="Birth weight (kg).", alias="weightKg")
    height_cm: Optional[float] = Field(default=None, gt=0, le=200, description="Birth length (cm).", alias="heightCm")
    photo_url: Optional[str] = Field(default=None, description="Profile photo URL.", alias="photoUrl")


class BabyUpdate(ApiModel):
    """Request body for updating a baby (partial update)."""

    name: Optional[str] = Field(default=None, description="Baby's display name.")
    birth_date: Optional[datetime] = Field(default=None, description="Date of birth.", alias="birthDate")
    gender: Optional[Gender] = Field(default=None, description="male|female|other")
    weight_kg: Optional[float] = Field(default=None, gt=0, le=50, description="Weight (kg).", alias="weightKg")
    height_cm: Optional[float] = Field(default=None, gt=0, le=200, description="Height (cm).", alias="heightCm")
    photo_url: Optional[str] = Field(default=None, description="Profile photo URL.", alias="photoUrl")


class Baby(BabyCreate):
    """Response model for a baby."""

    id: str = Field(..., description="Stable baby identifier.")
    created_at: datetime = Field(..., description="UTC timestamp when the baby was registered.", alias="createdAt")


class BabyListResponse(ApiModel):
    """Envelope for listing babies."""

    items: List[Baby] = Field(..., description="Babies owned by the user.")
    total: int = Field(..., ge=0, description="Total count returned.")


class FeedingCreate(ApiModel):
    """Request model for logging a feeding."""

    type: Optional[FeedingType] = Field(default=None, description="Feeding type.")
    start_time: datetime = Field(..., description="When the feeding started.", alias="startTime")
    end_time: Optional[datetime] = Field(default=None, description="When the feeding ended.", alias="endTime")
    duration_minutes: Optional[float] = Field(default=None, ge=0, description="Duration in minutes.", alias="durationMinutes")
    amount: Optional[float] = Field(default=None, ge=0, description="Amount in ml or oz.")
    note: Optional[str] = Field(default=None, description="Free-text note.")


class Feeding(FeedingCreate):
    """A logged feeding event."""

    id: str = Field(..., description="Feeding id.")
    baby_id: str = Field(..., description="Baby this feeding belongs to.", alias="babyId")


class FeedingListResponse(ApiModel):
    items: List[Feeding]
    total: int = Field(..., ge=0)


class SleepCreate(ApiModel):
    """Request model for logging a sleep."""

    type: Optional[SleepType] = Field(default=None, description="nap|night")
    start_time: datetime = Field(..., description="When the sleep started.", alias="startTime")
    end_time: Optional[datetime] = Field(default=None, description="When the sleep ended.", alias="endTime")
    duration_minutes: Optional[float] = Field(
        default=None,
        ge=0,
        description="Duration in minutes; derived from start/end when omitted.",
        alias="durationMinutes",
    )
    location: Optional[str] = Field(default=None, description="Where the baby slept.")
    mood: Optional[Mood] = Field(default=None, description="Mood on waking.")
    note: Optional[str] = Field(default=None, description="Free-text note.")


class Sleep(SleepCreate):
    """A logged sleep event."""

    id: str = Field(..., description="Sleep id.")
    baby_id: str = Field(..., description="Baby this sleep belongs to.", alias="babyId")


class SleepListResponse(ApiModel):
    items: List[Sleep]
    total: int = Field(..., ge=0)


class GrowthCreate(ApiModel):
    """Request model for recording a growth measurement."""

    date: datetime = Field(..., description="Measurement date.")
    weight_kg: Optional[float] = Field(default=None, gt=0, le=50, description="Weight (kg).", alias="weightKg")
    height_cm: Optional[float] = Field(default=None, gt=0, le=200, description="Height (cm).", alias="heightCm")
    head_circumference_cm: Optional[float] = Field(
        default=None, gt=0, le=100, description="Head circumference (cm).", alias="headCircumferenceCm"
    )
    note: Optional[str] = Field(default=None, description="Free-text note.")


class GrowthRecord(GrowthCreate):
    """A growth sample."""

    id: str = Field(..., description="Growth record id.")
    baby_id: str = Field(..., description="Baby this sample belongs to.", alias="babyId")


class GrowthListResponse(ApiModel):
    items: List[GrowthRecord]
    total: int = Field(..., ge=0)


class DiaperCreate(ApiModel):
    """Request model for logging a diaper change."""

    type: DiaperType = Field(..., description="wet|dirty|mixed")
    time: datetime = Field(..., description="When the change happened.")
    note: Optional[str] = Field(default=None, description="Free-text note.")


class Diaper(DiaperCreate):
    """A logged diaper change."""

    id: str = Field(..., description="Diaper record id.")
    baby_id: str = Field(..., description="Baby this record belongs to.", alias="babyId")


class DiaperListResponse(ApiModel):
    items: List[Diaper]
    total: int = Field(..., ge=0)


class MilestoneCreate(ApiModel):
    """Request model for recording a milestone."""

    title: str = Field(..., description="What the baby did (e.g. 'First smile').")
    date: datetime = Field(..., description="When it happened.")
    description: Optional[str] = Field(default=None, description="Longer description.")
    category: Optional[str] = Field(default=None, description="Free-form category (e.g. 'motor', 'social').")
    photo_urls: List[str] = Field(default_factory=list, description="Attached photo URLs.", alias="photoUrls")


class Milestone(MilestoneCreate):
    id: str = Field(..., description="Milestone id.")
    baby_id: str = Field(..., description="Baby this milestone belongs to.", alias="babyId")


class MilestoneListResponse(ApiModel):
    items: List[Milestone]
    total: int = Field(..., ge=0)
