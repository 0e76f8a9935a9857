"""Conversions between stored snake_case documents and API models.

Every entity gets one ``*_from_doc`` reader and one ``*_to_doc`` builder. Each
field is mapped explicitly; a missing required field raises ``KeyError``.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from src.api.schemas.care import (
    Baby,
    BabyCreate,
    Diaper,
    DiaperCreate,
    Feeding,
    FeedingCreate,
    GrowthCreate,
    GrowthRecord,
    Milestone,
    MilestoneCreate,
    Sleep,
    SleepCreate,
)
from src.api.schemas.notifications import Notification


def as_utc_datetime(value: Any) -> Optional[datetime]:
    """Coerce a stored timestamp (datetime or ISO-8601 string) to an aware UTC datetime."""
    if value is None:
        return None
    if isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        value = datetime.fromisoformat(raw)
    if not isinstance(value, datetime):
        raise TypeError(f"expected datetime or ISO string, got {type(value).__name__}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _opt_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _require_datetime(doc: dict, key: str) -> datetime:
    parsed = as_utc_datetime(doc[key])
    if parsed is None:
        raise KeyError(key)
    return parsed


# ---- Babies ----


def baby_from_doc(doc: dict) -> Baby:
    return Baby(
        id=doc["id"],
        userId=doc["user_id"],
        name=doc["name"],
        birthDate=_require_datetime(doc, "birth_date"),
        gender=doc.get("gender") or "other",
        weightKg=_opt_float(doc.get("weight")),
        heightCm=_opt_float(doc.get("height")),
        photoUrl=doc.get("photo_url"),
        createdAt=_require_datetime(doc, "created_at"),
    )


def baby_to_doc(baby_id: str, payload: BabyCreate, created_at: datetime) -> Dict[str, Any]:
    return {
        "id": baby_id,
        "user_id": payload.user_id,
        "name": payload.name.strip(),
        "birth_date": as_utc_datetime(payload.birth_date),
        "gender": payload.gender,
        "weight": payload.weight_kg,
        "height": payload.height_cm,
        "photo_url": payload.photo_url,
        "created_at": created_at,
    }


# ---- Feedings ----


def feeding_from_doc(doc: dict) -> Feeding:
    return Feeding(
        id=doc["id"],
        babyId=doc["baby_id"],
        type=doc.get("type"),
        startTime=_require_datetime(doc, "start_time"),
        endTime=as_utc_datetime(doc.get("end_time")),
        durationMinutes=_opt_float(doc.get("duration")),
        amount=_opt_float(doc.get("amount")),
        note=doc.get("note"),
    )


def feeding_to_doc(feeding_id: str, baby_id: str, payload: FeedingCreate) -> Dict[str, Any]:
    return {
        "id": feeding_id,
        "baby_id": baby_id,
        "type": payload.type,
        "start_time": as_utc_datetime(payload.start_time),
        "end_time": as_utc_datetime(payload.end_time),
        "duration": payload.duration_minutes,
        "amount": payload.amount,
        "note": payload.note,
    }


# ---- Sleeps ----


def sleep_from_doc(doc: dict) -> Sleep:
    return Sleep(
        id=doc["id"],
        babyId=doc["baby_id"],
        type=doc.get("type"),
        startTime=_require_datetime(doc, "start_time"),
        endTime=as_utc_datetime(doc.get("end_time")),
        durationMinutes=_opt_float(doc.get("duration")),
        location=doc.get("location"),
        mood=doc.get("mood"),
        note=doc.get("note"),
    )


def sleep_to_doc(sleep_id: str, baby_id: str, payload: SleepCreate) -> Dict[str, Any]:
    start = as_utc_datetime(payload.start_time)
    end = as_utc_datetime(payload.end_time)
    duration = payload.duration_minutes
    if duration is None and start is not None and end is not None and end >= start:
        duration = round((end - start).total_seconds() / 60.0, 1)
    return {
        "id": sleep_id,
        "baby_id": baby_id,
        "type": payload.type,
        "start_time": start,
        "end_time": end,
        "duration": duration,
        "location": payload.location,
        "mood": payload.mood,
        "note": payload.note,
    }


# ---- Growth ----


def growth_from_doc(doc: dict) -> GrowthRecord:
    return GrowthRecord(
        id=doc["id"],
        babyId=doc["baby_id"],
        date=_require_datetime(doc, "date"),
        weightKg=_opt_float(doc.get("weight")),
        heightCm=_opt_float(doc.get("height")),
        headCircumferenceCm=_opt_float(doc.get("head_circumference")),
        note=doc.get("note"),
    )


def growth_to_doc(growth_id: str, baby_id: str, payload: GrowthCreate) -> Dict[str, Any]:
    return {
        "id": growth_id,
        "baby_id": baby_id,
        "date": as_utc_datetime(payload.date),
        "weight": payload.weight_kg,
        "height": payload.height_cm,
        "head_circumference": payload.head_circumference_cm,
        "note": payload.note,
    }


# ---- Diapers ----


def diaper_from_doc(doc: dict) -> Diaper:
    return Diaper(
        id=doc["id"],
        babyId=doc["baby_id"],
        type=doc["type"],
        time=_require_datetime(doc, "time"),
        note=doc.get("note"),
    )


def diaper_to_doc(diaper_id: str, baby_id: str, payload: DiaperCreate) -> Dict[str, Any]:
    return {
        "id": diaper_id,
        "baby_id": baby_id,
        "type": payload.type,
        "time": as_utc_datetime(payload.time),
        "note": payload.note,
    }


# ---- Milestones ----


def milestone_from_doc(doc: dict) -> Milestone:
    return Milestone(
        id=doc["id"],
        babyId=doc["baby_id"],
        title=doc["title"],
        date=_require_datetime(doc, "date"),
        description=doc.get("description"),
        category=doc.get("category"),
        photoUrls=list(doc.get("photo_urls") or []),
    )


def milestone_to_doc(milestone_id: str, baby_id: str, payload: MilestoneCreate) -> Dict[str, Any]:
    return {
        "id": milestone_id,
        "baby_id": baby_id,
        "title": payload.title.strip(),
        "date": as_utc_datetime(payload.date),
        "description": payload.description,
        "category": payload.category,
        "photo_urls": list(payload.photo_urls),
    }


# ---- Notifications ----


def notification_from_doc(doc: dict) -> Notification:
    return Notification(
        id=doc["id"],
        userId=doc["user_id"],
        title=doc.get("title", ""),
        message=doc.get("message", ""),
        type=doc["type"],
        data=doc.get("data") or {},
        read=bool(doc.get("read", False)),
        createdAt=_require_datetime(doc, "created_at"),
    )


def notification_to_doc(
    notification_id: str,
    user_id: str,
    title: str,
    message: str,
    type_: str,
    data: Dict[str, Any],
    created_at: datetime,
) -> Dict[str, Any]:
    return {
        "id": notification_id,
        "user_id": user_id,
        "title": title,
        "message": message,
        "type": type_,
        "data": dict(data),
        "read": False,
        "created_at": created_at,
    }
