from __future__ import annotations

from typing import List, Optional
from uuid import uuid4

from fastapi import Request

from src.api.schemas.care import (
    Baby,
    BabyCreate,
    BabyUpdate,
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
from src.api.schemas.common import utc_now
from src.api.services.records import (
    as_utc_datetime,
    baby_from_doc,
    baby_to_doc,
    diaper_from_doc,
    diaper_to_doc,
    feeding_from_doc,
    feeding_to_doc,
    growth_from_doc,
    growth_to_doc,
    milestone_from_doc,
    milestone_to_doc,
    sleep_from_doc,
    sleep_to_doc,
)
from src.api.state import get_state


def _baby_exists(request: Request, baby_id: str) -> bool:
    cols = get_state(request.app).mongo.collections()
    return cols.babies.find_one({"id": baby_id}, projection={"_id": 0, "id": 1}) is not None


# PUBLIC_INTERFACE
def create_baby(request: Request, payload: BabyCreate) -> Baby:
    """Register a baby for a user."""
    cols = get_state(request.app).mongo.collections()
    doc = baby_to_doc(str(uuid4()), payload, utc_now())
    cols.babies.insert_one(dict(doc))
    return baby_from_doc(doc)


# PUBLIC_INTERFACE
def list_babies(request: Request, user_id: str) -> List[Baby]:
    """Return a user's babies, oldest registration first."""
    cols = get_state(request.app).mongo.collections()
    docs = list(cols.babies.find({"user_id": user_id}, projection={"_id": 0}).sort("created_at", 1))
    return [baby_from_doc(d) for d in docs]


# PUBLIC_INTERFACE
def get_baby(request: Request, baby_id: str) -> Optional[Baby]:
    """Get a baby by id. Returns None if not found."""
    cols = get_state(request.app).mongo.collections()
    doc = cols.babies.find_one({"id": baby_id}, projection={"_id": 0})
    return baby_from_doc(doc) if doc else None


# PUBLIC_INTERFACE
def update_baby(request: Request, baby_id: str, payload: BabyUpdate) -> Optional[Baby]:
    """Apply a partial update to a baby. Returns None if not found."""
    cols = get_state(request.app).mongo.collections()
    existing = cols.babies.find_one({"id": baby_id}, projection={"_id": 0})
    if not existing:
        return None

    updated = dict(existing)
    if payload.name is not None:
        updated["name"] = payload.name.strip()
    if payload.birth_date is not None:
        updated["birth_date"] = as_utc_datetime(payload.birth_date)
    if payload.gender is not None:
        updated["gender"] = payload.gender
    if payload.weight_kg is not None:
        updated["weight"] = payload.weight_kg
    if payload.height_cm is not None:
        updated["height"] = payload.height_cm
    if payload.photo_url is not None:
        updated["photo_url"] = payload.photo_url

    cols.babies.replace_one({"id": baby_id}, updated, upsert=False)
    return baby_from_doc(updated)


# PUBLIC_INTERFACE
def delete_baby(request: Request, baby_id: str) -> bool:
    """
    Delete a baby and every care record logged for it.

    Returns False if the baby does not exist. Notifications already sent stay in the feed.
    """
    cols = get_state(request.app).mongo.collections()
    res = cols.babies.delete_one({"id": baby_id})
    if res.deleted_count == 0:
        return False
    for records in (cols.feedings, cols.sleeps, cols.growth_records, cols.diapers, cols.milestones):
        records.delete_many({"baby_id": baby_id})
    return True


# PUBLIC_INTERFACE
def add_feeding(request: Request, baby_id: str, payload: FeedingCreate) -> Optional[Feeding]:
    """Log a feeding. Returns None if the baby does not exist."""
    if not _baby_exists(request, baby_id):
        return None
    cols = get_state(request.app).mongo.collections()
    doc = feeding_to_doc(str(uuid4()), baby_id, payload)
    cols.feedings.insert_one(dict(doc))
    return feeding_from_doc(doc)


# PUBLIC_INTERFACE
def list_feedings(request: Request, baby_id: str, limit: Optional[int] = None) -> List[Feeding]:
    """Feedings for a baby, newest first."""
    cols = get_state(request.app).mongo.collections()
    cursor = cols.feedings.find({"baby_id": baby_id}, projection={"_id": 0}).sort("start_time", -1)
    if limit:
        cursor = cursor.limit(int(limit))
    return [feeding_from_doc(d) for d in cursor]


# PUBLIC_INTERFACE
def add_sleep(request: Request, baby_id: str, payload: SleepCreate) -> Optional[Sleep]:
    """Log a sleep. Returns None if the baby does not exist."""
    if not _baby_exists(request, baby_id):
        return None
    cols = get_state(request.app).mongo.collections()
    doc = sleep_to_doc(str(uuid4()), baby_id, payload)
    cols.sleeps.insert_one(dict(doc))
    return sleep_from_doc(doc)


# PUBLIC_INTERFACE
def list_sleeps(request: Request, baby_id: str, limit: Optional[int] = None) -> List[Sleep]:
    """Sleeps for a baby, newest first."""
    cols = get_state(request.app).mongo.collections()
    cursor = cols.sleeps.find({"baby_id": baby_id}, projection={"_id": 0}).sort("start_time", -1)
    if limit:
        cursor = cursor.limit(int(limit))
    return [sleep_from_doc(d) for d in cursor]


# PUBLIC_INTERFACE
def add_growth(request: Request, baby_id: str, payload: GrowthCreate) -> Optional[GrowthRecord]:
    """Record a growth measurement. Returns None if the baby does not exist."""
    if not _baby_exists(request, baby_id):
        return None
    cols = get_state(request.app).mongo.collections()
    doc = growth_to_doc(str(uuid4()), baby_id, payload)
    cols.growth_records.insert_one(dict(doc))
    return growth_from_doc(doc)


# PUBLIC_INTERFACE
def list_growth(request: Request, baby_id: str, limit: Optional[int] = None) -> List[GrowthRecord]:
    """Growth samples for a baby, most recent measurement first."""
    cols = get_state(request.app).mongo.collections()
    cursor = cols.growth_records.find({"baby_id": baby_id}, projection={"_id": 0}).sort("date", -1)
    if limit:
        cursor = cursor.limit(int(limit))
    return [growth_from_doc(d) for d in cursor]


# PUBLIC_INTERFACE
def add_diaper(request: Request, baby_id: str, payload: DiaperCreate) -> Optional[Diaper]:
    """Log a diaper change. Returns None if the baby does not exist."""
    if not _baby_exists(request, baby_id):
        return None
    cols = get_state(request.app).mongo.collections()
    doc = diaper_to_doc(str(uuid4()), baby_id, payload)
    cols.diapers.insert_one(dict(doc))
    return diaper_from_doc(doc)


# PUBLIC_INTERFACE
def list_diapers(request: Request, baby_id: str, limit: Optional[int] = None) -> List[Diaper]:
    """Diaper changes for a baby, newest first."""
    cols = get_state(request.app).mongo.collections()
    cursor = cols.diapers.find({"baby_id": baby_id}, projection={"_id": 0}).sort("time", -1)
    if limit:
        cursor = cursor.limit(int(limit))
    return [diaper_from_doc(d) for d in cursor]


# PUBLIC_INTERFACE
def add_milestone(request: Request, baby_id: str, payload: MilestoneCreate) -> Optional[Milestone]:
    """Record a milestone. Returns None if the baby does not exist."""
    if not _baby_exists(request, baby_id):
        return None
    cols = get_state(request.app).mongo.collections()
    doc = milestone_to_doc(str(uuid4()), baby_id, payload)
    cols.milestones.insert_one(dict(doc))
    return milestone_from_doc(doc)


# PUBLIC_INTERFACE
def list_milestones(request: Request, baby_id: str) -> List[Milestone]:
    """Milestones for a baby, most recent first."""
    cols = get_state(request.app).mongo.collections()
    docs = cols.milestones.find({"baby_id": baby_id}, projection={"_id": 0}).sort("date", -1)
    return [milestone_from_doc(d) for d in docs]


# PUBLIC_INTERFACE
def delete_milestone(request: Request, baby_id: str, milestone_id: str) -> bool:
    """Delete one of a baby's milestones. Returns False if not found."""
    cols = get_state(request.app).mongo.collections()
    res = cols.milestones.delete_one({"id": milestone_id, "baby_id": baby_id})
    return res.deleted_count > 0
