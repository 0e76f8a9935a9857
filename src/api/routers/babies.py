from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Path, Query, Request, status

from src.api.schemas.care import (
    Baby,
    BabyCreate,
    BabyListResponse,
    BabyUpdate,
    Diaper,
    DiaperCreate,
    DiaperListResponse,
    Feeding,
    FeedingCreate,
    FeedingListResponse,
    GrowthCreate,
    GrowthListResponse,
    GrowthRecord,
    Milestone,
    MilestoneCreate,
    MilestoneListResponse,
    Sleep,
    SleepCreate,
    SleepListResponse,
)
from src.api.schemas.common import ErrorResponse
from src.api.services import care_service
from src.api.services.records import as_utc_datetime

router = APIRouter(prefix="/api/babies", tags=["Babies"])


@router.post(
    "",
    response_model=Baby,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Register baby",
    description="Register a baby under the owning user.",
    operation_id="create_baby",
)
def create_baby(request: Request, payload: BabyCreate) -> Baby:
    """Register a baby."""
    if not payload.name.strip():
        raise HTTPException(status_code=400, detail="name must not be empty")
    if not payload.user_id.strip():
        raise HTTPException(status_code=400, detail="userId must not be empty")
    return care_service.create_baby(request, payload)


@router.get(
    "",
    response_model=BabyListResponse,
    summary="List babies",
    description="List the babies owned by a user, oldest registration first.",
    operation_id="list_babies",
)
def list_babies(
    request: Request,
    user_id: str = Query(..., alias="userId", description="Owning user id."),
) -> BabyListResponse:
    """List a user's babies."""
    items = care_service.list_babies(request, user_id)
    return BabyListResponse(items=items, total=len(items))


@router.get(
    "/{baby_id}",
    response_model=Baby,
    responses={404: {"model": ErrorResponse}},
    summary="Get baby",
    description="Fetch a single baby by id.",
    operation_id="get_baby",
)
def get_baby(request: Request, baby_id: str = Path(..., description="Baby identifier")) -> Baby:
    """Fetch a single baby."""
    baby = care_service.get_baby(request, baby_id)
    if not baby:
        raise HTTPException(status_code=404, detail="baby not found")
    return baby


@router.patch(
    "/{baby_id}",
    response_model=Baby,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Update baby",
    description="Partially update a baby's profile.",
    operation_id="update_baby",
)
def update_baby(
    request: Request,
    payload: BabyUpdate,
    baby_id: str = Path(..., description="Baby identifier"),
) -> Baby:
    """Update a baby."""
    if payload.name is not None and not payload.name.strip():
        raise HTTPException(status_code=400, detail="name must not be empty")
    baby = care_service.update_baby(request, baby_id, payload)
    if not baby:
        raise HTTPException(status_code=404, detail="baby not found")
    return baby


@router.delete(
    "/{baby_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Delete baby",
    description="Delete a baby together with its care logs.",
    operation_id="delete_baby",
)
def delete_baby(request: Request, baby_id: str = Path(..., description="Baby identifier")) -> None:
    """Delete a baby."""
    if not care_service.delete_baby(request, baby_id):
        raise HTTPException(status_code=404, detail="baby not found")
    return None


@router.post(
    "/{baby_id}/feedings",
    response_model=Feeding,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
    summary="Log feeding",
    description="Log a feeding for a baby.",
    operation_id="create_feeding",
)
def create_feeding(
    request: Request,
    payload: FeedingCreate,
    baby_id: str = Path(..., description="Baby identifier"),
) -> Feeding:
    """Log a feeding."""
    feeding = care_service.add_feeding(request, baby_id, payload)
    if not feeding:
        raise HTTPException(status_code=404, detail="baby not found")
    return feeding


@router.get(
    "/{baby_id}/feedings",
    response_model=FeedingListResponse,
    summary="List feedings",
    description="List a baby's feedings, newest first.",
    operation_id="list_feedings",
)
def list_feedings(
    request: Request,
    baby_id: str = Path(..., description="Baby identifier"),
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
) -> FeedingListResponse:
    """List feedings."""
    items = care_service.list_feedings(request, baby_id, limit=limit)
    return FeedingListResponse(items=items, total=len(items))


@router.post(
    "/{baby_id}/sleeps",
    response_model=Sleep,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Log sleep",
    description="Log a sleep for a baby. Duration is derived from start/end when omitted.",
    operation_id="create_sleep",
)
def create_sleep(
    request: Request,
    payload: SleepCreate,
    baby_id: str = Path(..., description="Baby identifier"),
) -> Sleep:
    """Log a sleep."""
    end = as_utc_datetime(payload.end_time)
    if end is not None and end < as_utc_datetime(payload.start_time):
        raise HTTPException(status_code=400, detail="endTime must not be before startTime")
    sleep = care_service.add_sleep(request, baby_id, payload)
    if not sleep:
        raise HTTPException(status_code=404, detail="baby not found")
    return sleep


@router.get(
    "/{baby_id}/sleeps",
    response_model=SleepListResponse,
    summary="List sleeps",
    description="List a baby's sleeps, newest first.",
    operation_id="list_sleeps",
)
def list_sleeps(
    request: Request,
    baby_id: str = Path(..., description="Baby identifier"),
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
) -> SleepListResponse:
    """List sleeps."""
    items = care_service.list_sleeps(request, baby_id, limit=limit)
    return SleepListResponse(items=items, total=len(items))


@router.post(
    "/{baby_id}/growth",
    response_model=GrowthRecord,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
    summary="Record growth",
    description="Record a growth measurement for a baby.",
    operation_id="create_growth_record",
)
def create_growth_record(
    request: Request,
    payload: GrowthCreate,
    baby_id: str = Path(..., description="Baby identifier"),
) -> GrowthRecord:
    """Record a growth measurement."""
    record = care_service.add_growth(request, baby_id, payload)
    if not record:
        raise HTTPException(status_code=404, detail="baby not found")
    return record


@router.get(
    "/{baby_id}/growth",
    response_model=GrowthListResponse,
    summary="List growth records",
    description="List a baby's growth measurements, most recent first.",
    operation_id="list_growth_records",
)
def list_growth_records(
    request: Request,
    baby_id: str = Path(..., description="Baby identifier"),
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
) -> GrowthListResponse:
    """List growth measurements."""
    items = care_service.list_growth(request, baby_id, limit=limit)
    return GrowthListResponse(items=items, total=len(items))


@router.post(
    "/{baby_id}/diapers",
    response_model=Diaper,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
    summary="Log diaper change",
    description="Log a wet, dirty or mixed diaper change for a baby.",
    operation_id="create_diaper",
)
def create_diaper(
    request: Request,
    payload: DiaperCreate,
    baby_id: str = Path(..., description="Baby identifier"),
) -> Diaper:
    """Log a diaper change."""
    diaper = care_service.add_diaper(request, baby_id, payload)
    if not diaper:
        raise HTTPException(status_code=404, detail="baby not found")
    return diaper


@router.get(
    "/{baby_id}/diapers",
    response_model=DiaperListResponse,
    summary="List diaper changes",
    description="List a baby's diaper changes, newest first.",
    operation_id="list_diapers",
)
def list_diapers(
    request: Request,
    baby_id: str = Path(..., description="Baby identifier"),
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
) -> DiaperListResponse:
    """List diaper changes."""
    items = care_service.list_diapers(request, baby_id, limit=limit)
    return DiaperListResponse(items=items, total=len(items))


@router.post(
    "/{baby_id}/milestones",
    response_model=Milestone,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Record milestone",
    operation_id="create_milestone",
)
def create_milestone(
    request: Request,
    payload: MilestoneCreate,
    baby_id: str = Path(..., description="Baby identifier"),
) -> Milestone:
    """Record a milestone."""
    if not payload.title.strip():
        raise HTTPException(status_code=400, detail="title must not be empty")
    milestone = care_service.add_milestone(request, baby_id, payload)
    if not milestone:
        raise HTTPException(status_code=404, detail="baby not found")
    return milestone


@router.get(
    "/{baby_id}/milestones",
    response_model=MilestoneListResponse,
    summary="List milestones",
    description="List a baby's milestones, most recent first.",
    operation_id="list_milestones",
)
def list_milestones(request: Request, baby_id: str = Path(..., description="Baby identifier")) -> MilestoneListResponse:
    """List milestones."""
    items = care_service.list_milestones(request, baby_id)
    return MilestoneListResponse(items=items, total=len(items))


@router.delete(
    "/{baby_id}/milestones/{milestone_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Delete milestone",
    operation_id="delete_milestone",
)
def delete_milestone(
    request: Request,
    baby_id: str = Path(..., description="Baby identifier"),
    milestone_id: str = Path(..., description="Milestone identifier"),
) -> None:
    """Delete a milestone."""
    if not care_service.delete_milestone(request, baby_id, milestone_id):
        raise HTTPException(status_code=404, detail="milestone not found")
    return None
