from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from src.api.i18n import DEFAULT_LANGUAGE
from src.api.schemas.health_monitor import HealthMonitorErrorResponse, HealthMonitorRequest, HealthMonitorResponse
from src.api.services.health_monitor import (
    CollaboratorReadError,
    HealthMonitorError,
    HealthMonitorValidationError,
    run_health_monitor,
)
from src.api.state import get_state

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/health-monitor", tags=["Health Monitor"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=HealthMonitorErrorResponse(error=message).model_dump())


@router.post(
    "",
    response_model=HealthMonitorResponse,
    responses={400: {"model": HealthMonitorErrorResponse}, 500: {"model": HealthMonitorErrorResponse}},
    summary="Evaluate health alerts",
    description=(
        "Inspect a baby's last 7 days of feedings and sleeps and the 5 most recent growth samples, "
        "and return severity-tagged alerts with a summary. High-severity alerts are also written "
        "to the owning user's notification feed."
    ),
    operation_id="evaluate_health_alerts",
)
async def evaluate_health_alerts(request: Request) -> Any:
    """Run the health-alert evaluation for one baby."""
    raw = await request.body()
    try:
        payload = await request.json() if raw.strip() else {}
        body = HealthMonitorRequest.model_validate(payload or {})
    except (ValueError, ValidationError):
        # Malformed JSON and wrong field types share the evaluator's error shape.
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body")
    language = body.language or DEFAULT_LANGUAGE

    try:
        return await run_health_monitor(get_state(request.app), body.baby_id, language=language)
    except HealthMonitorValidationError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except CollaboratorReadError as exc:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    except HealthMonitorError as exc:
        logger.exception("Health monitor failed")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
