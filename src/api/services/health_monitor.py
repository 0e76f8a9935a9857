from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from uuid import uuid4

from pymongo.errors import PyMongoError

from src.api.i18n import DEFAULT_LANGUAGE, translate
from src.api.schemas.care import Feeding, GrowthRecord, Sleep
from src.api.schemas.common import utc_now
from src.api.schemas.health_monitor import AlertSeverity, AlertSummary, HealthAlert, HealthMonitorResponse
from src.api.schemas.notifications import HEALTH_ALERT_TYPE
from src.api.services.records import feeding_from_doc, growth_from_doc, notification_to_doc, sleep_from_doc
from src.api.state import AppState

logger = logging.getLogger(__name__)

# Fixed policy thresholds.
WINDOW_DAYS = 7
GROWTH_SAMPLE_LIMIT = 5
FEEDING_GAP_HOURS = 4.0
MIN_FEEDINGS_PER_DAY = 6.0
MIN_SLEEP_HOURS_PER_DAY = 12.0
MAX_AWAKE_HOURS = 3.0
MIN_WEEKLY_GAIN_KG = 0.15

NOTIFICATION_TITLE_PREFIX = "Health Alert: "


class HealthMonitorError(Exception):
    """Base class for evaluation failures surfaced to the caller."""


class HealthMonitorValidationError(HealthMonitorError):
    """The request is missing required input; nothing was read."""


class CollaboratorReadError(HealthMonitorError):
    """A care-record read failed; the evaluation is aborted as a whole."""


class CollaboratorWriteError(HealthMonitorError):
    """A notification write failed. Logged, never surfaced to the caller."""


@dataclass(frozen=True)
class CareSnapshot:
    """Time-windowed view of a baby's records. Fetched newest first; rules do not rely on list order."""

    feedings: List[Feeding] = field(default_factory=list)
    sleeps: List[Sleep] = field(default_factory=list)
    growth: List[GrowthRecord] = field(default_factory=list)


async def _run_in_thread(func, *args, **kwargs):
    """Run blocking pymongo calls in a worker thread."""
    return await asyncio.to_thread(func, *args, **kwargs)


async def _fetch_feedings(state: AppState, baby_id: str, since: datetime) -> List[Feeding]:
    cols = state.mongo.collections()
    docs = await _run_in_thread(
        lambda: list(
            cols.feedings.find(
                {"baby_id": baby_id, "start_time": {"$gte": since}},
                projection={"_id": 0},
            ).sort("start_time", -1)
        )
    )
    return [feeding_from_doc(d) for d in docs]


async def _fetch_sleeps(state: AppState, baby_id: str, since: datetime) -> List[Sleep]:
    cols = state.mongo.collections()
    docs = await _run_in_thread(
        lambda: list(
            cols.sleeps.find(
                {"baby_id": baby_id, "start_time": {"$gte": since}},
                projection={"_id": 0},
            ).sort("start_time", -1)
        )
    )
    return [sleep_from_doc(d) for d in docs]


async def _fetch_growth(state: AppState, baby_id: str) -> List[GrowthRecord]:
    cols = state.mongo.collections()
    docs = await _run_in_thread(
        lambda: list(
            cols.growth_records.find({"baby_id": baby_id}, projection={"_id": 0})
            .sort("date", -1)
            .limit(GROWTH_SAMPLE_LIMIT)
        )
    )
    return [growth_from_doc(d) for d in docs]


# PUBLIC_INTERFACE
async def fetch_snapshot(state: AppState, baby_id: str, now: datetime) -> CareSnapshot:
    """
    Read the evaluation inputs for a baby.

    The three reads are independent and run concurrently. Any failure (storage error
    or a record that cannot be converted) fails the whole snapshot.
    """
    since = now - timedelta(days=WINDOW_DAYS)
    try:
        feedings, sleeps, growth = await asyncio.gather(
            _fetch_feedings(state, baby_id, since),
            _fetch_sleeps(state, baby_id, since),
            _fetch_growth(state, baby_id),
        )
    except (PyMongoError, KeyError, ValueError, TypeError) as exc:
        logger.exception("Health data read failed for babyId=%s", baby_id)
        raise CollaboratorReadError("Error fetching health data") from exc
    return CareSnapshot(feedings=feedings, sleeps=sleeps, growth=growth)


def _hours_since(now: datetime, then: datetime) -> float:
    return (now - then).total_seconds() / 3600.0


def _alert(
    category: str,
    severity: AlertSeverity,
    key: str,
    language: str,
    **params: object,
) -> HealthAlert:
    return HealthAlert(
        category=category,
        severity=severity,
        title=translate(f"alerts.{key}.title", language),
        message=translate(f"alerts.{key}.message", language, **params),
        recommendedAction=translate(f"alerts.{key}.action", language),
    )


def _feeding_alerts(feedings: List[Feeding], now: datetime, language: str) -> List[HealthAlert]:
    if not feedings:
        return []
    alerts: List[HealthAlert] = []

    latest = max(f.start_time for f in feedings)
    hours = _hours_since(now, latest)
    if hours > FEEDING_GAP_HOURS:
        alerts.append(_alert("feeding", AlertSeverity.high, "feeding_gap", language, hours=math.floor(hours)))

    per_day = len(feedings) / WINDOW_DAYS
    if per_day < MIN_FEEDINGS_PER_DAY:
        alerts.append(
            _alert("feeding", AlertSeverity.medium, "feeding_frequency", language, average=f"{per_day:.1f}")
        )
    return alerts


def _sleep_alerts(sleeps: List[Sleep], now: datetime, language: str) -> List[HealthAlert]:
    if not sleeps:
        return []
    alerts: List[HealthAlert] = []

    total_minutes = sum(s.duration_minutes or 0.0 for s in sleeps)
    hours_per_day = total_minutes / WINDOW_DAYS / 60.0
    if hours_per_day < MIN_SLEEP_HOURS_PER_DAY:
        alerts.append(
            _alert("sleep", AlertSeverity.medium, "sleep_volume", language, average=f"{hours_per_day:.1f}")
        )

    # Elapsed time is measured from the start of the latest sleep, and only once it has ended.
    latest = max(sleeps, key=lambda s: s.start_time)
    awake_hours = _hours_since(now, latest.start_time)
    if latest.end_time is not None and awake_hours > MAX_AWAKE_HOURS:
        alerts.append(_alert("sleep", AlertSeverity.low, "wakefulness", language, hours=math.floor(awake_hours)))
    return alerts


def _growth_alerts(growth: List[GrowthRecord], language: str) -> List[HealthAlert]:
    # Order comes from the measurement dates, as in the feeding and sleep rules.
    weighted = [g for g in sorted(growth, key=lambda g: g.date, reverse=True) if g.weight_kg is not None]
    if len(weighted) < 2:
        return []
    latest, previous = weighted[0], weighted[1]

    days_between = abs((latest.date - previous.date).total_seconds()) / 86400.0
    if days_between == 0:
        return []

    change = latest.weight_kg - previous.weight_kg
    weekly_rate = change / days_between * 7
    if weekly_rate < 0:
        return [_alert("growth", AlertSeverity.high, "weight_loss", language, kg=f"{abs(change):.2f}")]
    if weekly_rate < MIN_WEEKLY_GAIN_KG:
        return [
            _alert("growth", AlertSeverity.medium, "slow_weight_gain", language, grams=f"{weekly_rate * 1000:.0f}")
        ]
    return []


# PUBLIC_INTERFACE
def evaluate_alerts(snapshot: CareSnapshot, now: datetime, language: str = DEFAULT_LANGUAGE) -> List[HealthAlert]:
    """
    Apply every rule to a snapshot.

    Rules are independent; results keep insertion order (feeding, sleep, growth).
    """
    alerts: List[HealthAlert] = []
    alerts.extend(_feeding_alerts(snapshot.feedings, now, language))
    alerts.extend(_sleep_alerts(snapshot.sleeps, now, language))
    alerts.extend(_growth_alerts(snapshot.growth, language))
    return alerts


# PUBLIC_INTERFACE
def summarize(alerts: List[HealthAlert]) -> AlertSummary:
    """Count alerts by severity."""
    return AlertSummary(
        totalAlerts=len(alerts),
        highSeverity=sum(1 for a in alerts if a.severity == AlertSeverity.high),
        mediumSeverity=sum(1 for a in alerts if a.severity == AlertSeverity.medium),
        lowSeverity=sum(1 for a in alerts if a.severity == AlertSeverity.low),
    )


async def _insert_notification(state: AppState, doc: dict) -> None:
    cols = state.mongo.collections()
    try:
        await _run_in_thread(cols.notifications.insert_one, doc)
    except PyMongoError as exc:
        raise CollaboratorWriteError(f"notification insert failed for userId={doc.get('user_id')}") from exc


async def _owning_user_id(state: AppState, baby_id: str) -> Optional[str]:
    cols = state.mongo.collections()
    doc = await _run_in_thread(cols.babies.find_one, {"id": baby_id}, projection={"_id": 0, "user_id": 1})
    return (doc or {}).get("user_id")


async def _notify_high_severity(state: AppState, baby_id: str, alerts: List[HealthAlert], now: datetime) -> int:
    """Write one notification per high-severity alert. Returns the number written."""
    high = [a for a in alerts if a.severity == AlertSeverity.high]
    if not high:
        return 0

    try:
        user_id = await _owning_user_id(state, baby_id)
    except PyMongoError:
        logger.exception("Owner lookup failed for babyId=%s; skipping health notifications", baby_id)
        return 0
    if not user_id:
        logger.warning("No owning user for babyId=%s; skipping health notifications", baby_id)
        return 0

    written = 0
    for alert in high:
        doc = notification_to_doc(
            str(uuid4()),
            user_id,
            f"{NOTIFICATION_TITLE_PREFIX}{alert.title}",
            alert.message,
            HEALTH_ALERT_TYPE,
            {"babyId": baby_id, "alertType": alert.category},
            now,
        )
        try:
            await _insert_notification(state, doc)
            written += 1
        except CollaboratorWriteError:
            logger.exception("Health notification write failed for babyId=%s alert=%s", baby_id, alert.title)
    return written


# PUBLIC_INTERFACE
async def run_health_monitor(
    state: AppState,
    baby_id: Optional[str],
    *,
    language: str = DEFAULT_LANGUAGE,
    now: Optional[datetime] = None,
    notify: bool = True,
) -> HealthMonitorResponse:
    """
    Evaluate a baby's recent care history and return alerts plus a summary.

    - Missing baby id raises HealthMonitorValidationError before any read.
    - A failed read raises CollaboratorReadError (no partial result).
    - High-severity alerts are forwarded to the owner's notification feed when notify=True;
      write failures are logged and do not affect the result.
    """
    if baby_id is None or not str(baby_id).strip():
        raise HealthMonitorValidationError("Baby ID is required")
    baby_id = str(baby_id).strip()
    now = now or utc_now()

    snapshot = await fetch_snapshot(state, baby_id, now)
    alerts = evaluate_alerts(snapshot, now, language)

    if notify:
        await _notify_high_severity(state, baby_id, alerts, now)

    return HealthMonitorResponse(success=True, alerts=alerts, summary=summarize(alerts))


async def _list_baby_ids(state: AppState) -> List[str]:
    cols = state.mongo.collections()
    docs = await _run_in_thread(lambda: list(cols.babies.find({}, projection={"_id": 0, "id": 1})))
    return [d["id"] for d in docs if d.get("id")]


async def _sweep_tick(state: AppState) -> None:
    now = utc_now()
    for baby_id in await _list_baby_ids(state):
        try:
            result = await run_health_monitor(state, baby_id, now=now)
            if result.summary.total_alerts:
                logger.info(
                    "Health sweep babyId=%s alerts=%s high=%s",
                    baby_id,
                    result.summary.total_alerts,
                    result.summary.high_severity,
                )
        except HealthMonitorError:
            logger.exception("Health sweep failed for babyId=%s", baby_id)


# PUBLIC_INTERFACE
async def health_monitor_loop(state: AppState, shutdown_event: asyncio.Event) -> None:
    """
    Background loop that runs the evaluation for every baby at a fixed cadence.

    Each tick is the same stateless call the HTTP endpoint makes, including
    notification writes. Repeated high-severity conditions notify again.
    """
    interval = int(state.config.health_monitor_interval_sec)
    if interval <= 0:
        logger.info("Health monitor sweep disabled")
        return
    logger.info("Health monitor sweep started (interval=%ss)", interval)

    while not shutdown_event.is_set():
        tick_started = datetime.now(timezone.utc)
        try:
            await _sweep_tick(state)
        except Exception:
            logger.exception("Health monitor sweep tick failed")

        elapsed = (datetime.now(timezone.utc) - tick_started).total_seconds()
        sleep_for = max(0.1, interval - elapsed)
        try:
            await asyncio.wait_for(shutdown_event.wait(), timeout=sleep_for)
        except asyncio.TimeoutError:
            pass

    logger.info("Health monitor sweep stopped")
