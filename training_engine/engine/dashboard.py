"""
Dashboard: runs every component over one snapshot.

Data flow::

    log ──► aggregator ──► heatmap
     │           └───────► overload classification
     ├──► duration trend
     ├──► PR detector / best lifts
     ├──► log streaks
     └──► last-trained map ──► recovery
    schedule ──► adherence & streaks
             └─► week analysis / rest-day suggestion

The engine keeps no state between calls.  Hosts that cache results key
them by :func:`snapshot_fingerprint`, which covers the log, the schedule
and every call parameter the snapshot depends on (``now``, period,
window, zone, configs, held achievements).  Identical keys always
produce an identical snapshot.
"""

from __future__ import annotations

import datetime
import hashlib
import json
import logging
from typing import Iterable, Optional, Sequence

from training_engine.core.config import settings
from training_engine.engine.adherence import compute_adherence, workout_streaks
from training_engine.engine.aggregator import aggregate, muscle_distribution, weekly_volume_totals
from training_engine.engine.dates import iso_week_id, local_date
from training_engine.engine.errors import InvalidInputError
from training_engine.engine.heatmap import DEFAULT_HEATMAP_CONFIG, HeatmapConfig, build_heatmap
from training_engine.engine.records import best_lifts, detect_prs
from training_engine.engine.recovery import (
    DEFAULT_RECOVERY_CONFIG,
    RecoveryConfig,
    analyze_week,
    recovery_overview,
    suggest_rest_day,
)
from training_engine.engine.trends import classify_overload, duration_points, fit_trend
from training_engine.schemas.aggregation import AggregationPeriod
from training_engine.schemas.dashboard import DashboardSnapshot
from training_engine.schemas.schedule import ScheduleWeek
from training_engine.schemas.workout import WorkoutRecord

logger = logging.getLogger(__name__)


def snapshot_fingerprint(records: Sequence[WorkoutRecord], weeks: Sequence[ScheduleWeek], *,
                         now: Optional[datetime.datetime] = None, period: Optional[AggregationPeriod] = None,
                         window: Optional[int] = None, tz: Optional[datetime.tzinfo] = None,
                         heatmap_config: Optional[HeatmapConfig] = None,
                         recovery_config: Optional[RecoveryConfig] = None,
                         previous_achievements: Iterable[str] = (), ) -> str:
    """SHA-256 over the canonical JSON of the inputs and call parameters.

    Missing configs hash as their defaults, so passing the default
    explicitly yields the same key as omitting it.
    """
    payload = {
        "records": [r.model_dump(mode="json") for r in records],
        "weeks": [w.model_dump(mode="json") for w in weeks],
        "now": now.isoformat() if now is not None else None,
        "period": period.model_dump(mode="json") if period is not None else None,
        "window": window,
        "tz": str(tz) if tz is not None else None,
        "heatmap_config": (heatmap_config or DEFAULT_HEATMAP_CONFIG).model_dump(mode="json"),
        "recovery_config": (recovery_config or DEFAULT_RECOVERY_CONFIG).model_dump(mode="json"),
        "previous_achievements": sorted(set(previous_achievements)),
    }
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


def build_dashboard(records: Iterable[WorkoutRecord], weeks: Iterable[ScheduleWeek], *, now: datetime.datetime,
                    period: Optional[AggregationPeriod] = None, window: Optional[int] = None,
                    tz: Optional[datetime.tzinfo] = None, heatmap_config: Optional[HeatmapConfig] = None,
                    recovery_config: Optional[RecoveryConfig] = None,
                    previous_achievements: Iterable[str] = (), ) -> DashboardSnapshot:
    """Compute every engine output for one log/schedule snapshot.

    Args:
        records: Workout log, any order; sorted here before PR detection.
        weeks: Schedule history.
        now: Reference instant for recovery, streaks and the current week.
        period: Display window (inclusive).  Defaults to the last
            ``settings.HEATMAP_GRID_DAYS`` days ending today.
        window: Adherence window in weeks (``settings.ADHERENCE_WEEKS_TO_TRACK``).
        tz: Zone used to derive local dates from aware timestamps.
        heatmap_config: Optional heatmap override.
        recovery_config: Optional recovery-table override.
        previous_achievements: Achievement ids already held by the user.

    Returns:
        :class:`DashboardSnapshot`.

    Raises:
        InvalidInputError: the log mixes naive and aware timestamps, or
            a component rejects its input.
    """
    try:
        log = sorted(records, key=lambda r: (r.timestamp, r.id))
    except TypeError as exc:
        raise InvalidInputError("Workout log mixes naive and aware timestamps") from exc
    schedule = sorted(weeks, key=lambda w: w.id)
    held = sorted(set(previous_achievements))
    today = local_date(now, tz)

    if period is None:
        period = AggregationPeriod(start=today - datetime.timedelta(days=settings.HEATMAP_GRID_DAYS - 1), end=today)
    if window is None:
        window = settings.ADHERENCE_WEEKS_TO_TRACK

    # Aggregation is half-open; widen by one day so the grid's last day has data.
    rollup = aggregate(log, AggregationPeriod(start=period.start, end=period.end + datetime.timedelta(days=1)), tz=tz)
    heatmap = build_heatmap(rollup.daily_volume, period, heatmap_config)

    in_period = [r for r in log if period.start <= local_date(r.timestamp, tz) <= period.end]
    duration_trend = fit_trend(duration_points(in_period))

    totals = weekly_volume_totals(log, tz=tz)
    weekly_changes = classify_overload(list(totals.values()), labels=list(totals.keys()))

    adherence = compute_adherence(schedule, as_of=today, window=window, previous_achievements=held)

    current_week = next((w for w in schedule if w.id == iso_week_id(today)), None)
    warnings = analyze_week(current_week) if current_week is not None else []
    suggestion = suggest_rest_day(current_week) if current_week is not None else None

    fingerprint = snapshot_fingerprint(log, schedule, now=now, period=period, window=window, tz=tz,
                                       heatmap_config=heatmap_config, recovery_config=recovery_config,
                                       previous_achievements=held, )

    snapshot = DashboardSnapshot(fingerprint=fingerprint, period=period, aggregate=rollup,
                                 heatmap=heatmap, muscle_distribution=muscle_distribution(in_period),
                                 duration_trend=duration_trend, weekly_changes=weekly_changes,
                                 personal_records=detect_prs(log), best_lifts=best_lifts(log), adherence=adherence,
                                 workout_streaks=workout_streaks(log, today, tz=tz),
                                 recovery=recovery_overview(log, now, recovery_config), schedule_warnings=warnings,
                                 rest_day_suggestion=suggestion, )

    logger.info("Dashboard built for %d workouts and %d schedule weeks (%s)", len(log), len(schedule),
                snapshot.fingerprint[:12], )
    return snapshot
