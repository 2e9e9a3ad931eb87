"""
Trend engine: regression lines and progressive-overload classification.

Two independent algorithms:

1. **Duration trend**: ordinary least squares over ``(day offset,
   minutes)``.  ``x`` is measured in days from the first point rather
   than raw epoch seconds, which keeps the normal equations well
   conditioned.  Fewer than two points give a flat line.

2. **Progressive overload**: week-over-week percentage change of total
   volume, classified against a fixed ±2.5 % band:

       progressing   pct >= +2.5
       regressing    pct <= -2.5
       maintaining   otherwise

   A zero baseline is guarded (100 % if the new week has volume, else
   0 %), so no ``NaN`` or ``inf`` ever reaches the caller.

The same band classifies per-exercise strength progression built from
per-session best estimated 1RM.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from training_engine.engine.records import estimate_one_rep_max
from training_engine.engine.stats import linear_regression, mean, percentage_change
from training_engine.schemas.trend import (
    ExerciseProgression,
    ProgressionPoint,
    TrendLine,
    TrendPoint,
    WeeklyChange,
)
from training_engine.schemas.workout import WorkoutRecord

logger = logging.getLogger(__name__)

# ======================================================================
# Constants
# ======================================================================

OVERLOAD_BAND_PERCENT = 2.5

# Sessions needed before a strength direction is reported.
MIN_PROGRESSION_SESSIONS = 4

_SECONDS_PER_DAY = 86_400.0


# ======================================================================
# Duration trend
# ======================================================================


def fit_trend(points: Sequence[TrendPoint]) -> TrendLine:
    """Fit a least-squares line through ``points``.

    ``x`` is converted to fractional days since ``points[0].x``, so
    ``intercept`` is the fitted value at the first point and ``slope`` is
    the change per day.
    """
    if not points:
        return TrendLine()
    origin = points[0].x
    xs = [(p.x - origin).total_seconds() / _SECONDS_PER_DAY for p in points]
    ys = [p.y for p in points]
    slope, intercept, r2 = linear_regression(xs, ys)
    return TrendLine(slope=slope, intercept=intercept, r2=r2)


def duration_points(records: Iterable[WorkoutRecord]) -> list[TrendPoint]:
    """Duration observations in chronological order.

    Records without a duration are skipped, not read as zero.
    """
    points = [TrendPoint(x=r.timestamp, y=r.duration_minutes) for r in records if r.duration_minutes is not None]
    points.sort(key=lambda p: p.x)
    return points


# ======================================================================
# Progressive overload
# ======================================================================


def overload_status(pct: float) -> str:
    """Classify a week-over-week change against the fixed band."""
    if pct >= OVERLOAD_BAND_PERCENT:
        return "progressing"
    if pct <= -OVERLOAD_BAND_PERCENT:
        return "regressing"
    return "maintaining"


def classify_overload(weekly_totals: Sequence[float], labels: Optional[Sequence[str]] = None, ) -> list[WeeklyChange]:
    """Compare each week's volume to the week before.

    Args:
        weekly_totals: Volume totals in chronological order.
        labels: Optional week ids aligned with ``weekly_totals``; the
            label of the *current* week is copied onto each change.

    Returns:
        ``len(weekly_totals) - 1`` changes (empty for fewer than 2 weeks).
    """
    if labels is not None and len(labels) != len(weekly_totals):
        raise ValueError("labels must align with weekly_totals")

    changes: list[WeeklyChange] = []
    for i in range(1, len(weekly_totals)):
        prev, curr = weekly_totals[i - 1], weekly_totals[i]
        pct = percentage_change(prev, curr)
        changes.append(WeeklyChange(label=labels[i] if labels is not None else None, previous=prev, current=curr,
                                    percentage=pct, status=overload_status(pct), ))
    return changes


# ======================================================================
# Strength progression
# ======================================================================


def _session_best_1rm(record: WorkoutRecord, exercise_id: str) -> Optional[float]:
    best: Optional[float] = None
    for entry in record.exercises:
        if entry.exercise_id != exercise_id:
            continue
        for s in entry.sets:
            if not s.completed:
                continue
            e1rm = estimate_one_rep_max(s.weight, s.reps)
            if e1rm is not None and (best is None or e1rm > best):
                best = e1rm
    return best


def exercise_progression(records: Iterable[WorkoutRecord], exercise_id: str) -> ExerciseProgression:
    """Strength direction for one exercise.

    Each session contributes its best estimated 1RM; the regression is
    over session index.  The slope is expressed as a percentage of the
    mean e1RM and classified with the overload band (``up`` / ``down`` /
    ``flat``).  Fewer than :data:`MIN_PROGRESSION_SESSIONS` sessions
    report ``insufficient_data``.
    """
    points: list[ProgressionPoint] = []
    for record in sorted(records, key=lambda r: r.timestamp):
        best = _session_best_1rm(record, exercise_id)
        if best is not None:
            points.append(ProgressionPoint(timestamp=record.timestamp, estimated_1rm=best))

    if len(points) < MIN_PROGRESSION_SESSIONS:
        return ExerciseProgression(exercise_id=exercise_id, direction="insufficient_data", points=points)

    ys = [p.estimated_1rm for p in points]
    slope, _, r2 = linear_regression(list(range(len(ys))), ys)
    avg = mean(ys)
    pct = slope / avg * 100.0 if avg > 0 else 0.0

    if pct > OVERLOAD_BAND_PERCENT:
        direction = "up"
    elif pct < -OVERLOAD_BAND_PERCENT:
        direction = "down"
    else:
        direction = "flat"

    logger.debug("Progression for %s: %s (%.2f%%, r2=%.2f)", exercise_id, direction, pct, r2)
    return ExerciseProgression(exercise_id=exercise_id, direction=direction, percentage=pct,
                               confidence=min(max(r2, 0.0), 1.0), points=points, )
