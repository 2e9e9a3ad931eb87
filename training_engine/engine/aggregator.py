"""
Aggregator: time-bucketed rollups over a flat workout log.

Every other component either consumes these buckets or the raw log, so
the rules here define what "volume" means across the engine:

    set volume   = weight × reps            (completed sets only)
    entry volume = Σ set volume

Key design choices
------------------

1. **Local-date buckets**: a record is bucketed by the calendar date it
   occurred on, not by its UTC instant.
2. **Half-open window**: ``[period.start, period.end)``.
3. **Incomplete sets** never add volume.  They are counted in
   ``daily_sets`` only when the caller passes ``include_incomplete``.
4. **Bodyweight sets** (weight 0) add zero volume unless the caller
   supplies a ``bodyweight`` substitute.  The engine never guesses one.
5. **Missing duration** is absent, not zero: such records simply do not
   contribute to ``daily_duration``.
6. **No rounding**: sums stay in the canonical unit at full precision.
"""

from __future__ import annotations

import datetime
import logging
from collections import defaultdict
from typing import Iterable, Optional

from training_engine.engine.dates import iso_week_id, local_date, shift_week_id
from training_engine.engine.errors import InvalidInputError
from training_engine.schemas.aggregation import AggregateResult, AggregationPeriod, MuscleShare
from training_engine.schemas.workout import ExerciseEntry, SetEntry, WorkoutRecord

logger = logging.getLogger(__name__)


# ======================================================================
# Volume primitives
# ======================================================================


def set_volume(set_entry: SetEntry, bodyweight: Optional[float] = None) -> float:
    """Volume of one set; zero if the set was not completed."""
    if not set_entry.completed:
        return 0.0
    weight = set_entry.weight
    if weight == 0 and bodyweight is not None:
        weight = bodyweight
    return weight * set_entry.reps


def entry_volume(entry: ExerciseEntry, bodyweight: Optional[float] = None) -> float:
    """Sum of completed-set volume for one exercise entry."""
    return sum(set_volume(s, bodyweight) for s in entry.sets)


def workout_volume(record: WorkoutRecord, bodyweight: Optional[float] = None) -> float:
    return sum(entry_volume(e, bodyweight) for e in record.exercises)


def _counted_sets(entry: ExerciseEntry, include_incomplete: bool) -> int:
    if include_incomplete:
        return len(entry.sets)
    return sum(1 for s in entry.sets if s.completed)


def _sorted(mapping: dict) -> dict:
    return {k: mapping[k] for k in sorted(mapping)}


# ======================================================================
# Main entry point
# ======================================================================


def aggregate(records: Iterable[WorkoutRecord], period: AggregationPeriod, *, include_incomplete: bool = False,
              bodyweight: Optional[float] = None, tz: Optional[datetime.tzinfo] = None, ) -> AggregateResult:
    """Build daily and per-exercise rollups for records in ``[start, end)``.

    Args:
        records: Workout log snapshot (any order).
        period: Calendar window; ``end`` is exclusive here.
        include_incomplete: Count incomplete sets in ``daily_sets`` (they
            still contribute zero volume).
        bodyweight: Substitute weight for zero-weight sets, if the caller
            has one.
        tz: Convert aware timestamps to this zone before taking the date.

    Returns:
        :class:`AggregateResult` with ascending keys in every map.
    """
    if period.end < period.start:
        raise InvalidInputError(f"Period end {period.end} is before start {period.start}")

    daily_volume: dict[datetime.date, float] = defaultdict(float)
    daily_sets: dict[datetime.date, int] = defaultdict(int)
    daily_workouts: dict[datetime.date, int] = defaultdict(int)
    daily_duration: dict[datetime.date, float] = defaultdict(float)
    per_exercise: dict[str, float] = defaultdict(float)
    per_muscle: dict[str, int] = defaultdict(int)
    workout_count = 0

    for record in records:
        day = local_date(record.timestamp, tz)
        if not period.start <= day < period.end:
            continue

        workout_count += 1
        daily_workouts[day] += 1
        # Touch the buckets so an empty workout still shows as a zero day.
        daily_volume[day] += 0.0
        daily_sets[day] += 0
        if record.duration_minutes is not None:
            daily_duration[day] += record.duration_minutes

        for entry in record.exercises:
            volume = entry_volume(entry, bodyweight)
            sets = _counted_sets(entry, include_incomplete)
            daily_volume[day] += volume
            daily_sets[day] += sets
            per_exercise[entry.exercise_id] += volume
            for muscle in entry.muscle_groups:
                per_muscle[muscle] += sets

    logger.debug("Aggregated %d workouts over %s..%s into %d day buckets", workout_count, period.start, period.end,
                 len(daily_volume), )

    return AggregateResult(daily_volume=_sorted(daily_volume), daily_sets=_sorted(daily_sets),
                           per_exercise_volume=_sorted(per_exercise), daily_workouts=_sorted(daily_workouts),
                           daily_duration=_sorted(daily_duration), per_muscle_sets=_sorted(per_muscle),
                           total_volume=sum(daily_volume.values()), total_sets=sum(daily_sets.values()),
                           workout_count=workout_count, )


# ======================================================================
# Derived rollups
# ======================================================================


def weekly_volume_totals(records: Iterable[WorkoutRecord], *, bodyweight: Optional[float] = None,
                         tz: Optional[datetime.tzinfo] = None, ) -> dict[str, float]:
    """Total completed volume per ISO week, in chronological order.

    Weeks between the first and last logged week that have no workouts
    are included with ``0.0`` so week-over-week changes stay aligned.
    """
    totals: dict[str, float] = defaultdict(float)
    days: list[datetime.date] = []
    for record in records:
        day = local_date(record.timestamp, tz)
        days.append(day)
        totals[iso_week_id(day)] += workout_volume(record, bodyweight)

    if not days:
        return {}

    result: dict[str, float] = {}
    week_id = iso_week_id(min(days))
    last = iso_week_id(max(days))
    while True:
        result[week_id] = totals.get(week_id, 0.0)
        if week_id == last:
            return result
        week_id = shift_week_id(week_id, 1)


def last_trained_by_muscle(records: Iterable[WorkoutRecord]) -> dict[str, datetime.datetime]:
    """Latest workout timestamp that trained each muscle group.

    Only entries with at least one completed set count as training.
    """
    latest: dict[str, datetime.datetime] = {}
    for record in records:
        for entry in record.exercises:
            if not any(s.completed for s in entry.sets):
                continue
            for muscle in entry.muscle_groups:
                seen = latest.get(muscle)
                if seen is None or record.timestamp > seen:
                    latest[muscle] = record.timestamp
    return _sorted(latest)


def muscle_distribution(records: Iterable[WorkoutRecord]) -> list[MuscleShare]:
    """Completed sets per muscle group, largest share first.

    Ties are broken by muscle name so the order is stable.
    """
    counts: dict[str, int] = defaultdict(int)
    for record in records:
        for entry in record.exercises:
            completed = sum(1 for s in entry.sets if s.completed)
            for muscle in entry.muscle_groups:
                counts[muscle] += completed

    total = sum(counts.values())
    shares = [MuscleShare(muscle=m, sets=n, percentage=(n / total * 100.0) if total else 0.0)
              for m, n in counts.items()]
    shares.sort(key=lambda s: (-s.sets, s.muscle))
    return shares
