"""
PR detector: personal records found by replaying the log forward.

Per exercise, three running baselines are maintained while scanning:

- best **weight** seen at each distinct rep count,
- best **reps** seen at each distinct weight,
- best single-workout **volume** for the exercise.

A record fires only when a completed set *strictly* beats the baseline
for its key; ties are not records.  The first observation of a key only
establishes the baseline.  Baselines update immediately, so a better
set later in the same session can beat an earlier one.

Volume is evaluated per exercise per workout (all of that exercise's
entries in the workout summed) against the maximum over all *prior*
workouts.

Ordering is a precondition, not a courtesy: the detector does not sort,
and an out-of-order log raises :class:`InvalidInputError` rather than
silently producing wrong "previous" baselines.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Optional, Sequence

from training_engine.engine.aggregator import entry_volume
from training_engine.engine.errors import InvalidInputError
from training_engine.engine.stats import percentage_change
from training_engine.schemas.records import ExerciseBest, PersonalRecord, RecordKind
from training_engine.schemas.workout import WorkoutRecord

logger = logging.getLogger(__name__)

# Epley is unreliable beyond this many reps.
MAX_1RM_REPS = 15


# ======================================================================
# Helpers
# ======================================================================


def estimate_one_rep_max(weight: float, reps: int) -> Optional[float]:
    """Epley estimate ``weight × (1 + reps / 30)``.

    ``None`` for non-positive input or more than :data:`MAX_1RM_REPS`
    reps; a single rep is the weight itself.
    """
    if weight <= 0 or reps <= 0 or reps > MAX_1RM_REPS:
        return None
    if reps == 1:
        return float(weight)
    return weight * (1 + reps / 30)


def ensure_chronological(records: Sequence[WorkoutRecord]) -> None:
    """Raise :class:`InvalidInputError` unless timestamps are non-decreasing."""
    for i in range(1, len(records)):
        prev, curr = records[i - 1], records[i]
        try:
            out_of_order = curr.timestamp < prev.timestamp
        except TypeError as exc:
            raise InvalidInputError(
                f"Records {prev.id!r} and {curr.id!r} mix naive and aware timestamps") from exc
        if out_of_order:
            logger.warning("Rejected unsorted log: %s precedes %s", prev.id, curr.id)
            raise InvalidInputError(f"Records must be sorted by timestamp: {curr.id!r} ({curr.timestamp}) "
                                    f"comes after {prev.id!r} ({prev.timestamp})")


class _Baselines:
    """Running bests for one exercise."""

    def __init__(self) -> None:
        self.weight_by_reps: dict[int, float] = {}
        self.reps_by_weight: dict[float, int] = {}
        self.volume: Optional[float] = None


# ======================================================================
# Main entry point
# ======================================================================


def detect_prs(records: Sequence[WorkoutRecord]) -> list[PersonalRecord]:
    """Replay the log and return every personal-record event.

    Args:
        records: Workout log sorted by ascending timestamp.

    Returns:
        Records in emission order: per workout, set-level records (weight
        then reps, in set order) followed by volume records in order of
        the exercise's first appearance in that workout.

    Raises:
        InvalidInputError: if ``records`` is not chronologically sorted.
    """
    ensure_chronological(records)

    baselines: dict[str, _Baselines] = defaultdict(_Baselines)
    found: list[PersonalRecord] = []

    for record in records:
        session_volume: dict[str, float] = {}
        names: dict[str, str] = {}

        for entry in record.exercises:
            base = baselines[entry.exercise_id]
            names.setdefault(entry.exercise_id, entry.name)

            for s in entry.sets:
                if not s.completed:
                    continue

                prev_weight = base.weight_by_reps.get(s.reps)
                if prev_weight is None:
                    base.weight_by_reps[s.reps] = s.weight
                elif s.weight > prev_weight:
                    base.weight_by_reps[s.reps] = s.weight
                    found.append(PersonalRecord(exercise_id=entry.exercise_id, exercise_name=entry.name,
                                                kind=RecordKind.WEIGHT, value=s.weight, previous_value=prev_weight,
                                                percentage=percentage_change(prev_weight, s.weight),
                                                achieved_at=record.timestamp, workout_id=record.id, reps=s.reps, ))

                prev_reps = base.reps_by_weight.get(s.weight)
                if prev_reps is None:
                    base.reps_by_weight[s.weight] = s.reps
                elif s.reps > prev_reps:
                    base.reps_by_weight[s.weight] = s.reps
                    found.append(PersonalRecord(exercise_id=entry.exercise_id, exercise_name=entry.name,
                                                kind=RecordKind.REPS, value=float(s.reps),
                                                previous_value=float(prev_reps),
                                                percentage=percentage_change(prev_reps, s.reps),
                                                achieved_at=record.timestamp, workout_id=record.id,
                                                weight=s.weight, ))

            if any(s.completed for s in entry.sets):
                session_volume[entry.exercise_id] = (session_volume.get(entry.exercise_id, 0.0)
                                                     + entry_volume(entry))

        for exercise_id, volume in session_volume.items():
            base = baselines[exercise_id]
            if base.volume is None:
                base.volume = volume
            elif volume > base.volume:
                found.append(PersonalRecord(exercise_id=exercise_id, exercise_name=names[exercise_id],
                                            kind=RecordKind.VOLUME, value=volume, previous_value=base.volume,
                                            percentage=percentage_change(base.volume, volume),
                                            achieved_at=record.timestamp, workout_id=record.id, ))
                base.volume = volume

    logger.debug("Detected %d personal records across %d workouts", len(found), len(records))
    return found


# ======================================================================
# All-time bests
# ======================================================================


def best_lifts(records: Sequence[WorkoutRecord]) -> list[ExerciseBest]:
    """Current all-time bests per exercise, sorted by exercise id.

    The heaviest set keeps the earliest occurrence on ties, which makes
    the result independent of ordering among equal sets.
    """
    ensure_chronological(records)

    bests: dict[str, ExerciseBest] = {}
    for record in records:
        session_volume: dict[str, float] = {}
        for entry in record.exercises:
            completed = [s for s in entry.sets if s.completed]
            if not completed:
                continue
            session_volume[entry.exercise_id] = session_volume.get(entry.exercise_id, 0.0) + entry_volume(entry)

            top = max(completed, key=lambda s: (s.weight, s.reps))
            e1rms = [v for v in (estimate_one_rep_max(s.weight, s.reps) for s in completed) if v is not None]
            best_e1rm = max(e1rms) if e1rms else None

            current = bests.get(entry.exercise_id)
            if current is None:
                bests[entry.exercise_id] = ExerciseBest(exercise_id=entry.exercise_id, exercise_name=entry.name,
                                                        max_weight=top.weight, max_weight_reps=top.reps,
                                                        max_weight_at=record.timestamp,
                                                        estimated_1rm=best_e1rm, best_volume=0.0, sessions=0, )
                current = bests[entry.exercise_id]
            if (top.weight, top.reps) > (current.max_weight, current.max_weight_reps):
                current.max_weight = top.weight
                current.max_weight_reps = top.reps
                current.max_weight_at = record.timestamp
            if best_e1rm is not None and (current.estimated_1rm is None or best_e1rm > current.estimated_1rm):
                current.estimated_1rm = best_e1rm

        for exercise_id, volume in session_volume.items():
            current = bests[exercise_id]
            current.sessions += 1
            current.best_volume = max(current.best_volume, volume)

    return [bests[k] for k in sorted(bests)]
