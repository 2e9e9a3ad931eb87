"""
Recovery advisor: per-muscle recovery status and schedule balance.

Model
-----
Each muscle group has a fixed recovery window ``T`` (hours).  Large
groups trained with heavy compound lifts need longer windows than small
isolation groups:

    legs / quadriceps / hamstrings / glutes / back   72h
    chest / shoulders                                48h
    biceps / triceps                                 36h
    calves / core / forearms                         24h

Unknown groups fall back to 48h.  Status from hours since last trained:

    recovered    hours >= T
    recovering   hours >= T / 2
    fatigued     otherwise

Schedule analysis is advisory only.  It flags a muscle group planned on
two consecutive days and a week with no rest day, and it suggests where
a rest day would best split the longest run of training days.
"""

from __future__ import annotations

import datetime
import logging
from typing import Iterable, Optional

from pydantic import BaseModel, Field, field_validator

from training_engine.engine.adherence import validate_week
from training_engine.engine.aggregator import last_trained_by_muscle
from training_engine.engine.dates import WEEKDAY_NAMES
from training_engine.schemas.recovery import RecoveryStatus, RestDaySuggestion, ScheduleWarning
from training_engine.schemas.schedule import ScheduleWeek
from training_engine.schemas.workout import WorkoutRecord

logger = logging.getLogger(__name__)

# ======================================================================
# Configuration
# ======================================================================

_DEFAULT_RECOVERY_HOURS: dict[str, float] = {
    "legs": 72.0,
    "quadriceps": 72.0,
    "hamstrings": 72.0,
    "glutes": 72.0,
    "back": 72.0,
    "chest": 48.0,
    "shoulders": 48.0,
    "biceps": 36.0,
    "triceps": 36.0,
    "calves": 24.0,
    "core": 24.0,
    "forearms": 24.0,
}

_FALLBACK_RECOVERY_HOURS = 48.0


class RecoveryConfig(BaseModel):
    """Recovery-window table, injected per call."""

    recovery_hours: dict[str, float] = Field(default_factory=lambda: dict(_DEFAULT_RECOVERY_HOURS))
    fallback_hours: float = Field(_FALLBACK_RECOVERY_HOURS, gt=0.0)

    @field_validator("recovery_hours")
    @classmethod
    def _lowercase_muscles(cls, table: dict[str, float]) -> dict[str, float]:
        normalised: dict[str, float] = {}
        for muscle, hours in table.items():
            if hours <= 0:
                raise ValueError(f"recovery hours for {muscle!r} must be positive, got {hours}")
            key = muscle.lower()
            if key in normalised and normalised[key] != hours:
                raise ValueError(f"conflicting recovery hours for {key!r}")
            normalised[key] = hours
        return normalised

    def threshold_for(self, muscle: str) -> float:
        return self.recovery_hours.get(muscle.lower(), self.fallback_hours)


DEFAULT_RECOVERY_CONFIG = RecoveryConfig()


# ======================================================================
# Status labelling
# ======================================================================


def _label_recovery(hours_since: float, threshold: float) -> str:
    if hours_since >= threshold:
        return "recovered"
    if hours_since >= threshold / 2:
        return "recovering"
    return "fatigued"


def recovery_status(muscle: str, last_trained_at: Optional[datetime.datetime], now: datetime.datetime,
                    config: Optional[RecoveryConfig] = None, ) -> RecoveryStatus:
    """Recovery state of one muscle group.

    A muscle never trained is ``recovered`` with ``hours_since=None``.
    A ``last_trained_at`` after ``now`` counts as just trained.
    """
    cfg = config or DEFAULT_RECOVERY_CONFIG
    threshold = cfg.threshold_for(muscle)

    if last_trained_at is None:
        return RecoveryStatus(muscle=muscle, hours_since=None, status="recovered", threshold_hours=threshold)

    hours_since = max(0.0, (now - last_trained_at).total_seconds() / 3600.0)
    return RecoveryStatus(muscle=muscle, hours_since=hours_since, status=_label_recovery(hours_since, threshold),
                          threshold_hours=threshold, )


def recovery_overview(records: Iterable[WorkoutRecord], now: datetime.datetime,
                      config: Optional[RecoveryConfig] = None,
                      muscles: Iterable[str] = (), ) -> list[RecoveryStatus]:
    """Recovery state of every trained muscle, plus any listed in ``muscles``.

    Sorted by muscle name.
    """
    last_trained = last_trained_by_muscle(records)
    names = sorted(set(last_trained) | set(muscles))
    return [recovery_status(m, last_trained.get(m), now, config) for m in names]


# ======================================================================
# Schedule analysis
# ======================================================================


def analyze_week(week: ScheduleWeek) -> list[ScheduleWarning]:
    """Advisory warnings for a planned week.

    Flags every muscle group planned on two consecutive days (Monday to
    Sunday, no wrap into the next week), then a week without a rest day.
    """
    validate_week(week)
    days = [week.days[name] for name in WEEKDAY_NAMES]
    warnings: list[ScheduleWarning] = []

    for i in range(len(days) - 1):
        today, tomorrow = days[i], days[i + 1]
        if today.is_rest_day or tomorrow.is_rest_day:
            continue
        for muscle in sorted(set(today.muscle_groups) & set(tomorrow.muscle_groups)):
            pair = [WEEKDAY_NAMES[i], WEEKDAY_NAMES[i + 1]]
            warnings.append(ScheduleWarning(kind="consecutive_muscle", days=pair, muscle=muscle,
                                            message=f"{muscle} is trained on consecutive days "
                                                    f"({pair[0]} and {pair[1]})", ))

    if all(not d.is_rest_day for d in days):
        warnings.append(ScheduleWarning(kind="no_rest_day", message="No rest day planned this week"))

    if warnings:
        logger.debug("Week %s has %d schedule warnings", week.id, len(warnings))
    return warnings


def suggest_rest_day(week: ScheduleWeek) -> Optional[RestDaySuggestion]:
    """Best place for a rest day, or ``None`` if no two training days are adjacent.

    Picks the longest run of consecutive training days (the later run on
    ties) and the day in it that splits the run most evenly.  Ties go to
    the later day.
    """
    validate_week(week)
    training = [not week.days[name].is_rest_day for name in WEEKDAY_NAMES]

    runs: list[tuple[int, int]] = []
    i = 0
    while i < len(training):
        if training[i]:
            start = i
            while i < len(training) and training[i]:
                i += 1
            runs.append((start, i - start))
        else:
            i += 1

    if not runs:
        return None
    start, length = max(runs, key=lambda r: (r[1], r[0]))
    if length < 2:
        return None

    end = start + length - 1
    best_index = max(range(start, end + 1), key=lambda p: (-abs((p - start) - (end - p)), p))
    left, right = best_index - start, end - best_index
    day = WEEKDAY_NAMES[best_index]
    return RestDaySuggestion(day=day, day_index=best_index, run_length=length,
                             reason=f"Resting on {day} splits the {length}-day run {WEEKDAY_NAMES[start]} "
                                    f"to {WEEKDAY_NAMES[end]} into {left} and {right} training days", )
