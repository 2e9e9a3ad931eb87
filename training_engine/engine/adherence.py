"""
Adherence & streak tracker: how faithfully the weekly schedule is followed.

Adherence
---------
A week's percentage is ``completed / planned × 100`` where only days with
a template are planned.  Rest days never enter the denominator, and a
week with nothing planned is 100 % (nothing to fail).

Streak walk
-----------
The current streak walks backward one day at a time from ``as_of``:

- planned and completed → +1, keep walking
- planned and not completed → stop
- rest day → +1, keep walking

Rest days met *before* the first completed day of the walk are
provisional: they are credited once a completed day is reached, or when
history runs out, but a miss reached first makes the streak 0.  Resting
after skipping a session does not build a streak.

Walking also stops at the edge of available history (the oldest week,
or a gap between supplied weeks).  Running out of history is a
best-effort end, never a break.  The walk only starts when a supplied
week contains ``as_of``; otherwise the current streak is 0.

The best streak applies the same rules to every day of history and
keeps the maximum, in one forward pass.
"""

from __future__ import annotations

import datetime
import logging
from typing import Iterable, Optional, Sequence

from training_engine.engine.dates import WEEKDAY_NAMES, local_date, week_start_date
from training_engine.engine.errors import InvalidInputError
from training_engine.engine.stats import mean, std_dev
from training_engine.schemas.adherence import Achievement, AdherenceStats, WeekAdherence, WorkoutStreaks
from training_engine.schemas.schedule import ScheduleDay, ScheduleWeek
from training_engine.schemas.workout import WorkoutRecord

logger = logging.getLogger(__name__)

# ======================================================================
# Configuration
# ======================================================================

DEFAULT_WINDOW_WEEKS = 12

# Mean-percentage difference between the last 4 weeks and the 4 before.
_TREND_WEEKS = 4
_TREND_DELTA = 10.0

# (threshold, id, name): current streak, in days.
_STREAK_ACHIEVEMENTS: list[tuple[int, str, str]] = [(7, "on-fire", "On Fire"), (14, "unstoppable", "Unstoppable"),
                                                    (30, "legendary", "Legendary"), (60, "obsessed", "Obsessed"), ]

# (threshold, id, name): window adherence percentage.
_ADHERENCE_ACHIEVEMENTS: list[tuple[float, str, str]] = [(80.0, "consistent", "Consistent"),
                                                         (90.0, "dedicated", "Dedicated"),
                                                         (100.0, "perfect", "Perfect"), ]

_STREAK_MASTER_DAYS = 28


# ======================================================================
# Validation
# ======================================================================


def validate_week(week: ScheduleWeek) -> datetime.date:
    """Check a week's shape and return its Monday.

    Raises:
        InvalidInputError: malformed week id, or day slots other than
            exactly the seven weekday names.
    """
    start = week_start_date(week.id)
    slots = set(week.days)
    expected = set(WEEKDAY_NAMES)
    if slots != expected:
        missing = [d for d in WEEKDAY_NAMES if d not in slots]
        unknown = sorted(slots - expected)
        logger.warning("Rejected schedule week %s (missing=%s, unknown=%s)", week.id, missing, unknown)
        raise InvalidInputError(f"Schedule week {week.id!r} must have exactly the seven weekday slots; "
                                f"missing={missing}, unknown={unknown}")
    return start


def _ordered_weeks(weeks: Iterable[ScheduleWeek]) -> list[tuple[datetime.date, ScheduleWeek]]:
    dated: dict[datetime.date, ScheduleWeek] = {}
    for week in weeks:
        start = validate_week(week)
        if start in dated:
            raise InvalidInputError(f"Duplicate schedule week {week.id!r}")
        dated[start] = week
    return [(start, dated[start]) for start in sorted(dated)]


# ======================================================================
# Per-week adherence
# ======================================================================


def week_adherence(week: ScheduleWeek) -> WeekAdherence:
    """Completion summary for a single week."""
    start = validate_week(week)
    days = [week.days[name] for name in WEEKDAY_NAMES]
    planned = sum(1 for d in days if not d.is_rest_day)
    completed = sum(1 for d in days if not d.is_rest_day and d.completed)
    percentage = completed / planned * 100.0 if planned else 100.0
    return WeekAdherence(week_id=week.id, week_start=start, planned=planned, completed=completed,
                         missed=planned - completed, percentage=percentage, )


# ======================================================================
# Streaks
# ======================================================================


def _timeline(ordered: list[tuple[datetime.date, ScheduleWeek]],
              as_of: datetime.date, ) -> list[list[ScheduleDay]]:
    """Split schedule history up to ``as_of`` into gap-free day segments."""
    segments: list[list[ScheduleDay]] = []
    previous_start: Optional[datetime.date] = None
    for start, week in ordered:
        if start > as_of:
            break
        if previous_start is None or start - previous_start != datetime.timedelta(weeks=1):
            segments.append([])
        previous_start = start
        for offset, name in enumerate(WEEKDAY_NAMES):
            if start + datetime.timedelta(days=offset) > as_of:
                break
            segments[-1].append(week.days[name])
    return [s for s in segments if s]


def _walk_back(days: Sequence[ScheduleDay]) -> int:
    streak = 0
    provisional = 0
    seen_completed = False
    for day in reversed(days):
        if day.is_rest_day:
            if seen_completed:
                streak += 1
            else:
                provisional += 1
        elif day.completed:
            streak += provisional + 1
            provisional = 0
            seen_completed = True
        else:
            return streak
    return streak + provisional


def _best_run(days: Sequence[ScheduleDay]) -> int:
    best = 0
    run = 0
    has_completed = False
    after_miss = False
    for day in days:
        if day.is_missed:
            run = 0
            has_completed = False
            after_miss = True
            continue
        run += 1
        if not day.is_rest_day:
            has_completed = True
        if has_completed or not after_miss:
            best = max(best, run)
    return best


# ======================================================================
# Summary statistics
# ======================================================================


def _consistency_score(series: Sequence[WeekAdherence]) -> int:
    """100 minus twice the std-dev of weekly percentages (planned weeks only)."""
    percentages = [w.percentage for w in series if w.planned > 0]
    if not percentages:
        return 0
    return int(round(max(0.0, 100.0 - std_dev(percentages) * 2)))


def _adherence_trend(series: Sequence[WeekAdherence]) -> str:
    if len(series) < _TREND_WEEKS:
        return "stable"
    recent = series[-_TREND_WEEKS:]
    previous = series[-2 * _TREND_WEEKS:-_TREND_WEEKS]
    if not previous:
        return "stable"
    diff = mean([w.percentage for w in recent]) - mean([w.percentage for w in previous])
    if diff > _TREND_DELTA:
        return "improving"
    if diff < -_TREND_DELTA:
        return "declining"
    return "stable"


def _best_week(series: Sequence[WeekAdherence]) -> Optional[WeekAdherence]:
    best: Optional[WeekAdherence] = None
    for week in series:
        if week.planned == 0:
            continue
        if best is None or week.percentage > best.percentage:
            best = week
    return best


def _achievements(current_streak: int, best_streak: int, percentage: float, planned: int) -> list[Achievement]:
    unlocked: list[Achievement] = []
    for threshold, aid, name in _STREAK_ACHIEVEMENTS:
        if current_streak >= threshold:
            unlocked.append(Achievement(id=aid, name=name, description=f"{threshold} day streak"))
    if planned > 0:
        for threshold, aid, name in _ADHERENCE_ACHIEVEMENTS:
            if percentage >= threshold:
                unlocked.append(Achievement(id=aid, name=name, description=f"{threshold:g}%+ adherence"))
    if best_streak >= _STREAK_MASTER_DAYS:
        unlocked.append(Achievement(id="streak-master", name="Streak Master", description=f"Best: {best_streak} days"))
    return unlocked


# ======================================================================
# Main entry point
# ======================================================================


def compute_adherence(weeks: Iterable[ScheduleWeek], *, as_of: Optional[datetime.date] = None,
                      window: int = DEFAULT_WINDOW_WEEKS, previous_achievements: Iterable[str] = (), ) -> AdherenceStats:
    """Compute adherence, streaks and achievements.

    Args:
        weeks: Schedule history (any order, unique week ids).
        as_of: The "today" of the walk; days after it are ignored.
            Defaults to the Sunday of the latest supplied week.
        window: Number of most recent weeks in ``weekly_series`` and in
            the headline percentage.
        previous_achievements: Achievement ids the caller already holds;
            anything else unlocked now is reported in ``new_achievements``.

    Returns:
        :class:`AdherenceStats`.

    Raises:
        InvalidInputError: malformed or duplicate schedule weeks.
    """
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")

    ordered = _ordered_weeks(weeks)
    if as_of is None:
        as_of = ordered[-1][0] + datetime.timedelta(days=6) if ordered else datetime.date.min

    visible = [(start, week) for start, week in ordered if start <= as_of]
    series = [week_adherence(week) for _, week in visible[-window:]]

    planned = sum(w.planned for w in series)
    completed = sum(w.completed for w in series)
    percentage = completed / planned * 100.0 if planned else 100.0

    segments = _timeline(visible, as_of)
    # No schedule for the week of as_of: nothing reaches today.
    reaches_as_of = bool(visible) and visible[-1][0] + datetime.timedelta(days=6) >= as_of
    current_streak = _walk_back(segments[-1]) if segments and reaches_as_of else 0
    best_streak = max((_best_run(s) for s in segments), default=0)

    achievements = _achievements(current_streak, best_streak, percentage, planned)
    held = set(previous_achievements)
    new = [a for a in achievements if a.id not in held]

    logger.debug("Adherence over %d weeks: %.1f%%, streak %d (best %d)", len(series), percentage, current_streak,
                 best_streak, )

    return AdherenceStats(percentage=percentage, planned_days=planned, completed_days=completed,
                          current_streak=current_streak, best_streak=best_streak, weekly_series=series,
                          best_week=_best_week(series), consistency_score=_consistency_score(series),
                          trend=_adherence_trend(series), achievements=achievements, new_achievements=new, )


def workout_streaks(records: Iterable[WorkoutRecord], today: datetime.date, *,
                    tz: Optional[datetime.tzinfo] = None, ) -> WorkoutStreaks:
    """Consecutive training-day streaks from the log, ignoring any schedule.

    The current streak ends today, or yesterday when nothing has been
    logged yet today.  Several workouts on one day count once; workouts
    dated after ``today`` are ignored.
    """
    days = sorted(d for d in {local_date(r.timestamp, tz) for r in records} if d <= today)
    trained = set(days)

    one_day = datetime.timedelta(days=1)
    cursor = today if today in trained else today - one_day
    current = 0
    while cursor in trained:
        current += 1
        cursor -= one_day

    longest = 0
    run = 0
    previous: Optional[datetime.date] = None
    for day in days:
        run = run + 1 if previous is not None and day - previous == one_day else 1
        longest = max(longest, run)
        previous = day

    return WorkoutStreaks(current=current, longest=longest, active=today in trained or today - one_day in trained)
