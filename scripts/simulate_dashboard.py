"""What does the dashboard look like TODAY (2026-03-12)?

Builds a synthetic six-week log of an upper/lower split plus its weekly
schedule, runs the whole engine once and prints every section.

Usage:
    python scripts/simulate_dashboard.py
"""

import datetime
import logging

from dotenv import load_dotenv

load_dotenv()

from training_engine.core.config import settings  # noqa: E402
from training_engine.core.logging import configure_logging  # noqa: E402
from training_engine.engine.dashboard import build_dashboard  # noqa: E402
from training_engine.engine.dates import WEEKDAY_NAMES, iso_week_id, week_start_date  # noqa: E402
from training_engine.engine.trends import exercise_progression  # noqa: E402
from training_engine.schemas.aggregation import AggregationPeriod  # noqa: E402
from training_engine.schemas.schedule import ScheduleDay, ScheduleWeek  # noqa: E402
from training_engine.schemas.workout import ExerciseEntry, SetEntry, WorkoutRecord  # noqa: E402

logger = logging.getLogger(__name__)

NOW = datetime.datetime(2026, 3, 12, 19, 0)
FIRST_WEEK = "2026-W06"
WEEKS = 6

# ─── Split: weekday → (template id, exercises) ─────────────────────────
SPLIT = {
    "monday": ("upper-a", [("bench", "Bench Press", ["chest", "triceps"], 80.0),
                           ("row", "Barbell Row", ["back", "biceps"], 70.0)]),
    "tuesday": ("lower-a", [("squat", "Squat", ["legs", "glutes"], 110.0),
                            ("calf-raise", "Calf Raise", ["calves"], 60.0)]),
    "thursday": ("upper-b", [("ohp", "Overhead Press", ["shoulders", "triceps"], 50.0),
                             ("pullup", "Pull-up", ["back", "biceps"], 0.0)]),
    "friday": ("lower-b", [("deadlift", "Deadlift", ["back", "hamstrings"], 140.0),
                           ("lunge", "Lunge", ["legs", "glutes"], 30.0)]),
}

# Sessions skipped on purpose: (week offset, weekday)
SKIPPED = {(2, "friday"), (4, "thursday")}


def build_log():
    """One workout per completed split day, loads rising 2.5 per week."""
    records = []
    for week in range(WEEKS):
        monday = week_start_date(FIRST_WEEK) + datetime.timedelta(weeks=week)
        for offset, name in enumerate(WEEKDAY_NAMES):
            if name not in SPLIT or (week, name) in SKIPPED:
                continue
            ts = datetime.datetime.combine(monday + datetime.timedelta(days=offset), datetime.time(18, 30))
            if ts > NOW:
                continue
            template_id, exercises = SPLIT[name]
            entries = [
                ExerciseEntry(exercise_id=ex_id, name=label, muscle_groups=muscles,
                              sets=[SetEntry(weight=base + 2.5 * week if base else 0.0, reps=5) for _ in range(4)])
                for ex_id, label, muscles, base in exercises
            ]
            records.append(WorkoutRecord(id=f"{iso_week_id(ts.date())}-{name}", owner_id="demo", timestamp=ts,
                                         duration_minutes=55 + 2 * week, template_id=template_id,
                                         exercises=entries))
    return records


def build_schedule(records):
    done = {r.id for r in records}
    weeks = []
    for week in range(WEEKS):
        monday = week_start_date(FIRST_WEEK) + datetime.timedelta(weeks=week)
        week_id = iso_week_id(monday)
        days = {}
        for name in WEEKDAY_NAMES:
            if name not in SPLIT:
                days[name] = ScheduleDay()
                continue
            template_id, exercises = SPLIT[name]
            workout_id = f"{week_id}-{name}"
            days[name] = ScheduleDay(template_id=template_id, template_name=template_id.replace("-", " ").title(),
                                     muscle_groups=sorted({m for _, _, muscles, _ in exercises for m in muscles}),
                                     completed=workout_id in done,
                                     workout_id=workout_id if workout_id in done else None)
        weeks.append(ScheduleWeek(id=week_id, days=days))
    return weeks


def main():
    configure_logging()
    records = build_log()
    weeks = build_schedule(records)
    period = AggregationPeriod(start=week_start_date(FIRST_WEEK), end=NOW.date())

    snapshot = build_dashboard(records, weeks, now=NOW, period=period)
    logger.info("Simulated %d workouts over %d weeks", len(records), len(weeks))

    print()
    print("=" * 65)
    print(f"  {settings.PROJECT_NAME}: {NOW.strftime('%A %d %B %Y')}")
    print("=" * 65)
    print()

    agg = snapshot.aggregate
    print(f"  Workouts:      {agg.workout_count}")
    print(f"  Total volume:  {agg.total_volume:,.0f}")
    print(f"  Total sets:    {agg.total_sets}")
    print()

    # ── Heatmap ─────────────────────────────────────────────────────
    print("  Heatmap (Mon..Sun rows, one column per week):")
    columns = max(c.week_index for c in snapshot.heatmap) + 1
    grid = [[" "] * columns for _ in range(7)]
    for cell in snapshot.heatmap:
        grid[cell.weekday][cell.week_index] = "_.:+#"[cell.level]
    for name, row in zip(WEEKDAY_NAMES, grid):
        print(f"  {name[:3]}  {' '.join(row)}")
    print()

    # ── Trends ──────────────────────────────────────────────────────
    trend = snapshot.duration_trend
    print(f"  Duration trend: {trend.slope:+.2f} min/day (r²={trend.r2:.2f})")
    print(f"  {'Week':<10} {'Previous':>10} {'Current':>10} {'Change':>8}  Status")
    print("  " + "-" * 63)
    for change in snapshot.weekly_changes:
        print(f"  {change.label:<10} {change.previous:>10.0f} {change.current:>10.0f} "
              f"{change.percentage:>7.1f}%  {change.status}")
    print()

    for exercise_id in ("bench", "squat", "deadlift"):
        progression = exercise_progression(records, exercise_id)
        print(f"  {exercise_id:<10} e1RM trend: {progression.direction} ({progression.percentage:+.1f}%/session)")
    print()

    # ── Records ─────────────────────────────────────────────────────
    print(f"  Personal records: {len(snapshot.personal_records)}")
    for pr in snapshot.personal_records[-5:]:
        print(f"    {pr.achieved_at.date()} {pr.exercise_name:<15} {pr.kind.value:<7} "
              f"{pr.previous_value:g} → {pr.value:g} ({pr.percentage:+.1f}%)")
    print()

    # ── Adherence ───────────────────────────────────────────────────
    adherence = snapshot.adherence
    print(f"  Adherence:       {adherence.percentage:.1f}% ({adherence.trend})")
    print(f"  Streak:          {adherence.current_streak} days (best {adherence.best_streak})")
    print(f"  Consistency:     {adherence.consistency_score}/100")
    print(f"  Achievements:    {', '.join(a.name for a in adherence.achievements) or '--'}")
    print(f"  Log streak:      {snapshot.workout_streaks.current} days")
    print()

    # ── Recovery ────────────────────────────────────────────────────
    print(f"  {'Muscle':<12} {'Hours':>7}  Status")
    print("  " + "-" * 63)
    for status in snapshot.recovery:
        hours = f"{status.hours_since:.0f}" if status.hours_since is not None else "--"
        print(f"  {status.muscle:<12} {hours:>7}  {status.status}")
    print()

    for warning in snapshot.schedule_warnings:
        print(f"  ! {warning.message}")
    if snapshot.rest_day_suggestion is not None:
        print(f"  Suggestion: {snapshot.rest_day_suggestion.reason}")
    print()


if __name__ == "__main__":
    main()
