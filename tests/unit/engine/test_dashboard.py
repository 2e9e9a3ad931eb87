"""Tests for the dashboard composition and snapshot fingerprint."""

import datetime
import random

import pytest

from training_engine.core.config import settings
from training_engine.engine.dashboard import build_dashboard, snapshot_fingerprint
from training_engine.engine.dates import WEEKDAY_NAMES
from training_engine.engine.errors import InvalidInputError
from training_engine.engine.heatmap import HeatmapConfig
from training_engine.engine.recovery import RecoveryConfig
from training_engine.schemas.aggregation import AggregationPeriod
from training_engine.schemas.schedule import ScheduleDay, ScheduleWeek
from training_engine.schemas.workout import ExerciseEntry, SetEntry, WorkoutRecord


# ======================================================================
# Fixture data
# ======================================================================

NOW = datetime.datetime(2026, 3, 10, 20, 0)  # Tuesday of 2026-W11
PERIOD = AggregationPeriod(start=datetime.date(2026, 3, 1), end=datetime.date(2026, 3, 10))


def _workout(rid: str, day: datetime.date, squat_weight: float, duration: float) -> WorkoutRecord:
    return WorkoutRecord(
        id=rid,
        owner_id="u1",
        timestamp=datetime.datetime.combine(day, datetime.time(18, 0)),
        duration_minutes=duration,
        exercises=[
            ExerciseEntry(exercise_id="squat", name="Squat", muscle_groups=["legs"],
                          sets=[SetEntry(weight=squat_weight, reps=5) for _ in range(3)]),
            ExerciseEntry(exercise_id="bench", name="Bench Press", muscle_groups=["chest"],
                          sets=[SetEntry(weight=80, reps=5)]),
        ],
    )


def _week(week_id: str, completed: set[str]) -> ScheduleWeek:
    days = {}
    for name in WEEKDAY_NAMES:
        if name in ("monday", "tuesday", "thursday", "friday"):
            days[name] = ScheduleDay(template_id="full", template_name="Full Body", muscle_groups=["legs", "chest"],
                                     completed=name in completed)
        else:
            days[name] = ScheduleDay()
    return ScheduleWeek(id=week_id, days=days)


LOG = [
    _workout("w1", datetime.date(2026, 3, 2), 100, 55),
    _workout("w2", datetime.date(2026, 3, 3), 102.5, 60),
    _workout("w3", datetime.date(2026, 3, 5), 105, 62),
    _workout("w4", datetime.date(2026, 3, 6), 107.5, 65),
    _workout("w5", datetime.date(2026, 3, 9), 110, 70),
    _workout("w6", datetime.date(2026, 3, 10), 112.5, 72),
]

WEEKS = [
    _week("2026-W10", {"monday", "tuesday", "thursday", "friday"}),
    _week("2026-W11", {"monday", "tuesday"}),
]


# ======================================================================
# Tests
# ======================================================================


class TestBuildDashboard:
    def test_heatmap_covers_period_inclusive(self):
        snapshot = build_dashboard(LOG, WEEKS, now=NOW, period=PERIOD)
        assert len(snapshot.heatmap) == 10
        assert snapshot.heatmap[-1].date == PERIOD.end
        assert snapshot.heatmap[-1].volume > 0

    def test_components_populated(self):
        snapshot = build_dashboard(LOG, WEEKS, now=NOW, period=PERIOD)
        assert snapshot.aggregate.workout_count == 6
        assert snapshot.duration_trend.slope > 0
        assert [c.label for c in snapshot.weekly_changes] == ["2026-W11"]
        assert snapshot.adherence.current_streak == 9
        # Thursday and Friday of the current week are still planned and open.
        assert snapshot.adherence.percentage == pytest.approx(75.0)
        assert snapshot.workout_streaks.current == 2
        assert {b.exercise_id for b in snapshot.best_lifts} == {"bench", "squat"}
        assert all(pr.exercise_id == "squat" for pr in snapshot.personal_records)
        assert [s.muscle for s in snapshot.muscle_distribution] == ["legs", "chest"]

    def test_recovery_reflects_last_session(self):
        snapshot = build_dashboard(LOG, WEEKS, now=NOW, period=PERIOD)
        by_muscle = {s.muscle: s for s in snapshot.recovery}
        assert by_muscle["legs"].hours_since == pytest.approx(2.0)
        assert by_muscle["legs"].status == "fatigued"

    def test_current_week_analysis(self):
        snapshot = build_dashboard(LOG, WEEKS, now=NOW, period=PERIOD)
        assert [(w.kind, w.days) for w in snapshot.schedule_warnings] == [
            ("consecutive_muscle", ["monday", "tuesday"]),
            ("consecutive_muscle", ["monday", "tuesday"]),
            ("consecutive_muscle", ["thursday", "friday"]),
            ("consecutive_muscle", ["thursday", "friday"]),
        ]
        assert snapshot.rest_day_suggestion is not None
        assert snapshot.rest_day_suggestion.day == "friday"

    def test_no_current_week_means_no_analysis(self):
        snapshot = build_dashboard(LOG, WEEKS[:1], now=NOW, period=PERIOD)
        assert snapshot.schedule_warnings == []
        assert snapshot.rest_day_suggestion is None

    def test_default_period_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "HEATMAP_GRID_DAYS", 14)
        snapshot = build_dashboard(LOG, WEEKS, now=NOW)
        assert len(snapshot.heatmap) == 14
        assert snapshot.period.end == NOW.date()

    def test_empty_inputs(self):
        snapshot = build_dashboard([], [], now=NOW, period=PERIOD)
        assert all(c.level == 0 for c in snapshot.heatmap)
        assert snapshot.personal_records == []
        assert snapshot.adherence.percentage == 100.0
        assert snapshot.recovery == []


class TestIdempotence:
    def test_same_snapshot_same_output(self):
        first = build_dashboard(LOG, WEEKS, now=NOW, period=PERIOD)
        second = build_dashboard(LOG, WEEKS, now=NOW, period=PERIOD)
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_input_order_does_not_matter(self):
        shuffled = list(LOG)
        random.Random(7).shuffle(shuffled)
        first = build_dashboard(LOG, WEEKS, now=NOW, period=PERIOD)
        second = build_dashboard(shuffled, list(reversed(WEEKS)), now=NOW, period=PERIOD)
        assert first == second


class TestSnapshotFingerprint:
    def test_stable(self):
        assert snapshot_fingerprint(LOG, WEEKS) == snapshot_fingerprint(list(LOG), list(WEEKS))

    def test_changes_with_input(self):
        edited = LOG[:-1] + [_workout("w6", datetime.date(2026, 3, 10), 115, 72)]
        assert snapshot_fingerprint(LOG, WEEKS) != snapshot_fingerprint(edited, WEEKS)

    def test_changes_with_now(self):
        week = _week("2026-W10", {"monday", "tuesday", "thursday", "friday"})
        earlier = build_dashboard([], [week], now=datetime.datetime(2026, 3, 4, 12, 0), period=PERIOD)
        later = build_dashboard([], [week], now=datetime.datetime(2026, 3, 8, 12, 0), period=PERIOD)
        assert earlier.adherence.current_streak != later.adherence.current_streak
        assert earlier.fingerprint != later.fingerprint

    @pytest.mark.parametrize(
        "overrides",
        [
            {"window": 4},
            {"period": AggregationPeriod(start=datetime.date(2026, 3, 2), end=datetime.date(2026, 3, 10))},
            {"tz": datetime.timezone.utc},
            {"previous_achievements": ["on-fire"]},
        ],
    )
    def test_changes_with_call_parameters(self, overrides):
        base = build_dashboard(LOG, WEEKS, now=NOW, period=PERIOD, window=12)
        params = {"now": NOW, "period": PERIOD, "window": 12, **overrides}
        assert build_dashboard(LOG, WEEKS, **params).fingerprint != base.fingerprint

    def test_default_configs_hash_like_omitted(self):
        omitted = snapshot_fingerprint(LOG, WEEKS, now=NOW)
        explicit = snapshot_fingerprint(LOG, WEEKS, now=NOW, heatmap_config=HeatmapConfig(),
                                        recovery_config=RecoveryConfig())
        assert omitted == explicit
        assert snapshot_fingerprint(LOG, WEEKS, now=NOW, recovery_config=RecoveryConfig(fallback_hours=24)) != omitted


class TestInputContract:
    def test_mixed_naive_and_aware_log_rejected(self):
        aware = WorkoutRecord(id="z", owner_id="u1",
                              timestamp=datetime.datetime(2026, 3, 4, 9, 0, tzinfo=datetime.timezone.utc))
        with pytest.raises(InvalidInputError, match="naive and aware"):
            build_dashboard(LOG + [aware], WEEKS, now=NOW, period=PERIOD)
