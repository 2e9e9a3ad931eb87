"""Tests for the recovery advisor."""

import datetime

import pytest
from pydantic import ValidationError

from training_engine.engine.dates import WEEKDAY_NAMES
from training_engine.engine.errors import InvalidInputError
from training_engine.engine.recovery import (
    DEFAULT_RECOVERY_CONFIG,
    RecoveryConfig,
    _label_recovery,
    analyze_week,
    recovery_overview,
    recovery_status,
    suggest_rest_day,
)
from training_engine.schemas.schedule import ScheduleDay, ScheduleWeek
from training_engine.schemas.workout import ExerciseEntry, SetEntry, WorkoutRecord


NOW = datetime.datetime(2026, 3, 10, 12, 0)


def _ago(hours: float) -> datetime.datetime:
    return NOW - datetime.timedelta(hours=hours)


def _make_week(plan: list[list[str] | None], week_id: str = "2026-W10") -> ScheduleWeek:
    """``plan`` holds muscle groups per weekday, ``None`` for rest."""
    days = {}
    for name, muscles in zip(WEEKDAY_NAMES, plan):
        if muscles is None:
            days[name] = ScheduleDay()
        else:
            days[name] = ScheduleDay(template_id=f"t-{name}", template_name=name.title(), muscle_groups=muscles)
    return ScheduleWeek(id=week_id, days=days)


def _pattern_week(pattern: str) -> ScheduleWeek:
    """``T`` = training day, ``-`` = rest."""
    return _make_week([["core"] if c == "T" else None for c in pattern])


# ======================================================================
# Status labelling
# ======================================================================


class TestLabelRecovery:
    @pytest.mark.parametrize(
        "hours, expected",
        [
            (20, "fatigued"),
            (23.9, "fatigued"),
            (24, "recovering"),
            (30, "recovering"),
            (47.9, "recovering"),
            (48, "recovered"),
            (50, "recovered"),
        ],
    )
    def test_48h_threshold(self, hours, expected):
        assert _label_recovery(hours, 48.0) == expected


class TestRecoveryStatus:
    @pytest.mark.parametrize("hours, expected", [(20, "fatigued"), (30, "recovering"), (50, "recovered")])
    def test_chest_example(self, hours, expected):
        status = recovery_status("chest", _ago(hours), NOW)
        assert status.threshold_hours == 48.0
        assert status.hours_since == pytest.approx(hours)
        assert status.status == expected

    def test_large_groups_need_longer(self):
        assert recovery_status("legs", _ago(50), NOW).status == "recovering"
        assert recovery_status("calves", _ago(50), NOW).status == "recovered"

    def test_lookup_is_case_insensitive(self):
        assert recovery_status("Legs", _ago(1), NOW).threshold_hours == 72.0

    def test_unknown_muscle_uses_fallback(self):
        assert recovery_status("neck", _ago(1), NOW).threshold_hours == DEFAULT_RECOVERY_CONFIG.fallback_hours

    def test_never_trained_is_recovered(self):
        status = recovery_status("chest", None, NOW)
        assert status.status == "recovered"
        assert status.hours_since is None

    def test_future_timestamp_clamped(self):
        status = recovery_status("chest", NOW + datetime.timedelta(hours=3), NOW)
        assert status.hours_since == 0.0
        assert status.status == "fatigued"

    def test_custom_config(self):
        config = RecoveryConfig(recovery_hours={"chest": 10.0})
        assert recovery_status("chest", _ago(12), NOW, config).status == "recovered"


class TestRecoveryConfig:
    @pytest.mark.parametrize("muscle", ["chest", "Chest", "CHEST"])
    def test_mixed_case_table_keys_match(self, muscle):
        config = RecoveryConfig(recovery_hours={"Chest": 10.0})
        assert config.threshold_for(muscle) == 10.0

    def test_keys_stored_lowercase(self):
        assert RecoveryConfig(recovery_hours={"Lats": 60.0}).recovery_hours == {"lats": 60.0}

    def test_conflicting_case_variants_rejected(self):
        with pytest.raises(ValidationError):
            RecoveryConfig(recovery_hours={"Chest": 10.0, "chest": 20.0})

    def test_non_positive_hours_rejected(self):
        with pytest.raises(ValidationError):
            RecoveryConfig(recovery_hours={"chest": 0.0})


class TestRecoveryOverview:
    def test_from_log(self):
        records = [
            WorkoutRecord(id="a", owner_id="u1", timestamp=_ago(100), exercises=[
                ExerciseEntry(exercise_id="squat", muscle_groups=["legs"], sets=[SetEntry(weight=100, reps=5)])]),
            WorkoutRecord(id="b", owner_id="u1", timestamp=_ago(10), exercises=[
                ExerciseEntry(exercise_id="bench", muscle_groups=["chest"], sets=[SetEntry(weight=80, reps=5)])]),
        ]
        overview = recovery_overview(records, NOW, muscles=["back"])
        assert [(s.muscle, s.status) for s in overview] == [
            ("back", "recovered"),
            ("chest", "fatigued"),
            ("legs", "recovered"),
        ]
        assert overview[0].hours_since is None


# ======================================================================
# Schedule analysis
# ======================================================================


class TestAnalyzeWeek:
    def test_consecutive_muscle_flagged(self):
        week = _make_week([["chest", "triceps"], ["chest", "back"], None, ["legs"], None, ["legs"], None])
        warnings = analyze_week(week)
        assert len(warnings) == 1
        w = warnings[0]
        assert (w.kind, w.muscle, w.days) == ("consecutive_muscle", "chest", ["monday", "tuesday"])

    def test_multiple_shared_muscles_sorted(self):
        week = _make_week([["legs", "core"], ["core", "legs"], None, None, None, None, None])
        assert [w.muscle for w in analyze_week(week)] == ["core", "legs"]

    def test_sunday_does_not_wrap_to_monday(self):
        week = _make_week([["legs"], None, None, None, None, None, ["legs"]])
        assert analyze_week(week) == []

    def test_no_rest_day(self):
        week = _make_week([["chest"], ["back"], ["legs"], ["chest"], ["back"], ["legs"], ["core"]])
        warnings = analyze_week(week)
        assert [w.kind for w in warnings] == ["no_rest_day"]

    def test_balanced_week_is_clean(self):
        week = _make_week([["chest"], None, ["back"], None, ["legs"], None, None])
        assert analyze_week(week) == []

    def test_incomplete_week_rejected(self):
        with pytest.raises(InvalidInputError):
            analyze_week(ScheduleWeek(id="2026-W10", days={"monday": ScheduleDay()}))


class TestSuggestRestDay:
    @pytest.mark.parametrize(
        "pattern, day, run_length",
        [
            ("TTTTT--", "wednesday", 5),
            ("TTTT---", "wednesday", 4),  # tie between Tue and Wed goes to the later day
            ("TTTTTTT", "thursday", 7),
            ("TT-TT--", "friday", 2),  # later of two equal runs
            ("--TTT--", "thursday", 3),
        ],
    )
    def test_splits_longest_run(self, pattern, day, run_length):
        suggestion = suggest_rest_day(_pattern_week(pattern))
        assert suggestion is not None
        assert suggestion.day == day
        assert suggestion.day_index == WEEKDAY_NAMES.index(day)
        assert suggestion.run_length == run_length

    @pytest.mark.parametrize("pattern", ["-------", "T-T-T-T", "------T"])
    def test_nothing_to_split(self, pattern):
        assert suggest_rest_day(_pattern_week(pattern)) is None

    def test_deterministic(self):
        week = _pattern_week("TTT-TTT")
        assert suggest_rest_day(week) == suggest_rest_day(week)
