"""Dashboard snapshot schema: every engine output for one log/schedule snapshot."""

from pydantic import BaseModel, Field

from training_engine.schemas.adherence import AdherenceStats, WorkoutStreaks
from training_engine.schemas.aggregation import AggregateResult, AggregationPeriod, MuscleShare
from training_engine.schemas.heatmap import HeatmapCell
from training_engine.schemas.recovery import RecoveryStatus, RestDaySuggestion, ScheduleWarning
from training_engine.schemas.records import ExerciseBest, PersonalRecord
from training_engine.schemas.trend import TrendLine, WeeklyChange


class DashboardSnapshot(BaseModel):
    """Complete derived view returned by :func:`build_dashboard`."""

    fingerprint: str = Field(..., description="SHA-256 of the inputs and call parameters (cache key)")
    period: AggregationPeriod
    aggregate: AggregateResult
    heatmap: list[HeatmapCell]
    muscle_distribution: list[MuscleShare]
    duration_trend: TrendLine
    weekly_changes: list[WeeklyChange]
    personal_records: list[PersonalRecord]
    best_lifts: list[ExerciseBest]
    adherence: AdherenceStats
    workout_streaks: WorkoutStreaks
    recovery: list[RecoveryStatus]
    schedule_warnings: list[ScheduleWarning] = Field(default_factory=list, description="For the week containing 'now'")
    rest_day_suggestion: RestDaySuggestion | None = None
