"""Pydantic schemas for engine inputs and derived outputs."""

from training_engine.schemas.workout import ExerciseEntry, PlannedExercise, SetEntry, Template, WorkoutRecord
from training_engine.schemas.schedule import ScheduleDay, ScheduleWeek
from training_engine.schemas.aggregation import AggregateResult, AggregationPeriod, MuscleShare
from training_engine.schemas.heatmap import HeatmapCell
from training_engine.schemas.trend import ExerciseProgression, TrendLine, TrendPoint, WeeklyChange
from training_engine.schemas.records import ExerciseBest, PersonalRecord, RecordKind
from training_engine.schemas.adherence import Achievement, AdherenceStats, WeekAdherence, WorkoutStreaks
from training_engine.schemas.recovery import RecoveryStatus, RestDaySuggestion, ScheduleWarning
from training_engine.schemas.dashboard import DashboardSnapshot

__all__ = [
    "SetEntry",
    "ExerciseEntry",
    "WorkoutRecord",
    "PlannedExercise",
    "Template",
    "ScheduleDay",
    "ScheduleWeek",
    "AggregationPeriod",
    "AggregateResult",
    "MuscleShare",
    "HeatmapCell",
    "TrendPoint",
    "TrendLine",
    "WeeklyChange",
    "ExerciseProgression",
    "RecordKind",
    "PersonalRecord",
    "ExerciseBest",
    "WeekAdherence",
    "Achievement",
    "AdherenceStats",
    "WorkoutStreaks",
    "RecoveryStatus",
    "ScheduleWarning",
    "RestDaySuggestion",
    "DashboardSnapshot",
]
