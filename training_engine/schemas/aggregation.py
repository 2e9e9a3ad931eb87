"""
Aggregation schemas.

Rollups are keyed by local calendar date (``datetime.date``) and are
emitted with ascending keys so that two runs over the same snapshot
serialise identically.
"""

import datetime

from pydantic import BaseModel, Field


class AggregationPeriod(BaseModel):
    """A calendar window.

    The aggregator treats it as ``[start, end)``; the heatmap grid emits
    every day of ``[start, end]``.
    """

    start: datetime.date
    end: datetime.date

    @property
    def days(self) -> int:
        """Inclusive day count of the window."""
        return (self.end - self.start).days + 1


class MuscleShare(BaseModel):
    """Completed sets attributed to one muscle group."""

    muscle: str
    sets: int = Field(..., ge=0)
    percentage: float = Field(..., ge=0.0, le=100.0, description="Share of all attributed sets")


class AggregateResult(BaseModel):
    """Time-bucketed rollups over a period."""

    daily_volume: dict[datetime.date, float] = Field(default_factory=dict)
    daily_sets: dict[datetime.date, int] = Field(default_factory=dict)
    per_exercise_volume: dict[str, float] = Field(default_factory=dict)

    daily_workouts: dict[datetime.date, int] = Field(default_factory=dict,
                                                     description="Number of workouts logged per day")
    daily_duration: dict[datetime.date, float] = Field(default_factory=dict, description=(
        "Summed minutes per day; only days with at least one recorded duration appear"), )
    per_muscle_sets: dict[str, int] = Field(default_factory=dict)

    total_volume: float = 0.0
    total_sets: int = 0
    workout_count: int = 0
