"""
Workout log schemas.

A :class:`WorkoutRecord` is immutable once created; user corrections
arrive as a new snapshot of the whole log.  Every derived value (volume,
records, streaks) is recomputed from these snapshots, so these are the
only models the persistence layer needs to round-trip.

Weights are in one canonical unit throughout.  Unit conversion is a
display concern.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SetEntry(BaseModel):
    """A single performed (or skipped) set."""

    model_config = ConfigDict(frozen=True)

    weight: float = Field(0.0, ge=0.0, description="Load in the canonical unit (0 for bodyweight)")
    reps: int = Field(..., gt=0, description="Repetitions performed")
    completed: bool = Field(True, description="Whether the set was actually completed")


class ExerciseEntry(BaseModel):
    """One exercise within a workout, with its sets in performed order."""

    model_config = ConfigDict(frozen=True)

    exercise_id: str
    name: str = Field("", description="Denormalised display name")
    muscle_groups: list[str] = Field(default_factory=list, description="Primary muscle group(s)")
    sets: list[SetEntry] = Field(..., min_length=1)


class WorkoutRecord(BaseModel):
    """A logged training session."""

    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str
    timestamp: datetime.datetime
    duration_minutes: Optional[float] = Field(None, ge=0.0, description="Session length; None when not tracked", )
    template_id: Optional[str] = None
    exercises: list[ExerciseEntry] = Field(default_factory=list)


class PlannedExercise(BaseModel):
    """An exercise slot within a template."""

    model_config = ConfigDict(frozen=True)

    exercise_id: str
    name: str = ""
    muscle_groups: list[str] = Field(default_factory=list)
    target_sets: int = Field(3, gt=0)
    target_reps: int = Field(10, gt=0)


class Template(BaseModel):
    """A reusable workout plan referenced by schedule days and workouts."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    exercises: list[PlannedExercise] = Field(default_factory=list)

    @property
    def muscle_groups(self) -> list[str]:
        """Sorted union of the muscle groups of every planned exercise."""
        return sorted({m for ex in self.exercises for m in ex.muscle_groups})
