"""
Personal-record schemas.

Records are derived from the log on every call and never stored as the
source of truth, so an edited historical set can never leave a stale PR
behind.
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RecordKind(str, Enum):
    """What a personal record measures."""

    WEIGHT = "weight"  # heaviest weight at a given rep count
    VOLUME = "volume"  # most volume for the exercise in one workout
    REPS = "reps"  # most reps at a given weight


class PersonalRecord(BaseModel):
    """A baseline-beating event found while replaying the log."""

    exercise_id: str
    exercise_name: str = ""
    kind: RecordKind
    value: float
    previous_value: float
    percentage: float = Field(..., description="Improvement over previous_value, in percent")
    achieved_at: datetime.datetime
    workout_id: str
    reps: Optional[int] = Field(None, description="Rep-count key of a weight record")
    weight: Optional[float] = Field(None, description="Weight key of a reps record")


class ExerciseBest(BaseModel):
    """Current all-time bests for one exercise."""

    exercise_id: str
    exercise_name: str = ""
    max_weight: float
    max_weight_reps: int
    max_weight_at: datetime.datetime
    estimated_1rm: Optional[float] = Field(None, description="Best Epley estimate (sets of 1-15 reps)")
    best_volume: float
    sessions: int = Field(..., ge=0, description="Workouts with at least one completed set")
