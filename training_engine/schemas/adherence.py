"""
Schedule adherence schemas.

A week's percentage counts only planned (template) days in the
denominator; a week with nothing planned is 100 %.
"""

import datetime

from pydantic import BaseModel, Field


class WeekAdherence(BaseModel):
    """Completion summary for one schedule week."""

    week_id: str
    week_start: datetime.date
    planned: int = Field(..., ge=0, le=7)
    completed: int = Field(..., ge=0, le=7)
    missed: int = Field(..., ge=0, le=7)
    percentage: float = Field(..., ge=0.0, le=100.0)


class Achievement(BaseModel):
    id: str
    name: str
    description: str


class AdherenceStats(BaseModel):
    """Adherence, streaks and achievement triggers over a schedule history."""

    percentage: float = Field(..., ge=0.0, le=100.0, description="Completed / planned over the window")
    planned_days: int = Field(..., ge=0)
    completed_days: int = Field(..., ge=0)
    current_streak: int = Field(..., ge=0)
    best_streak: int = Field(..., ge=0)
    weekly_series: list[WeekAdherence] = Field(default_factory=list, description="Chronological")
    best_week: WeekAdherence | None = None
    consistency_score: int = Field(..., ge=0, le=100)
    trend: str = Field(..., description="One of: improving, stable, declining")
    achievements: list[Achievement] = Field(default_factory=list)
    new_achievements: list[Achievement] = Field(default_factory=list,
                                                description="Unlocked now but absent from the caller's previous set")


class WorkoutStreaks(BaseModel):
    """Consecutive-calendar-day streaks derived from the log alone."""

    current: int = Field(..., ge=0)
    longest: int = Field(..., ge=0)
    active: bool = Field(..., description="Trained today or yesterday")
