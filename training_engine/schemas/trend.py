"""
Trend schemas.

Overload status labels (fixed ±2.5 % band):

- ``progressing``: week-over-week change >= +2.5 %
- ``regressing`` : change <= -2.5 %
- ``maintaining``: anything in between
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TrendPoint(BaseModel):
    """A timestamped observation (e.g. session duration in minutes)."""

    x: datetime.datetime
    y: float


class TrendLine(BaseModel):
    """Least-squares line; ``x`` is measured in days from the first point."""

    slope: float = Field(0.0, description="Change of y per day")
    intercept: float = Field(0.0, description="Fitted y at the first point")
    r2: float = Field(0.0, description="Coefficient of determination")


class WeeklyChange(BaseModel):
    """Week-over-week volume change."""

    label: Optional[str] = Field(None, description="Week id of the current week, if supplied")
    previous: float
    current: float
    percentage: float
    status: str = Field(..., description="One of: progressing, maintaining, regressing")


class ProgressionPoint(BaseModel):
    timestamp: datetime.datetime
    estimated_1rm: float


class ExerciseProgression(BaseModel):
    """Strength trend for one exercise, from per-session best e1RM."""

    exercise_id: str
    direction: str = Field(..., description="One of: up, down, flat, insufficient_data")
    percentage: float = Field(0.0, description="Slope per session as a % of the mean e1RM")
    confidence: float = Field(0.0, ge=0.0, le=1.0, description="r² of the fit")
    points: list[ProgressionPoint] = Field(default_factory=list)
