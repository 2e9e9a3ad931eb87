"""
Recovery advisor schemas.

Status tiers for a muscle with recovery window ``T`` hours:

- ``recovered`` : hours since last trained >= T
- ``recovering``: >= T / 2
- ``fatigued``  : < T / 2

Schedule warnings are advisory only; the engine never blocks an
assignment.
"""

from pydantic import BaseModel, Field


class RecoveryStatus(BaseModel):
    """Recovery state of a single muscle group."""

    muscle: str
    hours_since: float | None = Field(None, description="Hours since last trained (None if never trained)", )
    status: str = Field(..., description="One of: recovered, recovering, fatigued")
    threshold_hours: float = Field(..., gt=0.0, description="Recovery window for this muscle")


class ScheduleWarning(BaseModel):
    """An advisory annotation on a schedule week."""

    kind: str = Field(..., description="One of: consecutive_muscle, no_rest_day")
    days: list[str] = Field(default_factory=list, description="Weekday names involved")
    muscle: str | None = None
    message: str


class RestDaySuggestion(BaseModel):
    """Where a rest day best breaks up the longest run of training days."""

    day: str
    day_index: int = Field(..., ge=0, le=6)
    run_length: int = Field(..., ge=1, description="Length of the training run being split")
    reason: str
