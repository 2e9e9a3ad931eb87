"""
Weekly schedule schemas.

A :class:`ScheduleWeek` is keyed by its ISO week id (``YYYY-Www``) and
holds one :class:`ScheduleDay` per weekday name.  A day without a
template is a rest day and is never counted as missed.

Slot completeness (exactly the seven weekday keys) is checked by the
engine, not here, so a malformed week coming from storage surfaces as
``InvalidInputError`` at the point of use.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ScheduleDay(BaseModel):
    """One weekday slot."""

    model_config = ConfigDict(frozen=True)

    template_id: Optional[str] = None
    template_name: Optional[str] = None
    muscle_groups: list[str] = Field(default_factory=list, description="Denormalised from the template")
    completed: bool = False
    workout_id: Optional[str] = Field(None, description="Workout that fulfilled this day")

    @property
    def is_rest_day(self) -> bool:
        return self.template_id is None

    @property
    def is_missed(self) -> bool:
        """Planned but not completed."""
        return self.template_id is not None and not self.completed


class ScheduleWeek(BaseModel):
    """Seven weekday slots for one ISO week."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="ISO week id, e.g. '2026-W02'")
    days: dict[str, ScheduleDay] = Field(default_factory=dict)
