"""
Calendar heatmap schemas.

Intensity levels:

- ``0``: no volume that day
- ``1`` … ``4``: quartile tier of the day's volume among all non-zero
  days in the same dataset
"""

import datetime

from pydantic import BaseModel, Field


class HeatmapCell(BaseModel):
    """One calendar day of the heatmap grid."""

    date: datetime.date
    volume: float = Field(0.0, ge=0.0)
    level: int = Field(0, ge=0, le=4)
    weekday: int = Field(..., ge=0, le=6, description="0 = Monday")
    week_index: int = Field(..., ge=0, description="Column in a Monday-start grid")
