"""
Heatmap builder: daily volume on a gap-free calendar grid.

Levels adapt to each user's own training volume: the non-zero daily
volumes of the *current* dataset are split into quartiles, and each day
is placed in the tier its volume falls into.  Fixed absolute thresholds
would leave a light trainer's grid almost blank and saturate a heavy
trainer's.

    level 0   volume == 0
    level 1   0 < volume <= q25
    level 2   q25 < volume <= q50
    level 3   q50 < volume <= q75
    level 4   volume > q75

Quartiles are linearly interpolated (see :func:`stats.quantile`).
"""

from __future__ import annotations

import bisect
import datetime
import logging
from typing import Mapping, Sequence

from pydantic import BaseModel, Field

from training_engine.engine.dates import first_monday_on_or_before, iter_days
from training_engine.engine.errors import InvalidInputError
from training_engine.engine.stats import quantile
from training_engine.schemas.aggregation import AggregationPeriod
from training_engine.schemas.heatmap import HeatmapCell

logger = logging.getLogger(__name__)

# ======================================================================
# Configuration
# ======================================================================

_DEFAULT_TIERS = 4


class HeatmapConfig(BaseModel):
    """Configuration for level assignment."""

    tiers: int = Field(_DEFAULT_TIERS, ge=1, le=4, description="Number of non-zero intensity levels")


DEFAULT_HEATMAP_CONFIG = HeatmapConfig()


# ======================================================================
# Level boundaries
# ======================================================================


def level_boundaries(volumes: Sequence[float], tiers: int = _DEFAULT_TIERS) -> list[float]:
    """Cut points between tiers for the non-zero values of ``volumes``.

    Returns ``tiers - 1`` ascending cut points, or an empty list when
    there is no non-zero volume at all.
    """
    observed = sorted(v for v in volumes if v > 0)
    if not observed:
        return []
    return [quantile(observed, i / tiers) for i in range(1, tiers)]


def _level(volume: float, boundaries: list[float]) -> int:
    if volume <= 0:
        return 0
    return bisect.bisect_left(boundaries, volume) + 1


# ======================================================================
# Main entry point
# ======================================================================


def build_heatmap(daily_volume: Mapping[datetime.date, float], period: AggregationPeriod,
                  config: HeatmapConfig | None = None, ) -> list[HeatmapCell]:
    """Emit one cell per day of ``[period.start, period.end]`` (inclusive).

    Boundaries are computed from the days inside the period only, so the
    levels describe the window being displayed.

    Args:
        daily_volume: Volume per local date (e.g. ``AggregateResult.daily_volume``).
        period: Window to render; both ends are included.
        config: Optional :class:`HeatmapConfig` override.

    Returns:
        Cells in ascending date order.
    """
    if period.end < period.start:
        raise InvalidInputError(f"Period end {period.end} is before start {period.start}")
    cfg = config or DEFAULT_HEATMAP_CONFIG

    days = list(iter_days(period.start, period.end))
    volumes = [float(daily_volume.get(day, 0.0)) for day in days]
    boundaries = level_boundaries(volumes, cfg.tiers)
    grid_start = first_monday_on_or_before(period.start)

    cells = [HeatmapCell(date=day, volume=volume, level=_level(volume, boundaries), weekday=day.weekday(),
                         week_index=(day - grid_start).days // 7, ) for day, volume in zip(days, volumes)]

    logger.debug("Built heatmap of %d cells with boundaries %s", len(cells), boundaries)
    return cells
