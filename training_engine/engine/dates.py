"""
Calendar helpers shared by the engine components.

Buckets are keyed by the **local calendar date** of a workout, never by
its instant: a session logged at 23:30 belongs to that day regardless of
the UTC offset.  Week keys follow ISO 8601 (``YYYY-Www``, Monday start).
"""

from __future__ import annotations

import datetime
import re
from typing import Iterator, Optional

from training_engine.engine.errors import InvalidInputError

WEEKDAY_NAMES: list[str] = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday", ]

_WEEK_ID_RE = re.compile(r"^(\d{4})-W(\d{2})$")


def local_date(timestamp: datetime.datetime, tz: Optional[datetime.tzinfo] = None) -> datetime.date:
    """Return the calendar date a timestamp falls on.

    Aware timestamps are converted to ``tz`` first when one is given;
    naive timestamps are already local and are used as-is.
    """
    if tz is not None and timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(tz)
    return timestamp.date()


def iso_week_id(day: datetime.date) -> str:
    """ISO week key for ``day``, e.g. ``2026-W02``."""
    year, week, _ = day.isocalendar()
    return f"{year}-W{week:02d}"


def parse_week_id(week_id: str) -> tuple[int, int]:
    """Split a ``YYYY-Www`` key into ``(year, week)``."""
    match = _WEEK_ID_RE.match(week_id)
    if match is None:
        raise InvalidInputError(f"Malformed week id {week_id!r}: expected 'YYYY-Www'")
    year, week = int(match.group(1)), int(match.group(2))
    try:
        datetime.date.fromisocalendar(year, week, 1)
    except ValueError as exc:
        raise InvalidInputError(f"Week id {week_id!r} does not exist: {exc}") from exc
    return year, week


def week_start_date(week_id: str) -> datetime.date:
    """Monday of the ISO week ``week_id``."""
    year, week = parse_week_id(week_id)
    return datetime.date.fromisocalendar(year, week, 1)


def shift_week_id(week_id: str, weeks: int) -> str:
    """Week key ``weeks`` weeks after (negative: before) ``week_id``."""
    return iso_week_id(week_start_date(week_id) + datetime.timedelta(weeks=weeks))


def first_monday_on_or_before(day: datetime.date) -> datetime.date:
    return day - datetime.timedelta(days=day.weekday())


def iter_days(start: datetime.date, end: datetime.date) -> Iterator[datetime.date]:
    """Yield every date in ``[start, end]`` (inclusive)."""
    current = start
    while current <= end:
        yield current
        current += datetime.timedelta(days=1)
