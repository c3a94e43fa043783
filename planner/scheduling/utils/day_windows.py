"""
Work day window helpers.

Instants are naive UTC datetimes, the same way they are stored. Only the
bounds of a work day are computed in the user's local time.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterator, List, Optional, Tuple

import pytz

from ..core.constants import HORIZON_DAYS, WORKDAY_END_HOUR, WORKDAY_START_HOUR
from ..core.time_slot import TimeSlot


def resolve_timezone(timezone_name: Optional[str], default: str = "UTC"):
    """Return a pytz timezone, falling back to `default` for unknown names."""
    try:
        return pytz.timezone(timezone_name or default)
    except pytz.UnknownTimeZoneError:
        return pytz.timezone(default)


def to_naive_utc(local_dt: datetime, tz) -> datetime:
    return tz.localize(local_dt).astimezone(pytz.UTC).replace(tzinfo=None)


def local_today(tz, now: Optional[datetime] = None) -> date:
    """Calendar date of `now` (naive UTC, defaults to the current time) in `tz`."""
    now = now or datetime.utcnow()
    return pytz.UTC.localize(now).astimezone(tz).date()


def work_day_window(day: date, tz=pytz.UTC, hours: Tuple[int, int] = (WORKDAY_START_HOUR, WORKDAY_END_HOUR)) -> TimeSlot:
    """Build the schedulable window of `day` in `tz`, as naive UTC."""
    start_hour, end_hour = hours
    start = to_naive_utc(datetime.combine(day, time(hour=start_hour)), tz)
    end = to_naive_utc(datetime.combine(day, time(hour=end_hour)), tz)
    return TimeSlot(start, end)


def iter_day_windows(first_day: date, tz=pytz.UTC, days: int = HORIZON_DAYS,
                     hours: Tuple[int, int] = (WORKDAY_START_HOUR, WORKDAY_END_HOUR)) -> Iterator[TimeSlot]:
    """Yield one work window per calendar day, starting at `first_day`."""
    for offset in range(days):
        yield work_day_window(first_day + timedelta(days=offset), tz, hours)


def overlap_minutes(interval: TimeSlot, window: TimeSlot) -> float:
    """Minutes of `interval` that fall inside `window`."""
    start = max(interval.start, window.start)
    end = min(interval.end, window.end)
    if start >= end:
        return 0.0
    return (end - start).total_seconds() / 60


def split_minutes_by_tag(intervals: List[Tuple[TimeSlot, str]], window: TimeSlot, focus_tags) -> Tuple[float, float]:
    """Return (focus_minutes, other_minutes) of tagged intervals inside `window`."""
    focus_minutes = 0.0
    other_minutes = 0.0
    for interval, tag in intervals:
        minutes = overlap_minutes(interval, window)
        if tag in focus_tags:
            focus_minutes += minutes
        else:
            other_minutes += minutes
    return focus_minutes, other_minutes


def is_valid_timezone(timezone_name: str) -> bool:
    return timezone_name in pytz.all_timezones_set
