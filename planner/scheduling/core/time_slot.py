"""
Time interval representation for the scheduling system.
"""

from datetime import datetime, timedelta


class TimeSlot:
    """
    A half-open time range [start, end).

    Used for work day windows, busy intervals, free slots and focus blocks.
    Instances are treated as values and never mutated by the scheduler.
    """
    __slots__ = ("start", "end")

    def __init__(self, start: datetime, end: datetime):
        if start >= end:
            raise ValueError(f"TimeSlot start must be before end (got {start} - {end})")
        self.start = start
        self.end = end

    def duration(self) -> timedelta:
        return self.end - self.start

    def duration_minutes(self) -> float:
        return self.duration().total_seconds() / 60

    def overlaps(self, other: "TimeSlot") -> bool:
        return self.start < other.end and other.start < self.end

    def contains(self, other: "TimeSlot") -> bool:
        return self.start <= other.start and other.end <= self.end

    def __lt__(self, other):
        return (self.start, self.end) < (other.start, other.end)

    def __eq__(self, other):
        if not isinstance(other, TimeSlot):
            return NotImplemented
        return self.start == other.start and self.end == other.end

    def __hash__(self):
        return hash((self.start, self.end))

    def __repr__(self):
        return f"TimeSlot({self.start.strftime('%Y-%m-%d %I:%M %p')} - {self.end.strftime('%I:%M %p')})"
