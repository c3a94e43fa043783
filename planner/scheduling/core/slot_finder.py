"""
Free slot computation for a single work day window.
"""

from datetime import timedelta
from typing import Iterable, Iterator, List, Optional

from .constants import MIN_SLOT_MINUTES
from .time_slot import TimeSlot


class FreeSlots:
    """
    Lazy, restartable sequence of the free slots inside a window.

    Every iteration re-runs the sweep over a sorted copy of the busy
    intervals, so the caller's list is never touched.
    """

    def __init__(self, window: TimeSlot, busy: Iterable[TimeSlot], min_slot_minutes: int = MIN_SLOT_MINUTES):
        self.window = window
        self.busy = sorted(busy, key=lambda interval: interval.start)
        self.min_duration = timedelta(minutes=min_slot_minutes)

    def __iter__(self) -> Iterator[TimeSlot]:
        cursor = self.window.start
        for interval in self.busy:
            gap_end = min(interval.start, self.window.end)
            if cursor < gap_end and gap_end - cursor >= self.min_duration:
                yield TimeSlot(cursor, gap_end)
            # max() absorbs overlapping and nested busy intervals
            cursor = max(cursor, interval.end)
            if cursor >= self.window.end:
                return

        if cursor < self.window.end and self.window.end - cursor >= self.min_duration:
            yield TimeSlot(cursor, self.window.end)

    def __repr__(self):
        return f"FreeSlots({self.window!r}, {len(self.busy)} busy)"


class TimeSlotFinder:
    """Computes free intervals within one day's work window."""

    def __init__(self, min_slot_minutes: int = MIN_SLOT_MINUTES):
        self.min_slot_minutes = min_slot_minutes

    def free_slots(self, window: TimeSlot, busy: Iterable[TimeSlot], min_slot_minutes: Optional[int] = None) -> FreeSlots:
        if min_slot_minutes is None:
            min_slot_minutes = self.min_slot_minutes
        return FreeSlots(window, busy, min_slot_minutes)

    def first_fit(self, window: TimeSlot, busy: Iterable[TimeSlot], duration: timedelta) -> Optional[TimeSlot]:
        """Return the earliest free slot at least `duration` long, or None."""
        for slot in self.free_slots(window, busy):
            if slot.duration() >= duration:
                return slot
        return None

    def long_slots(self, window: TimeSlot, busy: Iterable[TimeSlot], min_duration: timedelta) -> List[TimeSlot]:
        """Return every free slot at least `min_duration` long, in order."""
        return [slot for slot in self.free_slots(window, busy) if slot.duration() >= min_duration]
