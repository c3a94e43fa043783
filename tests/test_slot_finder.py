import random
from datetime import timedelta

import pytest

from planner.scheduling import FreeSlots, TimeSlot, TimeSlotFinder

from helpers import at, slot

WINDOW = slot((9, 0), (18, 0))


def test_free_slots_around_busy_intervals():
    busy = [slot((10, 0), (11, 0)), slot((13, 0), (13, 30))]

    free = list(TimeSlotFinder().free_slots(WINDOW, busy))

    assert free == [
        slot((9, 0), (10, 0)),
        slot((11, 0), (13, 0)),
        slot((13, 30), (18, 0)),
    ]
    assert [s.duration_minutes() for s in free] == [60, 120, 270]


def test_empty_calendar_is_one_slot():
    assert list(TimeSlotFinder().free_slots(WINDOW, [])) == [WINDOW]


def test_unsorted_and_overlapping_busy_intervals_are_absorbed():
    busy = [
        slot((14, 0), (15, 0)),
        slot((10, 0), (12, 0)),
        slot((11, 0), (11, 30)),   # nested
        slot((11, 45), (12, 30)),  # overlaps the tail of 10-12
    ]

    free = list(TimeSlotFinder().free_slots(WINDOW, busy))

    assert free == [
        slot((9, 0), (10, 0)),
        slot((12, 30), (14, 0)),
        slot((15, 0), (18, 0)),
    ]


def test_gaps_below_minimum_are_dropped():
    busy = [slot((9, 20), (10, 0)), slot((10, 29), (17, 45))]

    free = list(TimeSlotFinder().free_slots(WINDOW, busy))

    # 9:00-9:20 (20m), 10:00-10:29 (29m) and 17:45-18:00 (15m) are all too short
    assert free == []


def test_gap_of_exactly_the_minimum_is_kept():
    busy = [slot((9, 30), (18, 0))]
    assert list(TimeSlotFinder().free_slots(WINDOW, busy)) == [slot((9, 0), (9, 30))]


def test_custom_minimum():
    busy = [slot((10, 0), (11, 0))]
    finder = TimeSlotFinder(min_slot_minutes=90)

    assert list(finder.free_slots(WINDOW, busy)) == [slot((11, 0), (18, 0))]
    assert list(finder.free_slots(WINDOW, busy, min_slot_minutes=60)) == [
        slot((9, 0), (10, 0)),
        slot((11, 0), (18, 0)),
    ]


def test_busy_intervals_reaching_outside_the_window():
    busy = [
        TimeSlot(at(7, 0), at(9, 45)),
        TimeSlot(at(17, 0), at(20, 0)),
    ]

    assert list(TimeSlotFinder().free_slots(WINDOW, busy)) == [slot((9, 45), (17, 0))]


def test_busy_interval_covering_the_whole_window():
    busy = [TimeSlot(at(8, 0), at(19, 0))]
    assert list(TimeSlotFinder().free_slots(WINDOW, busy)) == []


def test_sequence_is_restartable_and_inputs_untouched():
    busy = [slot((13, 0), (13, 30)), slot((10, 0), (11, 0))]
    original = list(busy)

    free = TimeSlotFinder().free_slots(WINDOW, busy)

    assert isinstance(free, FreeSlots)
    assert list(free) == list(free)
    assert busy == original


def test_first_fit_skips_short_slots():
    busy = [slot((10, 0), (11, 0)), slot((13, 0), (13, 30))]
    finder = TimeSlotFinder()

    assert finder.first_fit(WINDOW, busy, timedelta(minutes=90)) == slot((11, 0), (13, 0))
    assert finder.first_fit(WINDOW, busy, timedelta(minutes=600)) is None


def test_time_slot_rejects_empty_or_inverted_ranges():
    with pytest.raises(ValueError):
        TimeSlot(at(10, 0), at(10, 0))
    with pytest.raises(ValueError):
        TimeSlot(at(11, 0), at(10, 0))


def _random_busy(rng):
    busy = []
    for _ in range(rng.randint(0, 8)):
        start = at(8, 0) + timedelta(minutes=5 * rng.randint(0, 130))
        busy.append(TimeSlot(start, start + timedelta(minutes=5 * rng.randint(1, 30))))
    return busy


def test_free_and_busy_time_tile_the_window():
    rng = random.Random(20261019)
    finder = TimeSlotFinder()
    step = timedelta(minutes=5)

    for _ in range(200):
        busy = _random_busy(rng)
        free = list(finder.free_slots(WINDOW, busy))

        for s in free:
            assert WINDOW.contains(s)
            assert s.duration() >= timedelta(minutes=30)
        for a, b in zip(free, free[1:]):
            assert a.end <= b.start

        # Walk the window in 5 minute steps: every step is covered by exactly
        # one of free or busy, unless it sits in a dropped short gap.
        t = WINDOW.start
        while t < WINDOW.end:
            probe = TimeSlot(t, t + step)
            in_free = sum(1 for s in free if s.contains(probe))
            in_busy = any(b.overlaps(probe) for b in busy)
            assert in_free <= 1
            assert not (in_free and in_busy)
            if not in_free and not in_busy:
                gap_start, gap_end = t, t + step
                while gap_start > WINDOW.start and not any(
                        b.overlaps(TimeSlot(gap_start - step, gap_start)) for b in busy):
                    gap_start -= step
                while gap_end < WINDOW.end and not any(
                        b.overlaps(TimeSlot(gap_end, gap_end + step)) for b in busy):
                    gap_end += step
                assert gap_end - gap_start < timedelta(minutes=30)
            t += step
