from datetime import datetime, timedelta

import pytest
import pytz

from planner.errors import DataAccessError
from planner.scheduling import AUTO_SCHEDULED, TaskScheduler, TimeSlot, task_duration_minutes

from helpers import MONDAY, FakeCalendar, at, make_task, slot

NOW = at(8, 0)


def run(calendar, **kwargs):
    scheduler = TaskScheduler(calendar, calendar, calendar, **kwargs)
    return scheduler.schedule_tasks(1, today=MONDAY, tz=pytz.UTC, now=NOW)


def test_task_skips_slot_that_is_too_short():
    calendar = FakeCalendar(
        busy=[slot((10, 0), (11, 0)), slot((13, 0), (13, 30))],
        tasks=[make_task(7, title="Write report", estimated_minutes=90, priority=5,
                         due_at=at(17, 0) + timedelta(days=1), description="Q3 numbers")],
    )

    [commitment] = run(calendar)

    assert commitment.interval == slot((11, 0), (12, 30))
    assert commitment.tag == AUTO_SCHEDULED
    assert commitment.linked_task_id == 7
    assert commitment.title == "📋 Write report"
    assert commitment.description == "Auto-scheduled task: Q3 numbers"


def test_later_tasks_see_earlier_placements():
    calendar = FakeCalendar(
        busy=[slot((10, 0), (11, 0)), slot((13, 0), (13, 30))],
        tasks=[make_task(1, estimated_minutes=90, priority=3), make_task(2, estimated_minutes=90, priority=2)],
    )

    first, second = run(calendar)

    assert first.interval == slot((11, 0), (12, 30))
    assert second.interval == slot((13, 30), (15, 0))


def test_placements_count_even_when_the_source_does_not_reflect_them():
    calendar = FakeCalendar(
        tasks=[make_task(1, estimated_minutes=120, priority=2), make_task(2, estimated_minutes=120, priority=1)],
        reflect_writes=False,
    )

    first, second = run(calendar)

    assert first.interval == slot((9, 0), (11, 0))
    assert second.interval == slot((11, 0), (13, 0))


def test_order_is_priority_then_due_date():
    calendar = FakeCalendar(tasks=[
        make_task(1, priority=1, due_at=at(12, 0, day=MONDAY + timedelta(days=1))),
        make_task(2, priority=3, due_at=at(12, 0, day=MONDAY + timedelta(days=5))),
        make_task(3, priority=3, due_at=at(12, 0, day=MONDAY + timedelta(days=2))),
    ])

    commitments = run(calendar)

    assert [c.linked_task_id for c in commitments] == [3, 2, 1]
    assert [c.start for c in commitments] == [at(9, 0), at(10, 0), at(11, 0)]


def test_missing_or_invalid_estimate_defaults_to_an_hour():
    calendar = FakeCalendar(tasks=[
        make_task(1, estimated_minutes=None, priority=3),
        make_task(2, estimated_minutes=0, priority=2),
        make_task(3, estimated_minutes=45, priority=1),
    ])

    commitments = run(calendar)

    assert [c.interval.duration_minutes() for c in commitments] == [60, 60, 45]


def test_task_duration_minutes():
    assert task_duration_minutes(make_task(1, estimated_minutes=None)) == 60
    assert task_duration_minutes(make_task(1, estimated_minutes=-15)) == 60
    assert task_duration_minutes(make_task(1, estimated_minutes=150)) == 150
    assert task_duration_minutes(make_task(1), default_minutes=25) == 25


def test_full_day_moves_task_to_next_day():
    calendar = FakeCalendar(
        busy=[slot((9, 0), (17, 0))],
        tasks=[make_task(1, estimated_minutes=90)],
    )

    [commitment] = run(calendar)

    tuesday = MONDAY + timedelta(days=1)
    assert commitment.interval == slot((9, 0), (10, 30), day=tuesday)


def test_task_that_fits_nowhere_is_skipped():
    calendar = FakeCalendar(tasks=[
        make_task(1, estimated_minutes=600, priority=9),
        make_task(2, estimated_minutes=30, priority=1),
    ])

    commitments = run(calendar)

    assert [c.linked_task_id for c in commitments] == [2]


def test_horizon_is_seven_days_from_today():
    calendar = FakeCalendar(tasks=[make_task(1, estimated_minutes=600)])

    run(calendar)

    days = sorted({w.start.date() for w in calendar.windows_seen})
    assert days == [MONDAY + timedelta(days=i) for i in range(7)]


def test_only_pending_tasks_with_future_due_date_are_scheduled():
    calendar = FakeCalendar(tasks=[
        make_task(1, status="completed"),
        make_task(2, due_at=NOW - timedelta(minutes=1)),
        make_task(3),
    ])
    calendar.tasks.append(make_task(4))
    calendar.tasks[-1].due_at = None

    commitments = run(calendar)

    assert [c.linked_task_id for c in commitments] == [3]


def test_long_task_can_be_starved_by_an_earlier_placement():
    # Only Monday 9:00-10:30 is free all week. The first task takes the front
    # of it, so the 90 minute task processed next no longer fits anywhere.
    busy = [slot((10, 30), (18, 0))]
    busy += [slot((9, 0), (18, 0), day=MONDAY + timedelta(days=i)) for i in range(1, 7)]
    calendar = FakeCalendar(busy=busy, tasks=[
        make_task(1, estimated_minutes=30, priority=5),
        make_task(2, estimated_minutes=90, priority=4),
    ])

    commitments = run(calendar)

    assert [c.linked_task_id for c in commitments] == [1]
    assert commitments[0].interval == slot((9, 0), (9, 30))


def test_task_status_is_not_changed():
    task = make_task(1)
    calendar = FakeCalendar(tasks=[task])

    run(calendar)

    assert task.status == "pending"


def test_data_access_error_aborts_run_without_rollback():
    calendar = FakeCalendar(
        tasks=[make_task(1, priority=3), make_task(2, priority=2), make_task(3, priority=1)],
        fail_on_create=2,
    )

    with pytest.raises(DataAccessError):
        run(calendar)

    assert [c.linked_task_id for c in calendar.created] == [1]


def test_work_day_is_bounded_in_the_users_timezone():
    calendar = FakeCalendar(tasks=[make_task(1, estimated_minutes=60)])
    scheduler = TaskScheduler(calendar, calendar, calendar)

    [commitment] = scheduler.schedule_tasks(1, today=MONDAY, tz=pytz.timezone("Asia/Seoul"), now=datetime(2026, 10, 18))

    # 09:00 in Seoul is midnight UTC
    assert commitment.interval == TimeSlot(at(0, 0), at(1, 0))
