from __future__ import annotations

from datetime import date, datetime, time
from types import SimpleNamespace

from planner.scheduling import TimeSlot

MONDAY = date(2026, 10, 19)


def at(hour: int, minute: int = 0, day: date = MONDAY) -> datetime:
    return datetime.combine(day, time(hour, minute))


def slot(start: tuple, end: tuple, day: date = MONDAY) -> TimeSlot:
    return TimeSlot(at(*start, day=day), at(*end, day=day))


def make_task(task_id, title="Task", estimated_minutes=None, priority=0, due_at=None, status="pending", description=None):
    return SimpleNamespace(
        id=task_id,
        title=title,
        description=description,
        estimated_minutes=estimated_minutes,
        priority=priority,
        due_at=due_at or datetime(2026, 10, 25, 17, 0),
        status=status,
    )


class FakeCalendar:
    """In-memory busy source, task source and commitment store in one object.

    With `reflect_writes` the created commitments show up as busy time, the
    way the database store behaves. Without it the calendar keeps returning
    the same snapshot, like a concurrent run that read before anyone wrote.
    """

    def __init__(self, busy=(), tasks=(), reflect_writes: bool = True, fail_on_create: int | None = None):
        self.busy = list(busy)
        self.tasks = list(tasks)
        self.reflect_writes = reflect_writes
        self.fail_on_create = fail_on_create
        self.created = []
        self.windows_seen = []

    def busy_intervals(self, user_id, window):
        self.windows_seen.append(window)
        return [interval for interval in self.busy if interval.overlaps(window)]

    def pending_tasks(self, user_id, now=None):
        return list(self.tasks)

    def create(self, user_id, interval, title, tag, linked_task_id=None, description=""):
        if self.fail_on_create is not None and len(self.created) + 1 >= self.fail_on_create:
            from planner.errors import DataAccessError
            raise DataAccessError("insert failed")
        commitment = SimpleNamespace(
            user_id=user_id,
            interval=interval,
            start=interval.start,
            end=interval.end,
            title=title,
            tag=tag,
            linked_task_id=linked_task_id,
            description=description,
        )
        self.created.append(commitment)
        if self.reflect_writes:
            self.busy.append(interval)
        return commitment
