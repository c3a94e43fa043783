"""
Greedy task scheduler that places a prioritized backlog into free time.
"""

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional

import pytz

from .constants import (
    AUTO_SCHEDULED, AUTO_SCHEDULED_DESCRIPTION, AUTO_SCHEDULED_TITLE,
    DEFAULT_TASK_MINUTES, HORIZON_DAYS, WORKDAY_END_HOUR, WORKDAY_START_HOUR,
)
from .slot_finder import TimeSlotFinder
from .time_slot import TimeSlot
from ..utils.day_windows import iter_day_windows

logger = logging.getLogger(__name__)

PENDING = "pending"


def task_duration_minutes(task, default_minutes: int = DEFAULT_TASK_MINUTES) -> int:
    """Estimated minutes of a task, or the default when missing or not positive."""
    estimate = getattr(task, "estimated_minutes", None)
    if isinstance(estimate, bool) or not isinstance(estimate, (int, float)) or estimate <= 0:
        return default_minutes
    return int(estimate)


def task_order_key(task):
    """Priority descending, then due date ascending."""
    return (-(task.priority or 0), task.due_at)


# ================================
# INITIALIZATION & SETUP
# ================================

class TaskScheduler:
    """
    One-pass greedy bin-fit of pending tasks into free slots.

    Tasks are processed in priority order and each one takes the earliest
    free slot (earliest day, earliest start) that can hold it. There is no
    backtracking, so processing order is the only fairness mechanism.
    Tasks that fit nowhere in the horizon are skipped.
    """

    def __init__(self, busy_source, task_source, commitment_store, slot_finder: TimeSlotFinder = None,
                 horizon_days: int = HORIZON_DAYS, default_task_minutes: int = DEFAULT_TASK_MINUTES,
                 workday_hours=(WORKDAY_START_HOUR, WORKDAY_END_HOUR)):
        self.busy_source = busy_source
        self.task_source = task_source
        self.commitment_store = commitment_store
        self.slot_finder = slot_finder or TimeSlotFinder()
        self.horizon_days = horizon_days
        self.default_task_minutes = default_task_minutes
        self.workday_hours = workday_hours

# ================================
# TASK SELECTION
# ================================

    def select_tasks(self, user_id, now: datetime) -> list:
        """Pending tasks due in the future, in placement order."""
        tasks = self.task_source.pending_tasks(user_id, now=now)
        selected = [
            task for task in tasks
            if task.status == PENDING and task.due_at is not None and task.due_at >= now
        ]
        selected.sort(key=task_order_key)
        return selected

# ================================
# CORE SCHEDULING LOGIC
# ================================

    def schedule_tasks(self, user_id, today: Optional[date] = None, tz=pytz.UTC, now: Optional[datetime] = None) -> list:
        """Place every schedulable task and return the commitments created."""
        now = now or datetime.utcnow()
        today = today or now.date()

        tasks = self.select_tasks(user_id, now)
        windows = list(iter_day_windows(today, tz, self.horizon_days, self.workday_hours))
        placed: List[TimeSlot] = []
        commitments = []

        for task in tasks:
            duration = timedelta(minutes=task_duration_minutes(task, self.default_task_minutes))
            interval = self._find_placement(user_id, windows, duration, placed)
            if interval is None:
                logger.warning(f"No slot of {duration} for task {task.id} within {self.horizon_days} days, skipping")
                continue

            commitment = self.commitment_store.create(
                user_id,
                interval,
                title=AUTO_SCHEDULED_TITLE.format(title=task.title),
                tag=AUTO_SCHEDULED,
                linked_task_id=task.id,
                description=AUTO_SCHEDULED_DESCRIPTION.format(description=task.description or ""),
            )
            placed.append(interval)
            commitments.append(commitment)
            logger.debug(f"Scheduled task {task.id} at {interval.start} - {interval.end}")

        logger.info(f"Auto-scheduled {len(commitments)} of {len(tasks)} tasks for user {user_id}")
        return commitments

# ================================
# SLOT FINDING
# ================================

    def _find_placement(self, user_id, windows: List[TimeSlot], duration: timedelta,
                        placed: List[TimeSlot]) -> Optional[TimeSlot]:
        """First fitting interval across the horizon, earliest day first."""
        for window in windows:
            busy = list(self.busy_source.busy_intervals(user_id, window))
            # Placements from this run count as busy even if the source lags behind.
            busy.extend(interval for interval in placed if interval.overlaps(window))
            slot = self.slot_finder.first_fit(window, busy, duration)
            if slot is not None:
                return TimeSlot(slot.start, slot.start + duration)
        return None
