"""
Scheduler service exposing the scheduling core to the API layer.
"""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from .. import config
from ..models import User
from ..scheduling import FocusBlockDetector, FocusTimeProtector, TaskScheduler, TimeSlot, TimeSlotFinder
from ..scheduling.utils.day_windows import local_today, resolve_timezone
from .calendar_store import EventBusySource, EventCommitmentStore, PendingTaskSource

logger = logging.getLogger(__name__)


class SchedulerService:
    """
    Builds the scheduling components for a request and runs them.

    Runs that write commitments are serialized per user so that two requests
    in this process cannot both claim the same free slot. A user's lock is
    dropped from the registry once no run holds or waits on it.
    """

    def __init__(self, horizon_days: int = None, min_slot_minutes: int = None, default_task_minutes: int = None,
                 focus_block_minutes: int = None, workday_hours=None, default_timezone: str = None):
        self.horizon_days = config.SCHEDULING_HORIZON_DAYS if horizon_days is None else horizon_days
        self.min_slot_minutes = config.MIN_SLOT_MINUTES if min_slot_minutes is None else min_slot_minutes
        self.default_task_minutes = config.DEFAULT_TASK_MINUTES if default_task_minutes is None else default_task_minutes
        self.focus_block_minutes = config.FOCUS_BLOCK_MINUTES if focus_block_minutes is None else focus_block_minutes
        if workday_hours is None:
            workday_hours = (config.WORKDAY_START_HOUR, config.WORKDAY_END_HOUR)
        self.workday_hours = workday_hours
        self.default_timezone = default_timezone or config.DEFAULT_TIMEZONE

        self._user_locks: Dict[int, threading.Lock] = {}
        self._lock_holders: Dict[int, int] = {}
        self._registry_lock = threading.Lock()

    @contextmanager
    def user_lock(self, user_id: int):
        """Exclusive execution for one user's scheduling runs."""
        with self._registry_lock:
            lock = self._user_locks.setdefault(user_id, threading.Lock())
            self._lock_holders[user_id] = self._lock_holders.get(user_id, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._registry_lock:
                self._lock_holders[user_id] -= 1
                if not self._lock_holders[user_id]:
                    del self._lock_holders[user_id]
                    del self._user_locks[user_id]

    def _timezone(self, user: User):
        return resolve_timezone(user.timezone, self.default_timezone)

    def _detector(self, db: Session) -> FocusBlockDetector:
        return FocusBlockDetector(
            EventBusySource(db),
            slot_finder=TimeSlotFinder(self.min_slot_minutes),
            horizon_days=self.horizon_days,
            focus_block_minutes=self.focus_block_minutes,
            workday_hours=self.workday_hours,
        )

    def list_focus_suggestions(self, user: User, db: Session, now: Optional[datetime] = None) -> List[TimeSlot]:
        """Candidate focus blocks for the next days, starting today. No writes."""
        tz = self._timezone(user)
        return self._detector(db).find_focus_blocks(user.id, local_today(tz, now), tz)

    def protect_focus_time(self, user: User, db: Session, now: Optional[datetime] = None) -> list:
        """Book a focus time commitment at the start of every focus block."""
        tz = self._timezone(user)
        protector = FocusTimeProtector(self._detector(db), EventCommitmentStore(db))
        with self.user_lock(user.id):
            return protector.protect_focus_time(user.id, local_today(tz, now), tz)

    def auto_schedule_tasks(self, user: User, db: Session, now: Optional[datetime] = None) -> list:
        """Place the user's pending tasks into free time."""
        tz = self._timezone(user)
        now = now or datetime.utcnow()
        scheduler = TaskScheduler(
            EventBusySource(db),
            PendingTaskSource(db),
            EventCommitmentStore(db),
            slot_finder=TimeSlotFinder(self.min_slot_minutes),
            horizon_days=self.horizon_days,
            default_task_minutes=self.default_task_minutes,
            workday_hours=self.workday_hours,
        )
        with self.user_lock(user.id):
            return scheduler.schedule_tasks(user.id, local_today(tz, now), tz, now=now)


# Global scheduler service instance
scheduler_service = SchedulerService()
