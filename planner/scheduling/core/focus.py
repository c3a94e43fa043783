"""
Focus time detection and protection.
"""

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional

import pytz

from .constants import (
    FOCUS_BLOCK_MINUTES, FOCUS_TIME, FOCUS_TIME_DESCRIPTION, FOCUS_TIME_TITLE,
    HORIZON_DAYS, WORKDAY_END_HOUR, WORKDAY_START_HOUR,
)
from .slot_finder import TimeSlotFinder
from .time_slot import TimeSlot
from ..utils.day_windows import iter_day_windows

logger = logging.getLogger(__name__)


class FocusBlockDetector:
    """Finds free slots long enough for deep work. Read only."""

    def __init__(self, busy_source, slot_finder: TimeSlotFinder = None, horizon_days: int = HORIZON_DAYS,
                 focus_block_minutes: int = FOCUS_BLOCK_MINUTES,
                 workday_hours=(WORKDAY_START_HOUR, WORKDAY_END_HOUR)):
        self.busy_source = busy_source
        self.slot_finder = slot_finder or TimeSlotFinder()
        self.horizon_days = horizon_days
        self.focus_block_minutes = focus_block_minutes
        self.workday_hours = workday_hours

    def find_focus_blocks(self, user_id, week_start: date, tz=pytz.UTC) -> List[TimeSlot]:
        """
        Free slots of at least `focus_block_minutes` over the days starting at
        `week_start`, in day order then slot order. The range is not aligned
        to calendar weeks.
        """
        min_duration = timedelta(minutes=self.focus_block_minutes)
        blocks = []
        for window in iter_day_windows(week_start, tz, self.horizon_days, self.workday_hours):
            busy = self.busy_source.busy_intervals(user_id, window)
            blocks.extend(self.slot_finder.long_slots(window, busy, min_duration))
        logger.debug(f"Found {len(blocks)} focus blocks for user {user_id} from {week_start}")
        return blocks


class FocusTimeProtector:
    """
    Books a fixed-length focus commitment at the start of every focus block.

    Blocks longer than the focus length are truncated: only the first
    `focus_block_minutes` are booked. Runs are not deduplicated against
    focus time booked by earlier runs.
    """

    def __init__(self, detector: FocusBlockDetector, commitment_store, focus_block_minutes: int = None):
        self.detector = detector
        self.commitment_store = commitment_store
        if focus_block_minutes is None:
            focus_block_minutes = detector.focus_block_minutes
        self.focus_block_minutes = focus_block_minutes

    def protect_focus_time(self, user_id, today: Optional[date] = None, tz=pytz.UTC) -> list:
        today = today or datetime.utcnow().date()
        length = timedelta(minutes=self.focus_block_minutes)

        commitments = []
        for block in self.detector.find_focus_blocks(user_id, today, tz):
            commitment = self.commitment_store.create(
                user_id,
                TimeSlot(block.start, block.start + length),
                title=FOCUS_TIME_TITLE,
                tag=FOCUS_TIME,
                linked_task_id=None,
                description=FOCUS_TIME_DESCRIPTION,
            )
            commitments.append(commitment)

        logger.info(f"Protected {len(commitments)} focus blocks for user {user_id}")
        return commitments
