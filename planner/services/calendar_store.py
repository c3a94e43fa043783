"""
Database-backed collaborators for the scheduling core.

Each class wraps one table behind the small interface the core expects.
SQLAlchemy failures are rolled back and re-raised as DataAccessError.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import DataAccessError
from ..models import Event, EventSource, Task, TaskStatus
from ..scheduling.core.time_slot import TimeSlot

logger = logging.getLogger(__name__)


class EventBusySource:
    """Busy intervals: every event of the user overlapping the window."""

    def __init__(self, db: Session):
        self.db = db

    def busy_intervals(self, user_id: int, window: TimeSlot) -> List[TimeSlot]:
        try:
            events = self.db.query(Event).filter(
                Event.user_id == user_id,
                Event.start_time < window.end,
                Event.end_time > window.start,
            ).order_by(Event.start_time.asc()).all()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Failed to read busy intervals for user {user_id}: {exc}")
            raise DataAccessError(f"Could not read busy intervals for user {user_id}") from exc

        # Zero-length or inverted rows cannot occupy time
        return [TimeSlot(e.start_time, e.end_time) for e in events if e.start_time < e.end_time]


class PendingTaskSource:
    """Pending tasks with a due date that has not passed yet."""

    def __init__(self, db: Session):
        self.db = db

    def pending_tasks(self, user_id: int, now: Optional[datetime] = None) -> List[Task]:
        now = now or datetime.utcnow()
        try:
            return self.db.query(Task).filter(
                Task.user_id == user_id,
                Task.status == TaskStatus.PENDING,
                Task.due_at >= now,
            ).order_by(Task.priority.desc(), Task.due_at.asc()).all()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Failed to read pending tasks for user {user_id}: {exc}")
            raise DataAccessError(f"Could not read tasks for user {user_id}") from exc


class EventCommitmentStore:
    """
    Persists commitments as events, one commit per insert.

    There is no overlap or duplicate check and no enclosing transaction:
    commitments written before a failure stay written.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, user_id: int, interval: TimeSlot, title: str, tag: str,
               linked_task_id: Optional[int] = None, description: str = "") -> Event:
        source = EventSource(tag)
        event = Event(
            user_id=user_id,
            title=title,
            description=description,
            start_time=interval.start,
            end_time=interval.end,
            source=source,
            linked_task_id=linked_task_id,
            is_auto_generated=source != EventSource.MANUAL,
        )
        try:
            self.db.add(event)
            self.db.commit()
            self.db.refresh(event)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Failed to create '{tag}' commitment for user {user_id}: {exc}")
            raise DataAccessError(f"Could not create commitment for user {user_id}") from exc
        return event
