from datetime import date as _date, datetime, time, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .. import config
from ..database import get_db
from ..models import Event, EventSource, Task, TaskStatus, User
from ..schemas import FocusAnalytics
from ..auth import get_current_user
from ..scheduling import TimeSlot
from ..scheduling.utils.day_windows import local_today, resolve_timezone, split_minutes_by_tag, to_naive_utc, work_day_window

router = APIRouter(tags=["analytics"])

FOCUS_SOURCES = {EventSource.FOCUS_TIME.value, EventSource.AUTO_SCHEDULED.value}

@router.get("/focus", response_model=FocusAnalytics)
def get_focus_analytics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    day: Optional[_date] = Query(None, description="Day to summarize, defaults to today"),
):
    """Focus vs meeting minutes inside the day's work window, and task completion for the day"""
    tz = resolve_timezone(current_user.timezone, config.DEFAULT_TIMEZONE)
    day = day or local_today(tz)
    window = work_day_window(day, tz, (config.WORKDAY_START_HOUR, config.WORKDAY_END_HOUR))

    events = db.query(Event).filter(
        Event.user_id == current_user.id,
        Event.start_time < window.end,
        Event.end_time > window.start,
    ).all()
    tagged = [(TimeSlot(e.start_time, e.end_time), e.tag) for e in events if e.start_time < e.end_time]
    focus_minutes, meeting_minutes = split_minutes_by_tag(tagged, window, FOCUS_SOURCES)

    total = focus_minutes + meeting_minutes
    focus_ratio = focus_minutes / total if total > 0 else 0.0

    # Whole local calendar day, not just work hours
    day_start = to_naive_utc(datetime.combine(day, time.min), tz)
    day_end = to_naive_utc(datetime.combine(day + timedelta(days=1), time.min), tz)
    tasks = db.query(Task).filter(Task.user_id == current_user.id)
    tasks_completed = tasks.filter(
        Task.status == TaskStatus.COMPLETED,
        Task.updated_at >= day_start,
        Task.updated_at < day_end,
    ).count()
    tasks_planned = tasks.filter(Task.created_at >= day_start, Task.created_at < day_end).count()
    completion_rate = tasks_completed / tasks_planned if tasks_planned > 0 else 0.0

    return {
        "day": day.isoformat(),
        "focus_minutes": round(focus_minutes),
        "meeting_minutes": round(meeting_minutes),
        "focus_ratio": focus_ratio,
        "tasks_completed": tasks_completed,
        "tasks_planned": tasks_planned,
        "productivity_score": (completion_rate * 0.6 + focus_ratio * 0.4) * 100,
    }
