"""Events API: the user's commitments, manual or generated."""

from datetime import date as _date, datetime, time, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, Body
from sqlalchemy.orm import Session

from .. import config
from ..database import get_db
from ..models import Event, EventSource, User
from ..schemas import EventOut, EventCreate, EventUpdate
from ..auth import get_current_user
from ..scheduling.utils.day_windows import resolve_timezone, to_naive_utc

router = APIRouter(tags=["events"])

def _get_owned_event(event_id: int, user: User, db: Session) -> Event:
    event = db.query(Event).filter(Event.id == event_id, Event.user_id == user.id).first()
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event

@router.get("/", response_model=list[EventOut])
def list_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(Event).filter(Event.user_id == current_user.id).order_by(Event.start_time.asc()).all()

@router.get("/date_range", response_model=list[EventOut])
def get_events_by_date_range(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    start_date: _date = Query(...),
    end_date: _date = Query(...),
):
    """Events starting between the two dates, both inclusive, in the user's timezone."""
    tz = resolve_timezone(current_user.timezone, config.DEFAULT_TIMEZONE)
    start = to_naive_utc(datetime.combine(start_date, time.min), tz)
    end = to_naive_utc(datetime.combine(end_date + timedelta(days=1), time.min), tz)
    return db.query(Event).filter(
        Event.user_id == current_user.id,
        Event.start_time >= start,
        Event.start_time < end,
    ).order_by(Event.start_time.asc()).all()

@router.post("/", response_model=EventOut)
def create_event(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    event_in: EventCreate = Body(...),
):
    if event_in.end_time <= event_in.start_time:
        raise HTTPException(status_code=400, detail="end_time must be after start_time")

    event = Event(
        user_id=current_user.id,
        title=event_in.title,
        description=event_in.description,
        start_time=event_in.start_time,
        end_time=event_in.end_time,
        source=EventSource.MANUAL,
        is_auto_generated=False,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event

@router.put("/{event_id}", response_model=EventOut)
def update_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    event_in: EventUpdate = Body(...),
):
    """Edit or move an event. Omitted fields keep their value."""
    event = _get_owned_event(event_id, current_user, db)

    changes = event_in.model_dump(exclude_unset=True)
    start = changes.get("start_time", event.start_time)
    end = changes.get("end_time", event.end_time)
    if end <= start:
        raise HTTPException(status_code=400, detail="end_time must be after start_time")

    for field, value in changes.items():
        setattr(event, field, value)
    db.commit()
    db.refresh(event)
    return event

@router.delete("/{event_id}")
def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    event = _get_owned_event(event_id, current_user, db)
    db.delete(event)
    db.commit()
    return {"success": True, "message": "Event deleted"}
