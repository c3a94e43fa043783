from pydantic import BaseModel, Field, EmailStr, field_validator
import pytz
from datetime import datetime
from typing import Optional, List
from .models import UserRole, TaskStatus, EventSource

def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Instants are stored as naive UTC; aware input is converted."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(pytz.UTC).replace(tzinfo=None)

# ----------------- User Schemas ---------------------

class UserBase(BaseModel):
    username: str
    email: EmailStr
    timezone: Optional[str] = None

class UserCreate(UserBase):
    password: str

class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    timezone: Optional[str] = None

class UserSchema(UserBase):
    id: int
    is_active: bool
    role: UserRole

    class Config:
        from_attributes = True

class UserLogin(BaseModel):
    username: str
    password: str

class RefreshTokenRequest(BaseModel):
    refresh_token: str

class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str

# ----------------- Task Schemas ---------------------

class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None
    estimated_minutes: Optional[int] = Field(default=None, description="Expected effort in minutes")
    priority: int = 0
    due_at: Optional[datetime] = None

    @field_validator("due_at")
    @classmethod
    def normalize_due_at(cls, value):
        return to_naive_utc(value)

class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    estimated_minutes: Optional[int] = None
    priority: Optional[int] = None
    due_at: Optional[datetime] = None
    status: Optional[TaskStatus] = None

    @field_validator("title", "priority", "status")
    @classmethod
    def reject_null(cls, value):
        # Omit the field to leave it unchanged; these columns cannot be cleared
        if value is None:
            raise ValueError("may not be null")
        return value

    @field_validator("due_at")
    @classmethod
    def normalize_due_at(cls, value):
        return to_naive_utc(value)

class TaskOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    estimated_minutes: Optional[int] = None
    priority: int
    due_at: Optional[datetime] = None
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

# ----------------- Event Schemas ---------------------

class EventCreate(BaseModel):
    title: str
    description: Optional[str] = ""
    start_time: datetime
    end_time: datetime

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_times(cls, value):
        return to_naive_utc(value)

class EventUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @field_validator("title", "start_time", "end_time")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_times(cls, value):
        return to_naive_utc(value)

class EventOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    source: EventSource
    linked_task_id: Optional[int] = None
    is_auto_generated: bool

    class Config:
        from_attributes = True

# ----------------- Scheduling Schemas ---------------------

class FocusBlockOut(BaseModel):
    start: datetime
    end: datetime
    duration: float  # hours

class FocusSuggestions(BaseModel):
    blocks: List[FocusBlockOut]

class ProtectFocusResponse(BaseModel):
    success: bool
    protected: int
    blocks: List[EventOut]

class AutoScheduleResponse(BaseModel):
    success: bool
    scheduled: int
    events: List[EventOut]

class FocusAnalytics(BaseModel):
    day: str
    focus_minutes: int
    meeting_minutes: int
    focus_ratio: float
    tasks_completed: int
    tasks_planned: int
    productivity_score: float
