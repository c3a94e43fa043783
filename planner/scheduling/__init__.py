"""
Planner Scheduling Core

Free time computation, greedy task placement and focus time protection.
Persistence is injected through collaborator objects, so the core can run
against the database services or plain in-memory fakes.
"""

from .core.time_slot import TimeSlot
from .core.slot_finder import FreeSlots, TimeSlotFinder
from .core.scheduler import TaskScheduler, task_duration_minutes
from .core.focus import FocusBlockDetector, FocusTimeProtector
from .core.constants import AUTO_SCHEDULED, FOCUS_TIME, MANUAL

__version__ = "1.0.0"
