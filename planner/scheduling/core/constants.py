"""
Constants shared by the scheduling core.
"""

# Commitment tags
MANUAL = "manual"
AUTO_SCHEDULED = "auto-scheduled"
FOCUS_TIME = "focus-time"

# Work day bounds (local hours)
WORKDAY_START_HOUR = 9
WORKDAY_END_HOUR = 18

# Durations in minutes
MIN_SLOT_MINUTES = 30
DEFAULT_TASK_MINUTES = 60
FOCUS_BLOCK_MINUTES = 120

HORIZON_DAYS = 7

AUTO_SCHEDULED_TITLE = "📋 {title}"
AUTO_SCHEDULED_DESCRIPTION = "Auto-scheduled task: {description}"
FOCUS_TIME_TITLE = "🎯 Focus Time"
FOCUS_TIME_DESCRIPTION = "Protected time for deep work"
