"""
Environment configuration, loaded once from .env.
"""

import os
from dotenv import load_dotenv

from .scheduling.core import constants

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./planner.db")

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))

# Scheduling
WORKDAY_START_HOUR = int(os.getenv("WORKDAY_START_HOUR", constants.WORKDAY_START_HOUR))
WORKDAY_END_HOUR = int(os.getenv("WORKDAY_END_HOUR", constants.WORKDAY_END_HOUR))
MIN_SLOT_MINUTES = int(os.getenv("MIN_SLOT_MINUTES", constants.MIN_SLOT_MINUTES))
DEFAULT_TASK_MINUTES = int(os.getenv("DEFAULT_TASK_MINUTES", constants.DEFAULT_TASK_MINUTES))
FOCUS_BLOCK_MINUTES = int(os.getenv("FOCUS_BLOCK_MINUTES", constants.FOCUS_BLOCK_MINUTES))
SCHEDULING_HORIZON_DAYS = int(os.getenv("SCHEDULING_HORIZON_DAYS", constants.HORIZON_DAYS))
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "UTC")
