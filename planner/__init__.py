"""Planner API: tasks, calendar events, automatic scheduling and focus time."""
