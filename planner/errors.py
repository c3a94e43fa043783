class PlannerError(Exception):
    """Base class for planner errors."""


class DataAccessError(PlannerError):
    """Reading busy intervals or tasks, or writing a commitment, failed."""
