"""Services for capacity, leave, annual planning and alert logic."""

from .alerts import count_by_priority, generate_alerts
from .annual import compute_annual_planning
from .capacity import compute_capacity, describe_capacity
from .leave import LeaveLedger, count_working_days
from .timeplan import calculate_shift_hours, parse_time_string, weekly_hours_from_enum

__all__ = [
    "compute_capacity",
    "describe_capacity",
    "LeaveLedger",
    "count_working_days",
    "compute_annual_planning",
    "generate_alerts",
    "count_by_priority",
    "calculate_shift_hours",
    "parse_time_string",
    "weekly_hours_from_enum",
]
