"""Domain types, models and data access layer."""

from .models import AppliedPlanning, Base, Employee, PaidLeave, RoomInventory
from .repositories import (
    AppliedPlanningRepository,
    EmployeeRepository,
    LeaveRepository,
    RoomInventoryRepository,
)
from .types import (
    DAY_NAMES,
    Alert,
    AlertType,
    AnnualPlanning,
    CapacityResult,
    ComplianceLevel,
    DaySlot,
    EmployeeContract,
    LeaveRecord,
    LeaveSummary,
    MonthlyHours,
    Priority,
    RoomType,
    WeeklySchedule,
)

__all__ = [
    "Base",
    "Employee",
    "RoomInventory",
    "PaidLeave",
    "AppliedPlanning",
    "EmployeeRepository",
    "RoomInventoryRepository",
    "LeaveRepository",
    "AppliedPlanningRepository",
    "DAY_NAMES",
    "Alert",
    "AlertType",
    "AnnualPlanning",
    "CapacityResult",
    "ComplianceLevel",
    "DaySlot",
    "EmployeeContract",
    "LeaveRecord",
    "LeaveSummary",
    "MonthlyHours",
    "Priority",
    "RoomType",
    "WeeklySchedule",
]
