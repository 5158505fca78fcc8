"""Value types exchanged by the planning components."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from workforce.errors import ConfigurationError

DAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


@dataclass(frozen=True)
class RoomType:
    label: str
    count: int
    cleaning_minutes: int

    @property
    def load_minutes(self) -> int:
        return self.count * self.cleaning_minutes


@dataclass(frozen=True)
class CapacityResult:
    """Derived headcount figures; recomputed on every room or config change."""

    total_cleaning_minutes: int
    total_rooms: int
    daily_cleaning_hours: float
    actual_working_days_per_year: float
    actual_working_hours_per_year: float
    hours_per_staff_per_day: float
    minimum_staff: int
    safety_staff: int
    recommended_staff: int
    staff_on_duty_per_day: int
    efficiency_pct: int
    configuration_errors: List[ConfigurationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.configuration_errors


@dataclass(frozen=True)
class EmployeeContract:
    employee_id: int
    name: str
    weekly_hours_target: float
    working_days: FrozenSet[int]  # ISO weekdays, 1 = Monday
    day_start: str = "09:00"


@dataclass
class DaySlot:
    start: Optional[str] = None
    end: Optional[str] = None
    working: bool = False


@dataclass
class WeeklySchedule:
    employee_id: int
    employee_name: str
    weekly_hours_target: float
    days: Dict[str, DaySlot]
    total_weekly_hours: float = 0.0
    warnings: List[str] = field(default_factory=list)

    def working_day_names(self) -> List[str]:
        return [name for name in DAY_NAMES if self.days[name].working]


@dataclass(frozen=True)
class MonthlyHours:
    month: int
    weekdays: int
    hours: float


@dataclass(frozen=True)
class AnnualPlanning:
    employee_id: int
    year: int
    target_annual_hours: float
    total_annual_hours: float
    working_days_per_year: float
    leave_days_used: int
    leave_days_remaining: int
    monthly_breakdown: List[MonthlyHours]


@dataclass
class LeaveRecord:
    leave_id: int
    employee_id: int
    start_date: date
    end_date: date
    days_count: int
    year: int
    notes: Optional[str] = None
    status: str = "APPROVED"


class ComplianceLevel(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    DANGER = "danger"
    COMPLETE = "complete"


@dataclass(frozen=True)
class LeaveSummary:
    employee_id: int
    year: int
    total_days_taken: int
    legal_days: int
    remaining_days: int
    compliance_level: ComplianceLevel
    is_compliant: bool
    message: str


class AlertType(str, Enum):
    COVERAGE_GAP = "coverage_gap"
    HOURS_LOW = "hours_low"
    HOURS_HIGH = "hours_high"
    LEAVE_LOW = "leave_low"
    LEAVE_URGENT = "leave_urgent"
    COMPLIANT = "compliant"


class Priority(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


PRIORITY_ORDER = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


@dataclass(frozen=True)
class Alert:
    type: AlertType
    priority: Priority
    subject_id: Optional[int]
    message: str
    detail: str
    value: Optional[float] = None
    threshold: Optional[float] = None
    subject_name: Optional[str] = None
    suggested_hires: Optional[int] = None
