"""Expand employee contracts into canonical weekly schedules."""

from __future__ import annotations

from typing import Iterable, List

from workforce.domain.models import Employee
from workforce.domain.types import DAY_NAMES, DaySlot, EmployeeContract, WeeklySchedule
from workforce.errors import ValidationError
from workforce.logging_config import get_logger
from workforce.services.timeplan import (
    MINUTES_PER_DAY,
    calculate_shift_hours,
    format_minutes,
    to_minutes,
    weekly_hours_from_enum,
)

logger = get_logger(__name__)

LATEST_END_MINUTES = MINUTES_PER_DAY - 1  # 23:59


def contract_from_employee(employee: Employee, default_day_start: str = "09:00") -> EmployeeContract:
    """Map a roster row (weekly-hours enum, day list) to a generator contract."""
    return EmployeeContract(
        employee_id=int(employee.employee_id),
        name=employee.full_name,
        weekly_hours_target=weekly_hours_from_enum(employee.weekly_hours),
        working_days=frozenset(employee.working_day_set()),
        day_start=employee.day_start_time or default_day_start,
    )


def build_schedule(contract: EmployeeContract, break_minutes: int) -> WeeklySchedule:
    """
    Build one employee's week.

    Each working day gets the same net duration:
        net = (weekly_target * 60 - break * n_days) / n_days
    and ends at start + net + break (the break sits inside the shift).
    """
    working_days = sorted(d for d in contract.working_days if 1 <= d <= 7)
    warnings: List[str] = []
    days = {name: DaySlot() for name in DAY_NAMES}

    if len(working_days) != len(contract.working_days):
        warnings.append(f"Ignored invalid weekday numbers in contract of {contract.name}")

    if not working_days:
        warnings.append(f"{contract.name} has no working days; the whole week is rest")
        logger.warning("Employee %s has no working days", contract.employee_id)
        return WeeklySchedule(
            employee_id=contract.employee_id,
            employee_name=contract.name,
            weekly_hours_target=contract.weekly_hours_target,
            days=days,
            total_weekly_hours=0.0,
            warnings=warnings,
        )

    n_days = len(working_days)
    net_minutes = (contract.weekly_hours_target * 60 - break_minutes * n_days) / n_days
    if net_minutes < 0:
        warnings.append(
            f"Break of {break_minutes} min leaves no working time for a "
            f"{contract.weekly_hours_target:g} h week over {n_days} days; net time set to 0"
        )
        logger.warning(
            "Employee %s: break %s min exceeds daily share of %s h/week",
            contract.employee_id, break_minutes, contract.weekly_hours_target,
        )
        net_minutes = 0.0

    try:
        start = to_minutes(contract.day_start)
    except ValueError as e:
        raise ValidationError(
            f"Invalid day start {contract.day_start!r} for employee {contract.employee_id}",
            code="INVALID_TIME",
        ) from e
    end = start + int(round(net_minutes)) + break_minutes
    if end > LATEST_END_MINUTES:
        warnings.append(f"Shift of {contract.name} would end after midnight; capped at 23:59")
        end = LATEST_END_MINUTES

    for weekday in working_days:
        days[DAY_NAMES[weekday - 1]] = DaySlot(
            start=format_minutes(start),
            end=format_minutes(end),
            working=True,
        )

    # Total of the emitted slots, capped ones included
    total = round(
        sum(calculate_shift_hours(slot.start, slot.end, break_minutes) for slot in days.values() if slot.working),
        2,
    )

    return WeeklySchedule(
        employee_id=contract.employee_id,
        employee_name=contract.name,
        weekly_hours_target=contract.weekly_hours_target,
        days=days,
        total_weekly_hours=total,
        warnings=warnings,
    )


def generate(contracts: Iterable[EmployeeContract], break_minutes: int) -> List[WeeklySchedule]:
    """
    Generate the weekly schedule of every contract, in input order.

    Args:
        contracts: Roster contracts
        break_minutes: Daily break included in every working shift

    Returns:
        One WeeklySchedule per contract

    Raises:
        ValidationError: If break_minutes is negative
    """
    if break_minutes < 0:
        raise ValidationError(f"break_minutes must be >= 0, got {break_minutes}", code="INVALID_BREAK")

    schedules = [build_schedule(contract, break_minutes) for contract in contracts]
    logger.debug("Generated %d weekly schedules (break %d min)", len(schedules), break_minutes)
    return schedules
