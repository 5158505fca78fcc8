"""Headcount calculation for the housekeeping service."""

from __future__ import annotations

import math
from typing import Iterable, List

from workforce.config import DAYS_PER_YEAR, WEEKS_PER_YEAR, StaffingConfig
from workforce.domain.types import CapacityResult, RoomType
from workforce.errors import ConfigurationError
from workforce.logging_config import get_logger

logger = get_logger(__name__)


def safe_ceil(value: float) -> int:
    """Ceiling that ignores float noise (3.0000000001 -> 3)."""
    return int(math.ceil(round(value, 9)))


def total_cleaning_minutes(room_types: Iterable[RoomType]) -> int:
    return sum(room.count * room.cleaning_minutes for room in room_types)


def compute_capacity(room_types: Iterable[RoomType], config: StaffingConfig) -> CapacityResult:
    """
    Convert room inventory and HR parameters into required staff.

    Args:
        room_types: Room categories with count and cleaning minutes
        config: Staffing parameters

    Returns:
        CapacityResult. Configuration problems are listed on
        `configuration_errors`; the derived numbers are clamped instead of
        raising.
    """
    rooms = list(room_types)
    errors: List[ConfigurationError] = list(config.validate())

    for room in rooms:
        if room.count < 0 or room.cleaning_minutes <= 0:
            errors.append(ConfigurationError(
                f"Room type '{room.label}' needs count >= 0 and cleaning minutes > 0 "
                f"(got {room.count} x {room.cleaning_minutes})",
                field="room_types",
            ))
    valid_rooms = [room for room in rooms if room.count >= 0 and room.cleaning_minutes > 0]

    total_minutes = total_cleaning_minutes(valid_rooms)
    total_rooms = sum(room.count for room in valid_rooms)
    daily_hours = total_minutes / 60.0

    # Working days left once weekly rest and annual leave are taken
    raw_days = DAYS_PER_YEAR - config.rest_days_per_week * WEEKS_PER_YEAR - config.annual_leave_days
    working_days = max(0.0, float(raw_days))

    days_per_week = config.working_days_per_week
    if days_per_week > 0 and config.weekly_hours_per_staff > 0:
        working_hours = working_days * (config.weekly_hours_per_staff / days_per_week)
    else:
        working_hours = 0.0
    hours_per_staff_per_day = working_hours / DAYS_PER_YEAR

    if hours_per_staff_per_day > 0:
        minimum_staff = safe_ceil(daily_hours / hours_per_staff_per_day)
    else:
        minimum_staff = 0
        if daily_hours > 0 and not any(e.field == "rest_days_per_week" for e in errors):
            errors.append(ConfigurationError(
                "Staff have no working hours in the year; headcount cannot be computed",
                field="weekly_hours_per_staff",
            ))

    margin = max(0.0, config.safety_margin_pct)
    safety_staff = safe_ceil(minimum_staff * margin / 100.0)
    recommended_staff = minimum_staff + safety_staff

    if config.working_hours_per_staff_per_day > 0:
        staff_on_duty = safe_ceil(total_minutes / (config.working_hours_per_staff_per_day * 60))
    else:
        staff_on_duty = 0

    supplied = recommended_staff * hours_per_staff_per_day
    efficiency = int(round(daily_hours / supplied * 100)) if supplied > 0 else 0

    for error in errors:
        logger.warning("Capacity configuration issue: %s", error)

    return CapacityResult(
        total_cleaning_minutes=total_minutes,
        total_rooms=total_rooms,
        daily_cleaning_hours=round(daily_hours, 4),
        actual_working_days_per_year=working_days,
        actual_working_hours_per_year=round(working_hours, 4),
        hours_per_staff_per_day=round(hours_per_staff_per_day, 4),
        minimum_staff=minimum_staff,
        safety_staff=safety_staff,
        recommended_staff=recommended_staff,
        staff_on_duty_per_day=staff_on_duty,
        efficiency_pct=efficiency,
        configuration_errors=errors,
    )


def describe_capacity(result: CapacityResult, config: StaffingConfig) -> List[str]:
    """Human-readable breakdown of the calculation, one step per line."""
    lines = [
        f"Cleaning load: {result.total_cleaning_minutes} min/day over {result.total_rooms} rooms "
        f"= {result.daily_cleaning_hours:.1f} h/day",
        f"Working days/year: {DAYS_PER_YEAR} - ({config.rest_days_per_week:g} x {WEEKS_PER_YEAR}) "
        f"- {config.annual_leave_days:g} = {result.actual_working_days_per_year:g} days",
        f"Working hours/year: {result.actual_working_days_per_year:g} x "
        f"({config.weekly_hours_per_staff:g} / {config.working_days_per_week:g}) "
        f"= {result.actual_working_hours_per_year:.1f} h",
        f"Minimum staff: ceil({result.daily_cleaning_hours:.1f} / {result.hours_per_staff_per_day:.2f}) "
        f"= {result.minimum_staff}",
        f"Safety margin: ceil({result.minimum_staff} x {config.safety_margin_pct:g}%) = {result.safety_staff}",
        f"Recommended staff: {result.recommended_staff} (efficiency {result.efficiency_pct}%)",
        f"Staff on duty per day: {result.staff_on_duty_per_day} "
        f"({config.working_hours_per_staff_per_day:g} h shifts)",
    ]
    for error in result.configuration_errors:
        lines.append(f"Configuration error: {error}")
    return lines
