"""Annual hours and leave projection per employee."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

import pandas as pd

from workforce.config import DAYS_PER_YEAR, WEEKS_PER_YEAR, StaffingConfig
from workforce.domain.types import AnnualPlanning, LeaveSummary, MonthlyHours, WeeklySchedule


def working_days_per_year(config: StaffingConfig) -> float:
    return max(0.0, float(DAYS_PER_YEAR - config.rest_days_per_week * WEEKS_PER_YEAR - config.annual_leave_days))


def weekdays_per_month(year: int) -> List[int]:
    """Number of Monday-Friday days in each month of `year`."""
    days = pd.bdate_range(date(year, 1, 1), date(year, 12, 31))
    return [int((days.month == month).sum()) for month in range(1, 13)]


def monthly_breakdown(total_hours: float, year: int) -> List[MonthlyHours]:
    """
    Spread an annual total over the months, weighted by weekdays.

    December absorbs the rounding so the months add up to the total.
    """
    weekdays = weekdays_per_month(year)
    all_weekdays = sum(weekdays)
    months: List[MonthlyHours] = []
    allocated = 0.0
    for month, count in enumerate(weekdays, start=1):
        if month == 12:
            hours = round(total_hours - allocated, 2)
        else:
            hours = round(total_hours * count / all_weekdays, 2) if all_weekdays else 0.0
        allocated += hours
        months.append(MonthlyHours(month=month, weekdays=count, hours=hours))
    return months


def compute_annual_planning(
    schedule: WeeklySchedule,
    config: StaffingConfig,
    year: int,
    leave_summary: Optional[LeaveSummary] = None,
    weekly_hours: float | None = None,
) -> AnnualPlanning:
    """
    Project one employee's weekly schedule over a year.

    Args:
        schedule: Current (or applied) weekly schedule
        config: Staffing parameters giving the working days per year
        year: Calendar year for the monthly breakdown
        leave_summary: Leave consumption for that year, if known
        weekly_hours: Override for the scheduled weekly hours (applied totals)

    Returns:
        AnnualPlanning
    """
    days_per_year = working_days_per_year(config)
    days_per_week = config.working_days_per_week
    scheduled = schedule.total_weekly_hours if weekly_hours is None else weekly_hours

    if days_per_week > 0:
        target_annual = schedule.weekly_hours_target / days_per_week * days_per_year
        total_annual = scheduled / days_per_week * days_per_year
    else:
        target_annual = 0.0
        total_annual = 0.0

    total_annual = round(total_annual, 2)
    used = leave_summary.total_days_taken if leave_summary else 0
    remaining = leave_summary.remaining_days if leave_summary else int(config.annual_leave_days)

    return AnnualPlanning(
        employee_id=schedule.employee_id,
        year=year,
        target_annual_hours=round(target_annual, 2),
        total_annual_hours=total_annual,
        working_days_per_year=days_per_year,
        leave_days_used=used,
        leave_days_remaining=remaining,
        monthly_breakdown=monthly_breakdown(total_annual, year),
    )
