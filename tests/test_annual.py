"""Tests for annual hours projection."""

from datetime import date

import pytest

from workforce.config import StaffingConfig
from workforce.engine.generator import build_schedule
from workforce.services.annual import compute_annual_planning, monthly_breakdown, weekdays_per_month
from workforce.services.leave import LeaveLedger


def test_weekdays_per_month_2025():
    """2025 has 261 weekdays, 23 of them in January."""
    weekdays = weekdays_per_month(2025)

    assert len(weekdays) == 12
    assert weekdays[0] == 23
    assert sum(weekdays) == 261


def test_monthly_breakdown_adds_up():
    """December absorbs rounding so the months sum to the total."""
    months = monthly_breakdown(1386.0, 2025)

    assert [m.month for m in months] == list(range(1, 13))
    assert sum(m.hours for m in months) == pytest.approx(1386.0)


def test_annual_planning_from_schedule(full_time_contract):
    """30h/week over 5 days and 231 working days gives 1386h against 1617h."""
    schedule = build_schedule(full_time_contract, 60)
    plan = compute_annual_planning(schedule, StaffingConfig(), 2025)

    assert plan.working_days_per_year == 231
    assert plan.target_annual_hours == 1617.0
    assert plan.total_annual_hours == 1386.0
    assert plan.leave_days_used == 0
    assert plan.leave_days_remaining == 30


def test_annual_planning_uses_applied_hours(full_time_contract):
    """Applied weekly totals override the schedule's own total."""
    schedule = build_schedule(full_time_contract, 60)
    plan = compute_annual_planning(schedule, StaffingConfig(), 2025, weekly_hours=35.0)

    assert plan.total_annual_hours == 1617.0


def test_annual_planning_reports_leave(full_time_contract):
    """Leave consumption comes from the ledger summary."""
    ledger = LeaveLedger()
    ledger.add_leave(1, "2025-06-02", "2025-06-06")
    summary = ledger.get_summary(1, 2025, as_of=date(2025, 7, 1))

    plan = compute_annual_planning(build_schedule(full_time_contract, 60), StaffingConfig(), 2025, summary)

    assert plan.leave_days_used == 5
    assert plan.leave_days_remaining == 25
