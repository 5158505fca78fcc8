"""CSV export of schedules, alerts and annual planning."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable

import pandas as pd

from workforce.domain.types import DAY_NAMES, Alert, AnnualPlanning, WeeklySchedule
from workforce.logging_config import get_logger

logger = get_logger(__name__)


def schedules_to_frame(schedules: Iterable[WeeklySchedule]) -> pd.DataFrame:
    """One row per employee, start/end columns per day ('' on rest days)."""
    rows = []
    for schedule in schedules:
        row = {
            "employee_id": schedule.employee_id,
            "employee_name": schedule.employee_name,
            "weekly_hours_target": schedule.weekly_hours_target,
        }
        for name in DAY_NAMES:
            slot = schedule.days[name]
            row[f"{name}_start"] = slot.start if slot.working else ""
            row[f"{name}_end"] = slot.end if slot.working else ""
        row["total_weekly_hours"] = schedule.total_weekly_hours
        rows.append(row)

    columns = ["employee_id", "employee_name", "weekly_hours_target"]
    for name in DAY_NAMES:
        columns += [f"{name}_start", f"{name}_end"]
    columns.append("total_weekly_hours")
    return pd.DataFrame(rows, columns=columns)


def alerts_to_frame(alerts: Iterable[Alert]) -> pd.DataFrame:
    rows = [
        {
            "priority": a.priority.value,
            "type": a.type.value,
            "subject_id": a.subject_id,
            "subject_name": a.subject_name,
            "message": a.message,
            "detail": a.detail,
            "value": a.value,
            "threshold": a.threshold,
            "suggested_hires": a.suggested_hires,
        }
        for a in alerts
    ]
    return pd.DataFrame(
        rows,
        columns=["priority", "type", "subject_id", "subject_name", "message", "detail",
                 "value", "threshold", "suggested_hires"],
    )


def annual_to_frame(planning: Dict[int, AnnualPlanning]) -> pd.DataFrame:
    """Monthly hours per employee, one column per month."""
    rows = []
    for employee_id, plan in planning.items():
        row = {
            "employee_id": employee_id,
            "year": plan.year,
            "target_annual_hours": plan.target_annual_hours,
            "total_annual_hours": plan.total_annual_hours,
            "leave_days_used": plan.leave_days_used,
            "leave_days_remaining": plan.leave_days_remaining,
        }
        for month in plan.monthly_breakdown:
            row[f"m{month.month:02d}"] = month.hours
        rows.append(row)
    return pd.DataFrame(rows)


def export_schedules_csv(schedules: Iterable[WeeklySchedule], csv_path: str | Path) -> int:
    """
    Export weekly schedules to CSV.

    Returns:
        Number of schedules exported
    """
    df = schedules_to_frame(schedules)
    df.to_csv(csv_path, index=False)
    logger.info("Exported %d schedules to %s", len(df), csv_path)
    return len(df)


def export_alerts_csv(alerts: Iterable[Alert], csv_path: str | Path) -> int:
    df = alerts_to_frame(alerts)
    df.to_csv(csv_path, index=False)
    logger.info("Exported %d alerts to %s", len(df), csv_path)
    return len(df)


def export_annual_csv(planning: Dict[int, AnnualPlanning], csv_path: str | Path) -> int:
    df = annual_to_frame(planning)
    df.to_csv(csv_path, index=False)
    logger.info("Exported annual planning of %d employees to %s", len(df), csv_path)
    return len(df)
