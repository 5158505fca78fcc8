"""Prioritized alerts and staffing recommendations."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional

from workforce.config import DAYS_PER_YEAR, WEEKS_PER_YEAR, HoursPolicy, LeavePolicy, StaffingConfig
from workforce.domain.types import (
    PRIORITY_ORDER,
    Alert,
    AlertType,
    CapacityResult,
    ComplianceLevel,
    EmployeeContract,
    LeaveSummary,
    Priority,
    WeeklySchedule,
)
from workforce.logging_config import get_logger
from workforce.services.capacity import safe_ceil

logger = get_logger(__name__)


def hours_alert(
    contract: EmployeeContract,
    worked: float,
    policy: HoursPolicy,
) -> Optional[Alert]:
    """Classify one employee's scheduled hours against the contract target."""
    target = contract.weekly_hours_target
    if target <= 0:
        return None

    if worked < target * policy.low_ratio:
        return Alert(
            type=AlertType.HOURS_LOW,
            priority=Priority.MEDIUM,
            subject_id=contract.employee_id,
            subject_name=contract.name,
            message="Insufficient hours",
            detail=f"{worked:g}h / {target:g}h - {target - worked:.1f}h missing",
            value=worked,
            threshold=target,
        )
    if worked > target * policy.high_ratio:
        return Alert(
            type=AlertType.HOURS_HIGH,
            priority=Priority.HIGH,
            subject_id=contract.employee_id,
            subject_name=contract.name,
            message="Overtime scheduled",
            detail=f"{worked:g}h / {target:g}h - {worked - target:.1f}h over contract",
            value=worked,
            threshold=target,
        )
    if worked >= target * policy.compliant_ratio:
        return Alert(
            type=AlertType.COMPLIANT,
            priority=Priority.LOW,
            subject_id=contract.employee_id,
            subject_name=contract.name,
            message="Compliant",
            detail=f"{worked:g}h / {target:g}h - hours within contract",
            value=worked,
            threshold=target,
        )
    return None


def leave_alert(
    summary: LeaveSummary,
    policy: LeavePolicy,
    name: str | None = None,
) -> Optional[Alert]:
    if summary.compliance_level is ComplianceLevel.DANGER:
        return Alert(
            type=AlertType.LEAVE_URGENT,
            priority=Priority.HIGH,
            subject_id=summary.employee_id,
            subject_name=name,
            message="Paid leave insufficient",
            detail=(
                f"{summary.total_days_taken}d taken / {summary.legal_days}d - "
                f"{summary.remaining_days}d still to take"
            ),
            value=summary.total_days_taken,
            threshold=policy.danger_threshold_days,
        )
    if summary.compliance_level is ComplianceLevel.WARNING:
        return Alert(
            type=AlertType.LEAVE_LOW,
            priority=Priority.MEDIUM,
            subject_id=summary.employee_id,
            subject_name=name,
            message="Leave to schedule",
            detail=(
                f"{summary.total_days_taken}d taken / {summary.legal_days}d - "
                f"{summary.remaining_days}d remaining"
            ),
            value=summary.total_days_taken,
            threshold=summary.legal_days,
        )
    return None


def coverage_alert(
    capacity: CapacityResult,
    schedules: Iterable[WeeklySchedule],
    staffing: StaffingConfig,
) -> Optional[Alert]:
    """
    Compare scheduled annual hours with the annual cleaning demand.

    Returns a coverage_gap alert with a recruitment suggestion, or None.
    """
    supply = sum(s.total_weekly_hours for s in schedules) * WEEKS_PER_YEAR
    demand = capacity.daily_cleaning_hours * DAYS_PER_YEAR
    if supply >= demand:
        return None

    deficit = demand - supply
    hours_per_hire = staffing.weekly_hours_per_staff * WEEKS_PER_YEAR
    hires = safe_ceil(deficit / hours_per_hire) if hours_per_hire > 0 else None
    suggestion = f" - recruit {hires} more employee(s)" if hires is not None else ""

    return Alert(
        type=AlertType.COVERAGE_GAP,
        priority=Priority.HIGH,
        subject_id=None,
        message="Cleaning demand not covered",
        detail=f"{supply:.0f}h scheduled / {demand:.0f}h needed per year, {deficit:.0f}h short{suggestion}",
        value=round(supply, 2),
        threshold=round(demand, 2),
        suggested_hires=hires,
    )


def sort_alerts(alerts: Iterable[Alert]) -> List[Alert]:
    """Stable sort HIGH -> MEDIUM -> LOW."""
    return sorted(alerts, key=lambda a: PRIORITY_ORDER[a.priority])


def generate_alerts(
    capacity: Optional[CapacityResult],
    schedules: Iterable[WeeklySchedule],
    leave_summaries: Mapping[int, LeaveSummary] | Iterable[LeaveSummary],
    contracts: Iterable[EmployeeContract],
    staffing: StaffingConfig | None = None,
    hours_policy: HoursPolicy | None = None,
    leave_policy: LeavePolicy | None = None,
) -> List[Alert]:
    """
    Regenerate the full alert list from scratch.

    Args:
        capacity: Capacity result for the cleaning service (None skips coverage)
        schedules: Current weekly schedules
        leave_summaries: Per-employee leave summaries (mapping or iterable)
        contracts: Roster contracts giving targets and names
        staffing: Staffing parameters (recruitment suggestion)
        hours_policy: Weekly hours thresholds
        leave_policy: Leave thresholds

    Returns:
        Alerts sorted by priority, otherwise in generation order
    """
    staffing = staffing or StaffingConfig()
    hours_policy = hours_policy or HoursPolicy()
    leave_policy = leave_policy or LeavePolicy()

    schedules = list(schedules)
    contracts = list(contracts)
    if isinstance(leave_summaries, Mapping):
        summaries = list(leave_summaries.values())
    else:
        summaries = list(leave_summaries)

    names: Dict[int, str] = {c.employee_id: c.name for c in contracts}
    worked_by_employee = {s.employee_id: s.total_weekly_hours for s in schedules}

    alerts: List[Alert] = []

    for summary in summaries:
        alert = leave_alert(summary, leave_policy, names.get(summary.employee_id))
        if alert is not None:
            alerts.append(alert)

    for contract in contracts:
        worked = worked_by_employee.get(contract.employee_id, 0.0)
        alert = hours_alert(contract, worked, hours_policy)
        if alert is not None:
            alerts.append(alert)

    if capacity is not None:
        alert = coverage_alert(capacity, schedules, staffing)
        if alert is not None:
            alerts.append(alert)

    result = sort_alerts(alerts)
    logger.debug("Generated %d alerts", len(result))
    return result


def count_by_priority(alerts: Iterable[Alert]) -> Dict[str, int]:
    alerts = list(alerts)
    counts = {priority.value.lower(): 0 for priority in Priority}
    for alert in alerts:
        counts[alert.priority.value.lower()] += 1
    counts["total"] = len(alerts)
    return counts
