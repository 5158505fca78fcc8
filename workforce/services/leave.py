"""Paid-leave ledger: weekday counting and annual compliance."""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

import pandas as pd

from workforce.config import LeavePolicy
from workforce.domain.types import ComplianceLevel, LeaveRecord, LeaveSummary
from workforce.errors import ValidationError
from workforce.logging_config import get_logger

logger = get_logger(__name__)

DateLike = date | str


def to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        stamp = pd.Timestamp(value)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"Invalid date: {value!r}", code="INVALID_DATE") from e
    if pd.isna(stamp):
        raise ValidationError(f"Missing date: {value!r}", code="INVALID_DATE")
    return stamp.date()


def count_working_days(start: DateLike, end: DateLike) -> int:
    """
    Count Monday-Friday days in the inclusive range.

    Public holidays are not excluded. An inverted range counts 0.
    """
    start, end = to_date(start), to_date(end)
    if end < start:
        return 0
    return len(pd.bdate_range(start, end))


def cutoff_date(year: int, month_day: str) -> date:
    month, day = (int(part) for part in month_day.split("-"))
    return date(year, month, day)


def compliance_level(days_taken: int, year: int, as_of: date, policy: LeavePolicy) -> ComplianceLevel:
    if days_taken >= policy.legal_days:
        return ComplianceLevel.COMPLETE
    if as_of >= cutoff_date(year, policy.danger_cutoff) and days_taken < policy.danger_threshold_days:
        return ComplianceLevel.DANGER
    if as_of >= cutoff_date(year, policy.warning_cutoff):
        return ComplianceLevel.WARNING
    return ComplianceLevel.GOOD


def compliance_message(level: ComplianceLevel, days_taken: int, remaining: int, policy: LeavePolicy) -> str:
    if level is ComplianceLevel.COMPLETE:
        return "All paid leave has been taken"
    if level is ComplianceLevel.DANGER:
        return (
            f"Legal risk: {remaining} days not taken "
            f"(at least {policy.danger_threshold_days} days must be taken each year)"
        )
    if level is ComplianceLevel.WARNING:
        return f"{remaining} days still to take before the end of the year"
    return f"{days_taken} of {policy.legal_days} days taken, {remaining} remaining"


class LeaveLedger:
    """
    In-memory record of leave intervals for every employee.

    The ledger owns the day-count computation and the compliance derivation;
    storage is left to the caller (see LeaveRepository).
    """

    def __init__(self, policy: LeavePolicy | None = None, records: Iterable[LeaveRecord] = ()):
        self.policy = policy or LeavePolicy()
        self._records: Dict[int, LeaveRecord] = {}
        self._next_id = 1
        for record in records:
            self._records[record.leave_id] = record
            self._next_id = max(self._next_id, record.leave_id + 1)

    @property
    def records(self) -> List[LeaveRecord]:
        return sorted(self._records.values(), key=lambda r: (r.start_date, r.leave_id))

    def get(self, leave_id: int) -> Optional[LeaveRecord]:
        return self._records.get(leave_id)

    def records_for(self, employee_id: int, year: int | None = None) -> List[LeaveRecord]:
        """Records of one employee, optionally only those overlapping `year`."""
        result = [r for r in self.records if r.employee_id == employee_id]
        if year is not None:
            result = [r for r in result if _overlaps_year(r, year)]
        return result

    def days_taken(self, employee_id: int, year: int, exclude_id: int | None = None) -> int:
        """Weekdays of the employee's leaves falling inside `year`."""
        total = 0
        for record in self.records_for(employee_id, year):
            if record.leave_id == exclude_id:
                continue
            total += _days_in_year(record, year)
        return total

    def _check_entitlement(self, employee_id: int, start: date, end: date, exclude_id: int | None = None) -> None:
        if not self.policy.block_over_entitlement:
            return
        for year in range(start.year, end.year + 1):
            year_start = max(start, date(year, 1, 1))
            year_end = min(end, date(year, 12, 31))
            total = self.days_taken(employee_id, year, exclude_id) + count_working_days(year_start, year_end)
            if total > self.policy.legal_days:
                raise ValidationError(
                    f"Employee {employee_id} cannot take more than {self.policy.legal_days} "
                    f"days of paid leave in {year} (total: {total} days)",
                    code="LEAVE_LIMIT_EXCEEDED",
                )

    def add_leave(
        self,
        employee_id: int,
        start_date: DateLike,
        end_date: DateLike,
        notes: str | None = None,
    ) -> LeaveRecord:
        """
        Record a leave interval.

        Raises:
            ValidationError: If end_date is before start_date, or the yearly
                entitlement would be exceeded while the policy blocks it
        """
        start, end = to_date(start_date), to_date(end_date)
        if end < start:
            raise ValidationError(
                f"Leave end date {end} is before start date {start}",
                code="INVALID_RANGE",
            )
        self._check_entitlement(employee_id, start, end)

        record = LeaveRecord(
            leave_id=self._next_id,
            employee_id=employee_id,
            start_date=start,
            end_date=end,
            days_count=count_working_days(start, end),
            year=start.year,
            notes=notes,
        )
        self._records[record.leave_id] = record
        self._next_id += 1
        logger.info(
            "Leave %s added for employee %s: %s..%s (%s days)",
            record.leave_id, employee_id, start, end, record.days_count,
        )
        return record

    def update_leave(
        self,
        leave_id: int,
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        notes: str | None = None,
    ) -> LeaveRecord:
        """Change a leave's dates or notes; the day count is recomputed."""
        record = self._records.get(leave_id)
        if record is None:
            raise ValidationError(f"Leave {leave_id} not found", code="LEAVE_NOT_FOUND")

        start = to_date(start_date) if start_date is not None else record.start_date
        end = to_date(end_date) if end_date is not None else record.end_date
        if end < start:
            raise ValidationError(
                f"Leave end date {end} is before start date {start}",
                code="INVALID_RANGE",
            )
        self._check_entitlement(record.employee_id, start, end, exclude_id=leave_id)

        record.start_date = start
        record.end_date = end
        record.year = start.year
        record.days_count = count_working_days(start, end)
        if notes is not None:
            record.notes = notes
        return record

    def delete_leave(self, leave_id: int) -> bool:
        """Remove one record. Returns False when the id is unknown."""
        removed = self._records.pop(leave_id, None)
        if removed is None:
            logger.warning("Leave %s not found, nothing deleted", leave_id)
            return False
        logger.info("Leave %s deleted for employee %s", leave_id, removed.employee_id)
        return True

    def get_summary(self, employee_id: int, year: int, as_of: date | None = None) -> LeaveSummary:
        """Days taken, remaining and compliance level for one employee and year."""
        as_of = as_of or date.today()
        taken = self.days_taken(employee_id, year)
        legal = self.policy.legal_days
        remaining = legal - taken
        level = compliance_level(taken, year, as_of, self.policy)
        is_compliant = taken >= self.policy.danger_threshold_days or as_of < cutoff_date(
            year, self.policy.warning_cutoff
        )
        return LeaveSummary(
            employee_id=employee_id,
            year=year,
            total_days_taken=taken,
            legal_days=legal,
            remaining_days=remaining,
            compliance_level=level,
            is_compliant=is_compliant,
            message=compliance_message(level, taken, remaining, self.policy),
        )

    def summaries_for_year(
        self,
        employee_ids: Iterable[int],
        year: int,
        as_of: date | None = None,
    ) -> Dict[int, LeaveSummary]:
        return {emp_id: self.get_summary(emp_id, year, as_of) for emp_id in employee_ids}

    def global_compliance(
        self,
        employee_ids: Iterable[int],
        year: int,
        as_of: date | None = None,
    ) -> Dict[str, int]:
        """Count compliant / non-compliant employees for a year."""
        summaries = self.summaries_for_year(employee_ids, year, as_of)
        compliant = sum(1 for s in summaries.values() if s.is_compliant)
        return {
            "compliant": compliant,
            "non_compliant": len(summaries) - compliant,
            "total": len(summaries),
        }


def _overlaps_year(record: LeaveRecord, year: int) -> bool:
    return record.start_date <= date(year, 12, 31) and record.end_date >= date(year, 1, 1)


def _days_in_year(record: LeaveRecord, year: int) -> int:
    if record.start_date.year == year and record.end_date.year == year:
        return record.days_count
    start = max(record.start_date, date(year, 1, 1))
    end = min(record.end_date, date(year, 12, 31))
    return count_working_days(start, end)
