"""Repository classes for data access."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from .models import AppliedPlanning, Employee, PaidLeave, RoomInventory
from .types import LeaveRecord, RoomType


class EmployeeRepository:
    """Repository for roster data access."""

    @staticmethod
    def get_all(session: Session, active_only: bool = True) -> List[Employee]:
        """Get all employees, ordered by id."""
        query = session.query(Employee)
        if active_only:
            query = query.filter(Employee.is_active.is_(True))
        return query.order_by(Employee.employee_id).all()

    @staticmethod
    def get_by_id(session: Session, employee_id: int) -> Optional[Employee]:
        """Get employee by ID."""
        return session.query(Employee).filter(Employee.employee_id == employee_id).first()

    @staticmethod
    def get_by_service(session: Session, service_id: int) -> List[Employee]:
        """Get all active employees whose main service is `service_id`."""
        return (
            session.query(Employee)
            .filter(Employee.main_service_id == service_id, Employee.is_active.is_(True))
            .order_by(Employee.employee_id)
            .all()
        )

    @staticmethod
    def create(session: Session, employee: Employee) -> Employee:
        """Create a new employee."""
        session.add(employee)
        session.commit()
        session.refresh(employee)
        return employee

    @staticmethod
    def bulk_create(session: Session, employees: List[Employee]) -> None:
        """Create multiple employees."""
        session.add_all(employees)
        session.commit()


class RoomInventoryRepository:
    """Repository for the housekeeping room inventory."""

    @staticmethod
    def get_all(session: Session) -> List[RoomInventory]:
        return session.query(RoomInventory).order_by(RoomInventory.id).all()

    @staticmethod
    def get_room_types(session: Session) -> List[RoomType]:
        """Inventory rows as core RoomType values."""
        return [
            RoomType(label=row.label, count=int(row.count), cleaning_minutes=int(row.cleaning_minutes))
            for row in RoomInventoryRepository.get_all(session)
        ]

    @staticmethod
    def upsert(session: Session, label: str, count: int, cleaning_minutes: int) -> RoomInventory:
        """Create the room category or update its count and duration."""
        row = session.query(RoomInventory).filter(RoomInventory.label == label).first()
        if row is None:
            row = RoomInventory(label=label, count=count, cleaning_minutes=cleaning_minutes)
            session.add(row)
        else:
            row.count = count
            row.cleaning_minutes = cleaning_minutes
        session.commit()
        session.refresh(row)
        return row

    @staticmethod
    def delete(session: Session, label: str) -> bool:
        count = session.query(RoomInventory).filter(RoomInventory.label == label).delete(synchronize_session=False)
        session.commit()
        return count > 0


class LeaveRepository:
    """Repository for paid-leave records."""

    @staticmethod
    def get_all(session: Session) -> List[PaidLeave]:
        return session.query(PaidLeave).order_by(PaidLeave.start_date).all()

    @staticmethod
    def get_by_id(session: Session, leave_id: int) -> Optional[PaidLeave]:
        return session.query(PaidLeave).filter(PaidLeave.id == leave_id).first()

    @staticmethod
    def get_by_employee(session: Session, employee_id: int, year: int | None = None) -> List[PaidLeave]:
        """Get an employee's leaves, optionally restricted to one year."""
        query = session.query(PaidLeave).filter(PaidLeave.employee_id == employee_id)
        if year is not None:
            query = query.filter(PaidLeave.year == year)
        return query.order_by(PaidLeave.start_date).all()

    @staticmethod
    def create_from_record(session: Session, record: LeaveRecord) -> PaidLeave:
        """Persist a LeaveRecord produced by the ledger. The stored row gets its own id."""
        row = PaidLeave(
            employee_id=record.employee_id,
            start_date=record.start_date,
            end_date=record.end_date,
            days=record.days_count,
            year=record.year,
            status=record.status,
            notes=record.notes,
        )
        session.add(row)
        session.commit()
        session.refresh(row)
        return row

    @staticmethod
    def delete(session: Session, leave_id: int) -> bool:
        """Delete one leave. Returns False when the id is unknown."""
        count = session.query(PaidLeave).filter(PaidLeave.id == leave_id).delete(synchronize_session=False)
        session.commit()
        return count > 0

    @staticmethod
    def to_record(row: PaidLeave) -> LeaveRecord:
        return LeaveRecord(
            leave_id=row.id,
            employee_id=row.employee_id,
            start_date=row.start_date,
            end_date=row.end_date,
            days_count=row.days,
            year=row.year,
            notes=row.notes,
            status=row.status,
        )

    @staticmethod
    def load_records(session: Session) -> List[LeaveRecord]:
        return [LeaveRepository.to_record(row) for row in LeaveRepository.get_all(session)]


class AppliedPlanningRepository:
    """Repository for weekly totals applied from the schedule editor."""

    @staticmethod
    def get_by_year(session: Session, year: int) -> Dict[int, float]:
        rows = session.query(AppliedPlanning).filter(AppliedPlanning.year == year).all()
        return {row.employee_id: row.weekly_hours for row in rows}

    @staticmethod
    def save_totals(
        session: Session,
        year: int,
        totals: Dict[int, float],
        annual_hours: Dict[int, float] | None = None,
    ) -> int:
        """
        Upsert applied weekly totals for a year.

        Returns:
            Number of employees written
        """
        annual_hours = annual_hours or {}
        now = datetime.utcnow()
        for employee_id, weekly in totals.items():
            row = (
                session.query(AppliedPlanning)
                .filter(AppliedPlanning.employee_id == employee_id, AppliedPlanning.year == year)
                .first()
            )
            if row is None:
                row = AppliedPlanning(employee_id=employee_id, year=year)
                session.add(row)
            row.weekly_hours = float(weekly)
            row.annual_hours = annual_hours.get(employee_id)
            row.applied_at = now
        session.commit()
        return len(totals)
