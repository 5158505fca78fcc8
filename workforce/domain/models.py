"""SQLAlchemy models for the hotel roster, room inventory and paid leave."""

from __future__ import annotations

from datetime import datetime
from typing import List

from sqlalchemy import Boolean, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Employee(Base):
    """Roster entry with the contract fields the schedule generator needs."""

    __tablename__ = "employees"

    employee_id = Column(Integer, primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    contract_type = Column(String(20), nullable=False, default="CDI")  # CDI, CDD, EXTRA
    weekly_hours = Column(String(20), nullable=False, default="H35")  # H35, H39, H35_MODULABLE, H39_MODULABLE
    main_service_id = Column(Integer, nullable=True)
    polyvalent_service_ids = Column(String(200), nullable=True)  # Comma-separated service ids
    working_days = Column(String(20), nullable=False, default="1,2,3,4,5")  # ISO weekdays
    day_start_time = Column(String(5), nullable=False, default="09:00")
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    paid_leaves = relationship("PaidLeave", back_populates="employee", cascade="all, delete-orphan")
    applied_planning = relationship("AppliedPlanning", back_populates="employee", cascade="all, delete-orphan")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def working_day_set(self) -> List[int]:
        if not self.working_days:
            return []
        return sorted({int(part) for part in str(self.working_days).split(",") if part.strip()})

    def polyvalent_service_list(self) -> List[int]:
        if not self.polyvalent_service_ids:
            return []
        return [int(part) for part in str(self.polyvalent_service_ids).split(",") if part.strip()]

    def __repr__(self) -> str:
        return f"<Employee(id={self.employee_id}, name='{self.full_name}', hours='{self.weekly_hours}')>"


class RoomInventory(Base):
    """One room category of the hotel with its cleaning duration."""

    __tablename__ = "room_inventory"

    id = Column(Integer, primary_key=True, autoincrement=True)
    label = Column(String(50), nullable=False, unique=True)
    count = Column(Integer, nullable=False, default=0)
    cleaning_minutes = Column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<RoomInventory(label='{self.label}', count={self.count}, minutes={self.cleaning_minutes})>"


class PaidLeave(Base):
    """Approved paid-leave interval; `days` is the weekday count computed at creation."""

    __tablename__ = "paid_leaves"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_id = Column(Integer, ForeignKey("employees.employee_id"), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    days = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="APPROVED")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    employee = relationship("Employee", back_populates="paid_leaves")

    def __repr__(self) -> str:
        return f"<PaidLeave(id={self.id}, emp={self.employee_id}, {self.start_date}..{self.end_date}, days={self.days})>"


class AppliedPlanning(Base):
    """Weekly totals an operator explicitly applied from the schedule editor."""

    __tablename__ = "applied_planning"
    __table_args__ = (UniqueConstraint("employee_id", "year", name="uix_applied_emp_year"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_id = Column(Integer, ForeignKey("employees.employee_id"), nullable=False)
    year = Column(Integer, nullable=False)
    weekly_hours = Column(Float, nullable=False)
    annual_hours = Column(Float, nullable=True)
    applied_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    employee = relationship("Employee", back_populates="applied_planning")

    def __repr__(self) -> str:
        return f"<AppliedPlanning(emp={self.employee_id}, year={self.year}, weekly={self.weekly_hours})>"
