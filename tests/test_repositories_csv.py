"""Tests for repositories and CSV import/export."""

from datetime import date

import pandas as pd
import pytest

from workforce.domain.models import Employee
from workforce.domain.repositories import (
    AppliedPlanningRepository,
    EmployeeRepository,
    LeaveRepository,
    RoomInventoryRepository,
)
from workforce.engine.generator import generate
from workforce.errors import ValidationError
from workforce.io.export_csv import export_alerts_csv, export_schedules_csv, schedules_to_frame
from workforce.io.import_csv import (
    import_employees_csv,
    import_leaves_csv,
    import_room_types_csv,
    parse_working_days,
)
from workforce.services.leave import LeaveLedger


def _seed_employee(session, employee_id=1):
    EmployeeRepository.create(
        session,
        Employee(employee_id=employee_id, first_name="Marie", last_name="Dupont", weekly_hours="H35"),
    )


def test_employee_repository_active_filter(db_session):
    """Inactive employees are hidden unless asked for."""
    _seed_employee(db_session, 1)
    EmployeeRepository.create(
        db_session, Employee(employee_id=2, first_name="Old", last_name="Timer", is_active=False)
    )

    assert [e.employee_id for e in EmployeeRepository.get_all(db_session)] == [1]
    assert len(EmployeeRepository.get_all(db_session, active_only=False)) == 2
    assert EmployeeRepository.get_by_id(db_session, 1).working_day_set() == [1, 2, 3, 4, 5]


def test_room_inventory_upsert_and_delete(db_session):
    """Upserting twice updates in place; delete reports success."""
    RoomInventoryRepository.upsert(db_session, "Suite", 2, 45)
    RoomInventoryRepository.upsert(db_session, "Suite", 3, 50)

    rooms = RoomInventoryRepository.get_room_types(db_session)
    assert len(rooms) == 1
    assert rooms[0].count == 3
    assert rooms[0].cleaning_minutes == 50

    assert RoomInventoryRepository.delete(db_session, "Suite") is True
    assert RoomInventoryRepository.delete(db_session, "Suite") is False


def test_leave_repository_round_trip(db_session):
    """Ledger records persist and load back with their day counts."""
    _seed_employee(db_session)
    record = LeaveLedger().add_leave(1, "2025-06-02", "2025-06-06", notes="summer")
    row = LeaveRepository.create_from_record(db_session, record)

    loaded = LeaveRepository.load_records(db_session)
    assert len(loaded) == 1
    assert loaded[0].leave_id == row.id
    assert loaded[0].days_count == 5
    assert loaded[0].start_date == date(2025, 6, 2)
    assert LeaveRepository.get_by_employee(db_session, 1, year=2024) == []

    assert LeaveRepository.delete(db_session, row.id) is True
    assert LeaveRepository.load_records(db_session) == []


def test_applied_planning_upsert(db_session):
    """Saving totals twice for the same year overwrites them."""
    _seed_employee(db_session)
    AppliedPlanningRepository.save_totals(db_session, 2025, {1: 30.0})
    AppliedPlanningRepository.save_totals(db_session, 2025, {1: 35.0}, {1: 1617.0})

    assert AppliedPlanningRepository.get_by_year(db_session, 2025) == {1: 35.0}
    assert AppliedPlanningRepository.get_by_year(db_session, 2024) == {}


def test_parse_working_days():
    """Numbers and day names in any separator are normalized."""
    assert parse_working_days("1;2;3") == "1,2,3"
    assert parse_working_days("Monday|friday") == "1,5"
    assert parse_working_days("6 7") == "6,7"
    with pytest.raises(ValidationError):
        parse_working_days("funday")


def test_import_employees_csv(db_session, tmp_path):
    """Employees CSV fills the roster, upper-casing the hours enum."""
    path = tmp_path / "employees.csv"
    path.write_text(
        "employee_id,first_name,last_name,weekly_hours,working_days,day_start_time\n"
        "1,Marie,Dupont,h35,1;2;3;4;5,10:00\n"
        "2,Lucas,Martin,H39,tuesday|wednesday|thursday|friday|saturday,\n",
        encoding="utf-8",
    )

    assert import_employees_csv(db_session, path) == 2
    lucas = EmployeeRepository.get_by_id(db_session, 2)
    assert lucas.weekly_hours == "H39"
    assert lucas.working_day_set() == [2, 3, 4, 5, 6]
    assert lucas.day_start_time == "09:00"
    assert EmployeeRepository.get_by_id(db_session, 1).weekly_hours == "H35"


def test_import_employees_missing_column(db_session, tmp_path):
    """Required columns are checked before anything is written."""
    path = tmp_path / "employees.csv"
    path.write_text("employee_id,first_name\n1,Marie\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        import_employees_csv(db_session, path)


def test_import_rooms_and_leaves(db_session, tmp_path):
    """Room and leave CSVs go through the repositories and the ledger."""
    _seed_employee(db_session)
    rooms = tmp_path / "rooms.csv"
    rooms.write_text("label,count,cleaning_minutes\nSuite,2,45\nDouble,30,25\n", encoding="utf-8")
    leaves = tmp_path / "leaves.csv"
    leaves.write_text(
        "employee_id,start_date,end_date,notes\n1,2025-06-02,2025-06-06,summer\n1,2025-06-07,2025-06-08,\n",
        encoding="utf-8",
    )

    assert import_room_types_csv(db_session, rooms) == 2
    assert import_leaves_csv(db_session, leaves) == 2

    assert sum(r.load_minutes for r in RoomInventoryRepository.get_room_types(db_session)) == 840
    assert [r.days_count for r in LeaveRepository.load_records(db_session)] == [5, 0]


def test_export_schedules(full_time_contract, tmp_path):
    """One row per employee with start/end columns per day."""
    schedules = generate([full_time_contract], 60)
    frame = schedules_to_frame(schedules)

    assert frame.loc[0, "monday_start"] == "10:00"
    assert frame.loc[0, "saturday_start"] == ""
    assert frame.loc[0, "total_weekly_hours"] == 30.0

    path = tmp_path / "schedules.csv"
    assert export_schedules_csv(schedules, path) == 1
    assert list(pd.read_csv(path)["employee_id"]) == [1]


def test_export_empty_alerts(tmp_path):
    """No alerts still writes a header."""
    path = tmp_path / "alerts.csv"

    assert export_alerts_csv([], path) == 0
    assert "priority" in path.read_text(encoding="utf-8")
