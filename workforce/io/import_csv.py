"""CSV import utilities to load roster, room and leave data into the database."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List

import pandas as pd
from sqlalchemy.orm import Session

from workforce.domain.models import Employee
from workforce.domain.repositories import LeaveRepository, RoomInventoryRepository
from workforce.domain.types import DAY_NAMES
from workforce.errors import ValidationError
from workforce.logging_config import get_logger
from workforce.services.leave import LeaveLedger
from workforce.services.timeplan import normalize_day, to_minutes

logger = get_logger(__name__)

_DAY_SEPARATORS = re.compile(r"[,;|\s]+")


def _read_csv(csv_path: str | Path) -> pd.DataFrame:
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    return df


def _require_columns(df: pd.DataFrame, columns: List[str], csv_path: str | Path) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValidationError(f"{csv_path}: missing column(s) {', '.join(missing)}", code="INVALID_CSV")


def parse_working_days(value: str) -> str:
    """
    Normalize a working-days cell to the stored "1,2,3" form.

    Accepts ISO weekday numbers or day names separated by commas, semicolons,
    pipes or spaces. Raises ValidationError on anything else.
    """
    days = set()
    for token in _DAY_SEPARATORS.split(str(value).strip()):
        if not token:
            continue
        if token.isdigit() and 1 <= int(token) <= 7:
            days.add(int(token))
            continue
        name = normalize_day(token)
        if name is None:
            raise ValidationError(f"Unknown working day {token!r}", code="INVALID_DAY")
        days.add(DAY_NAMES.index(name) + 1)
    return ",".join(str(d) for d in sorted(days))


def import_employees_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import employees from CSV into database.

    Rows whose employee_id already exists replace the stored employee.

    Args:
        session: Database session
        csv_path: Path to employees CSV

    Returns:
        Number of employees imported
    """
    df = _read_csv(csv_path)
    _require_columns(df, ["employee_id", "first_name", "last_name"], csv_path)

    if "weekly_hours" in df.columns:
        df["weekly_hours"] = df["weekly_hours"].str.upper().str.strip()
    if "contract_type" in df.columns:
        df["contract_type"] = df["contract_type"].str.upper().str.strip()

    count = 0
    for _, row in df.iterrows():
        day_start = row.get("day_start_time") or "09:00"
        try:
            to_minutes(day_start)
        except ValueError as e:
            raise ValidationError(
                f"Invalid day_start_time {day_start!r} for employee {row['employee_id']}",
                code="INVALID_TIME",
            ) from e

        emp = Employee(
            employee_id=int(row["employee_id"]),
            first_name=str(row["first_name"]),
            last_name=str(row["last_name"]),
            contract_type=row.get("contract_type") or "CDI",
            weekly_hours=row.get("weekly_hours") or "H35",
            main_service_id=int(row["main_service_id"]) if row.get("main_service_id") else None,
            polyvalent_service_ids=row.get("polyvalent_service_ids") or None,
            working_days=parse_working_days(row.get("working_days") or "1,2,3,4,5"),
            day_start_time=day_start,
            is_active=str(row.get("is_active") or "TRUE").upper() in ["TRUE", "T", "1", "YES"],
        )
        session.merge(emp)
        count += 1

    session.commit()
    logger.info("Imported %d employees from %s", count, csv_path)
    return count


def import_room_types_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import the room inventory (label, count, cleaning_minutes).

    Returns:
        Number of room categories written
    """
    df = _read_csv(csv_path)
    _require_columns(df, ["label", "count", "cleaning_minutes"], csv_path)

    for _, row in df.iterrows():
        RoomInventoryRepository.upsert(
            session,
            label=str(row["label"]).strip(),
            count=int(row["count"]),
            cleaning_minutes=int(row["cleaning_minutes"]),
        )

    logger.info("Imported %d room types from %s", len(df), csv_path)
    return len(df)


def import_leaves_csv(session: Session, csv_path: str | Path, ledger: LeaveLedger | None = None) -> int:
    """
    Import paid-leave intervals (employee_id, start_date, end_date[, notes]).

    Every row goes through the ledger, so day counts and entitlement checks
    are the same as for leaves entered one at a time.

    Returns:
        Number of leaves imported
    """
    df = _read_csv(csv_path)
    _require_columns(df, ["employee_id", "start_date", "end_date"], csv_path)

    if ledger is None:
        ledger = LeaveLedger(records=LeaveRepository.load_records(session))

    count = 0
    for _, row in df.iterrows():
        record = ledger.add_leave(
            int(row["employee_id"]),
            row["start_date"],
            row["end_date"],
            notes=row.get("notes") or None,
        )
        LeaveRepository.create_from_record(session, record)
        count += 1

    logger.info("Imported %d leaves from %s", count, csv_path)
    return count
