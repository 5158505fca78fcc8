"""Command-line interface for the workforce planning engine."""

from __future__ import annotations

import argparse
from datetime import date

from sqlalchemy.orm import Session

from workforce.config import PlanningConfig, load_config
from workforce.domain.db import DEFAULT_DB_URL, get_session, init_database
from workforce.domain.repositories import (
    AppliedPlanningRepository,
    EmployeeRepository,
    LeaveRepository,
    RoomInventoryRepository,
)
from workforce.engine.generator import contract_from_employee
from workforce.engine.pipeline import PlanningSession
from workforce.io.export_csv import export_alerts_csv, export_annual_csv, export_schedules_csv
from workforce.io.import_csv import import_employees_csv, import_leaves_csv, import_room_types_csv
from workforce.logging_config import setup_logging
from workforce.services.alerts import count_by_priority
from workforce.services.annual import compute_annual_planning
from workforce.services.capacity import compute_capacity, describe_capacity
from workforce.services.leave import LeaveLedger, to_date


def _as_of(args: argparse.Namespace) -> date | None:
    return to_date(args.as_of) if getattr(args, "as_of", None) else None


def _year(args: argparse.Namespace) -> int:
    return args.year or date.today().year


def _open_planning(session: Session, cfg: PlanningConfig, year: int, as_of: date | None) -> PlanningSession:
    """Build a planning session from everything stored in the database."""
    employees = EmployeeRepository.get_all(session)
    contracts = [contract_from_employee(e, cfg.schedule.default_day_start) for e in employees]
    return PlanningSession(
        room_types=RoomInventoryRepository.get_room_types(session),
        contracts=contracts,
        config=cfg,
        leave_records=LeaveRepository.load_records(session),
        year=year,
        as_of=as_of,
    )


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    db_url = args.db or DEFAULT_DB_URL
    init_database(db_url)
    print(f"[OK] Database initialized: {db_url}")


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import CSV data into database."""
    session = get_session(args.db or DEFAULT_DB_URL)

    try:
        if args.employees:
            count = import_employees_csv(session, args.employees)
            print(f"[OK] Imported {count} employees")

        if args.rooms:
            count = import_room_types_csv(session, args.rooms)
            print(f"[OK] Imported {count} room types")

        if args.leaves:
            cfg = load_config(args.config)
            ledger = LeaveLedger(cfg.leave, LeaveRepository.load_records(session))
            count = import_leaves_csv(session, args.leaves, ledger=ledger)
            print(f"[OK] Imported {count} leaves")

        session.close()
        print("[OK] CSV import complete")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Import failed: {e}")
        raise


def _cmd_room_set(args: argparse.Namespace) -> None:
    """Create or update one room category."""
    session = get_session(args.db or DEFAULT_DB_URL)

    try:
        if args.delete:
            deleted = RoomInventoryRepository.delete(session, args.label)
            print(f"[OK] Room type {args.label} deleted" if deleted else f"[ERROR] Room type {args.label} not found")
        else:
            RoomInventoryRepository.upsert(session, args.label, args.count, args.minutes)
            print(f"[OK] Room type {args.label}: {args.count} rooms x {args.minutes} min")
        session.close()

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Room update failed: {e}")
        raise


def _cmd_capacity(args: argparse.Namespace) -> None:
    """Compute the housekeeping headcount from the room inventory."""
    session = get_session(args.db or DEFAULT_DB_URL)

    try:
        cfg = load_config(args.config)
        rooms = RoomInventoryRepository.get_room_types(session)
        result = compute_capacity(rooms, cfg.staffing)
        session.close()

        for line in describe_capacity(result, cfg.staffing):
            print(line)
        status = "[OK]" if result.is_valid else "[ERROR]"
        print(f"{status} Recommended staff: {result.recommended_staff}")

    except Exception as e:
        session.close()
        print(f"[ERROR] Capacity calculation failed: {e}")
        raise


def _cmd_schedule(args: argparse.Namespace) -> None:
    """Generate the weekly schedule, optionally export and apply it."""
    session = get_session(args.db or DEFAULT_DB_URL)

    try:
        cfg = load_config(args.config)
        year = _year(args)
        planning = _open_planning(session, cfg, year, None)
        schedules = planning.derived.schedules

        for schedule in schedules:
            days = ", ".join(
                f"{name[:3]} {schedule.days[name].start}-{schedule.days[name].end}"
                for name in schedule.working_day_names()
            )
            print(f"{schedule.employee_name}: {schedule.total_weekly_hours:g}h [{days}]")
            for warning in schedule.warnings:
                print(f"  [WARN] {warning}")

        if args.out:
            export_schedules_csv(schedules, args.out)

        if args.apply:
            planning.start_editing()
            derived = planning.apply()
            annual = {emp: plan.total_annual_hours for emp, plan in derived.annual_planning.items()}
            count = AppliedPlanningRepository.save_totals(
                session, year, planning.editor.state.applied_totals, annual
            )
            print(f"[OK] Applied weekly totals for {count} employees ({year})")

        session.close()
        print(f"[OK] Generated {len(schedules)} weekly schedules")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Schedule generation failed: {e}")
        raise


def _cmd_annual(args: argparse.Namespace) -> None:
    """Project applied (or generated) weekly hours over the year."""
    session = get_session(args.db or DEFAULT_DB_URL)

    try:
        cfg = load_config(args.config)
        year = _year(args)
        planning = _open_planning(session, cfg, year, _as_of(args))
        applied = AppliedPlanningRepository.get_by_year(session, year)
        session.close()

        result = {
            s.employee_id: compute_annual_planning(
                s,
                cfg.staffing,
                year,
                leave_summary=planning.derived.leave_summaries.get(s.employee_id),
                weekly_hours=applied.get(s.employee_id),
            )
            for s in planning.derived.schedules
        }
        for schedule in planning.derived.schedules:
            plan = result[schedule.employee_id]
            print(
                f"{schedule.employee_name}: {plan.total_annual_hours:g}h / {plan.target_annual_hours:g}h target, "
                f"leave {plan.leave_days_used} used / {plan.leave_days_remaining} remaining"
            )

        if args.out:
            export_annual_csv(result, args.out)
        print(f"[OK] Annual planning for {len(result)} employees ({year})")

    except Exception as e:
        session.close()
        print(f"[ERROR] Annual planning failed: {e}")
        raise


def _cmd_leave_add(args: argparse.Namespace) -> None:
    """Record one paid-leave interval."""
    session = get_session(args.db or DEFAULT_DB_URL)

    try:
        cfg = load_config(args.config)
        if EmployeeRepository.get_by_id(session, args.employee) is None:
            print(f"[ERROR] Employee {args.employee} not found")
            session.close()
            return

        ledger = LeaveLedger(cfg.leave, LeaveRepository.load_records(session))
        record = ledger.add_leave(args.employee, args.start, args.end, notes=args.notes)
        row = LeaveRepository.create_from_record(session, record)
        session.close()
        print(f"[OK] Leave {row.id} recorded: {record.start_date}..{record.end_date} ({record.days_count} days)")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Leave creation failed: {e}")
        raise


def _cmd_leave_delete(args: argparse.Namespace) -> None:
    """Delete one paid-leave interval."""
    session = get_session(args.db or DEFAULT_DB_URL)

    try:
        deleted = LeaveRepository.delete(session, args.id)
        session.close()
        if deleted:
            print(f"[OK] Leave {args.id} deleted")
        else:
            print(f"[ERROR] Leave {args.id} not found")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Leave deletion failed: {e}")
        raise


def _cmd_leave_summary(args: argparse.Namespace) -> None:
    """Print leave consumption and compliance for every employee."""
    session = get_session(args.db or DEFAULT_DB_URL)

    try:
        cfg = load_config(args.config)
        year = _year(args)
        employees = EmployeeRepository.get_all(session)
        ledger = LeaveLedger(cfg.leave, LeaveRepository.load_records(session))
        session.close()

        as_of = _as_of(args)
        ids = [e.employee_id for e in employees]
        summaries = ledger.summaries_for_year(ids, year, as_of)
        for employee in employees:
            summary = summaries[employee.employee_id]
            print(
                f"{employee.full_name}: {summary.total_days_taken}/{summary.legal_days} days "
                f"[{summary.compliance_level.value}] {summary.message}"
            )

        totals = ledger.global_compliance(ids, year, as_of)
        print(f"[OK] {totals['compliant']}/{totals['total']} employees compliant in {year}")

    except Exception as e:
        session.close()
        print(f"[ERROR] Leave summary failed: {e}")
        raise


def _cmd_alerts(args: argparse.Namespace) -> None:
    """List prioritized alerts for the current roster."""
    session = get_session(args.db or DEFAULT_DB_URL)

    try:
        cfg = load_config(args.config)
        planning = _open_planning(session, cfg, _year(args), _as_of(args))
        session.close()

        alerts = planning.derived.alerts
        for alert in alerts:
            subject = f" {alert.subject_name}" if alert.subject_name else ""
            print(f"[{alert.priority.value}] {alert.type.value}{subject}: {alert.message} ({alert.detail})")

        if args.out:
            export_alerts_csv(alerts, args.out)

        counts = count_by_priority(alerts)
        print(f"[OK] {counts['total']} alerts: {counts['high']} high, {counts['medium']} medium, {counts['low']} low")

    except Exception as e:
        session.close()
        print(f"[ERROR] Alert generation failed: {e}")
        raise


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="workforce",
        description="Hotel workforce capacity planning and compliance engine",
    )

    # Global options
    parser.add_argument("--db", help=f"Database URL (default: {DEFAULT_DB_URL})")

    sub = parser.add_subparsers(dest="command", required=True)

    # init-db command
    init = sub.add_parser("init-db", help="Initialize database")
    init.set_defaults(func=_cmd_init_db)

    # import-csv command
    imp = sub.add_parser("import-csv", help="Import CSV data into database")
    imp.add_argument("--employees", help="Path to employees CSV")
    imp.add_argument("--rooms", help="Path to room inventory CSV")
    imp.add_argument("--leaves", help="Path to paid leaves CSV")
    imp.add_argument("--config", help="Path to config YAML (leave policy)")
    imp.set_defaults(func=_cmd_import_csv)

    # room-set command
    room = sub.add_parser("room-set", help="Create, update or delete a room category")
    room.add_argument("--label", required=True, help="Room category label")
    room.add_argument("--count", type=int, default=0, help="Number of rooms")
    room.add_argument("--minutes", type=int, default=0, help="Cleaning minutes per room")
    room.add_argument("--delete", action="store_true", help="Delete the category")
    room.set_defaults(func=_cmd_room_set)

    # capacity command
    cap = sub.add_parser("capacity", help="Compute recommended housekeeping staff")
    cap.add_argument("--config", help="Path to config YAML")
    cap.set_defaults(func=_cmd_capacity)

    # schedule command
    sch = sub.add_parser("schedule", help="Generate weekly schedules")
    sch.add_argument("--config", help="Path to config YAML")
    sch.add_argument("--year", type=int, help="Planning year (default: current)")
    sch.add_argument("--out", help="Optional: export schedules to CSV")
    sch.add_argument("--apply", action="store_true", help="Store the weekly totals as applied planning")
    sch.set_defaults(func=_cmd_schedule)

    # annual command
    ann = sub.add_parser("annual", help="Annual hours and leave projection")
    ann.add_argument("--config", help="Path to config YAML")
    ann.add_argument("--year", type=int, help="Planning year (default: current)")
    ann.add_argument("--as-of", help="Reference date YYYY-MM-DD (default: today)")
    ann.add_argument("--out", help="Optional: export annual planning to CSV")
    ann.set_defaults(func=_cmd_annual)

    # leave-add command
    ladd = sub.add_parser("leave-add", help="Record a paid-leave interval")
    ladd.add_argument("--employee", type=int, required=True, help="Employee ID")
    ladd.add_argument("--start", required=True, help="First day YYYY-MM-DD")
    ladd.add_argument("--end", required=True, help="Last day YYYY-MM-DD")
    ladd.add_argument("--notes", help="Free-text notes")
    ladd.add_argument("--config", help="Path to config YAML")
    ladd.set_defaults(func=_cmd_leave_add)

    # leave-delete command
    ldel = sub.add_parser("leave-delete", help="Delete a paid-leave interval")
    ldel.add_argument("--id", type=int, required=True, help="Leave ID")
    ldel.set_defaults(func=_cmd_leave_delete)

    # leave-summary command
    lsum = sub.add_parser("leave-summary", help="Leave consumption and compliance per employee")
    lsum.add_argument("--config", help="Path to config YAML")
    lsum.add_argument("--year", type=int, help="Year (default: current)")
    lsum.add_argument("--as-of", help="Reference date YYYY-MM-DD (default: today)")
    lsum.set_defaults(func=_cmd_leave_summary)

    # alerts command
    alr = sub.add_parser("alerts", help="Prioritized compliance and coverage alerts")
    alr.add_argument("--config", help="Path to config YAML")
    alr.add_argument("--year", type=int, help="Year (default: current)")
    alr.add_argument("--as-of", help="Reference date YYYY-MM-DD (default: today)")
    alr.add_argument("--out", help="Optional: export alerts to CSV")
    alr.set_defaults(func=_cmd_alerts)

    args = parser.parse_args(argv)
    setup_logging()
    args.func(args)


if __name__ == "__main__":
    main()
