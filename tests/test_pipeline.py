"""Tests for the recomputation pipeline and planning session."""

from datetime import date

import pytest

from workforce.config import PlanningConfig
from workforce.domain.types import AlertType, EmployeeContract, RoomType
from workforce.engine.editor import EditorStatus
from workforce.engine.pipeline import PlanningInputs, PlanningSession, recompute
from workforce.errors import ValidationError


def _session(hotel_rooms, full_time_contract, **kwargs):
    return PlanningSession(hotel_rooms, [full_time_contract], year=2025, as_of=date(2025, 3, 1), **kwargs)


def test_recompute_produces_every_derived_value(hotel_rooms, full_time_contract):
    """A single call yields capacity, schedules, leave, annual planning and alerts."""
    derived = recompute(PlanningInputs(hotel_rooms, [full_time_contract], year=2025, as_of=date(2025, 3, 1)))

    assert derived.capacity.recommended_staff == 6
    assert derived.schedules[0].total_weekly_hours == 30.0
    assert derived.leave_summaries[1].total_days_taken == 0
    assert derived.annual_planning[1].total_annual_hours == 1386.0
    assert any(a.type is AlertType.COVERAGE_GAP for a in derived.alerts)


def test_recompute_is_pure(hotel_rooms, full_time_contract):
    """Same inputs, same outputs."""
    inputs = PlanningInputs(hotel_rooms, [full_time_contract], year=2025, as_of=date(2025, 3, 1))

    assert recompute(inputs) == recompute(inputs)


def test_room_change_updates_capacity(hotel_rooms, full_time_contract):
    """Adding rooms is reflected immediately."""
    session = _session(hotel_rooms, full_time_contract)
    before = session.derived.capacity.recommended_staff

    session.set_room_types(hotel_rooms + [RoomType("Annex", 40, 30)])

    assert session.derived.capacity.total_cleaning_minutes == 1260 + 1200
    assert session.derived.capacity.recommended_staff > before


def test_staffing_change_updates_capacity(hotel_rooms, full_time_contract):
    """A zero safety margin removes the extra staff."""
    session = _session(hotel_rooms, full_time_contract)
    session.update_staffing(safety_margin_pct=0)

    assert session.derived.capacity.safety_staff == 0


def test_break_change_regenerates_schedules(hotel_rooms, full_time_contract):
    """Shorter breaks raise the scheduled hours."""
    session = _session(hotel_rooms, full_time_contract)
    session.set_break_minutes(30)

    assert session.derived.schedules[0].total_weekly_hours == 32.5


def test_editing_flows_into_alerts(hotel_rooms, full_time_contract):
    """Edited hours are what the alert engine sees."""
    session = _session(hotel_rooms, full_time_contract)
    session.start_editing()
    for day in ("monday", "tuesday", "wednesday", "thursday", "friday"):
        session.edit_cell(1, day, "end", "18:00")

    hours = [a for a in session.derived.alerts if a.subject_id == 1 and a.type is AlertType.COMPLIANT]
    assert session.derived.schedules[0].total_weekly_hours == 35.0
    assert len(hours) == 1


def test_apply_feeds_annual_planning(hotel_rooms, full_time_contract):
    """Applied totals drive the annual projection and the callback."""
    received = []
    session = _session(hotel_rooms, full_time_contract, on_apply=received.append)
    session.start_editing()
    session.edit_cell(1, "saturday", "working", True)
    session.edit_cell(1, "saturday", "start", "10:00")
    session.edit_cell(1, "saturday", "end", "16:00")
    session.apply()

    assert session.editor_status is EditorStatus.APPLIED
    assert received == [{1: 35.0}]
    assert session.derived.annual_planning[1].total_annual_hours == 1617.0


def test_reset_restores_generated_week(hotel_rooms, full_time_contract):
    """Reset brings back the generator output everywhere."""
    session = _session(hotel_rooms, full_time_contract)
    session.start_editing()
    session.edit_cell(1, "monday", "end", "12:00")
    session.reset()

    assert session.derived.schedules == session.derived.baseline


def test_leave_changes_update_summaries(hotel_rooms, full_time_contract):
    """Adding and deleting leave is reflected in the derived summaries."""
    session = _session(hotel_rooms, full_time_contract)
    record = session.add_leave(1, "2025-02-03", "2025-02-07")

    assert session.derived.leave_summaries[1].total_days_taken == 5
    assert session.derived.annual_planning[1].leave_days_remaining == 25

    session.delete_leave(record.leave_id)
    assert session.derived.leave_summaries[1].total_days_taken == 0


def test_roster_change_rebases_editor(hotel_rooms, full_time_contract):
    """A new roster regenerates schedules when not editing."""
    session = _session(hotel_rooms, full_time_contract)
    other = EmployeeContract(2, "Lucas Martin", 39.0, frozenset({1, 2, 3, 4, 5}), day_start="08:00")
    session.set_contracts([full_time_contract, other])

    assert [s.employee_id for s in session.derived.schedules] == [1, 2]
    assert session.editor_status is EditorStatus.READONLY


def test_warnings_collected(hotel_rooms):
    """Configuration errors and schedule warnings are surfaced together."""
    idle = EmployeeContract(9, "Idle", 35.0, frozenset())
    session = PlanningSession(hotel_rooms, [idle], config=PlanningConfig(), year=2025)
    session.update_staffing(rest_days_per_week=7)

    warnings = session.derived.warnings
    assert any("rest_days_per_week" in w for w in warnings)
    assert any("no working days" in w for w in warnings)


def test_rejected_break_leaves_session_usable(hotel_rooms, full_time_contract):
    """A negative break is refused and the session keeps its previous state."""
    session = _session(hotel_rooms, full_time_contract)

    with pytest.raises(ValidationError):
        session.set_break_minutes(-5)

    assert session.config.schedule.break_minutes == 60
    assert session.editor.state.break_minutes == 60
    derived = session.set_room_types(hotel_rooms + [RoomType("Annex", 10, 30)])
    assert derived.schedules[0].total_weekly_hours == 30.0


def test_rejected_roster_keeps_previous_contracts(hotel_rooms, full_time_contract):
    """A contract with a malformed start time does not replace the roster."""
    session = _session(hotel_rooms, full_time_contract)
    broken = EmployeeContract(2, "Typo", 35.0, frozenset({1}), day_start="9h")

    with pytest.raises(ValidationError):
        session.set_contracts([full_time_contract, broken])

    assert session.contracts == [full_time_contract]
    assert [s.employee_id for s in session.refresh().schedules] == [1]


def test_regenerated_week_replaces_applied_totals(hotel_rooms, full_time_contract):
    """After a new break is set, annual planning follows the regenerated week."""
    session = _session(hotel_rooms, full_time_contract)
    session.start_editing()
    session.edit_cell(1, "saturday", "working", True)
    session.edit_cell(1, "saturday", "start", "10:00")
    session.edit_cell(1, "saturday", "end", "16:00")
    session.apply()
    assert session.derived.annual_planning[1].total_annual_hours == 1617.0

    session.set_break_minutes(30)

    assert session.editor.state.applied_totals == {}
    assert session.derived.annual_planning[1].total_annual_hours == 1501.5
