"""Tests for the schedule editor state machine."""

from workforce.engine.editor import (
    Apply,
    EditCell,
    EditorStatus,
    Rebase,
    Reset,
    ScheduleEditor,
    StartEditing,
    day_contribution,
    initial_state,
    reduce_editor,
)
from workforce.engine.generator import generate


def _editor(contract, on_apply=None):
    return ScheduleEditor(generate([contract], 60), 60, on_apply=on_apply)


def test_lifecycle_transitions(full_time_contract):
    """readonly -> editing -> applied -> editing -> readonly."""
    editor = _editor(full_time_contract)
    assert editor.status is EditorStatus.READONLY

    editor.start_editing()
    assert editor.status is EditorStatus.EDITING

    editor.apply()
    assert editor.status is EditorStatus.APPLIED

    editor.start_editing()
    assert editor.status is EditorStatus.EDITING

    editor.reset()
    assert editor.status is EditorStatus.READONLY


def test_edit_updates_total(full_time_contract):
    """Ending Monday at 18:00 adds one hour to the week."""
    editor = _editor(full_time_contract)
    editor.start_editing()
    editor.edit_cell(1, "monday", "end", "18:00")

    schedule = editor.current[0]
    assert schedule.days["monday"].end == "18:00"
    assert schedule.total_weekly_hours == 31.0


def test_total_equals_sum_of_days(full_time_contract):
    """The weekly total always matches the per-day contributions."""
    editor = _editor(full_time_contract)
    editor.start_editing()
    editor.edit_cell(1, "saturday", "working", True)
    editor.edit_cell(1, "saturday", "start", "08:00")
    editor.edit_cell(1, "saturday", "end", "12:00")
    editor.edit_cell(1, "tuesday", "working", False)

    schedule = editor.current[0]
    expected = round(sum(day_contribution(slot, 60) for slot in schedule.days.values()), 2)
    assert schedule.total_weekly_hours == expected == 27.0


def test_end_before_start_contributes_nothing(full_time_contract):
    """An inverted shift counts 0 hours rather than a negative amount."""
    editor = _editor(full_time_contract)
    editor.start_editing()
    editor.edit_cell(1, "monday", "end", "09:00")

    assert editor.current[0].total_weekly_hours == 24.0


def test_reset_restores_baseline(full_time_contract):
    """Reset discards every edit."""
    editor = _editor(full_time_contract)
    baseline = editor.current

    editor.start_editing()
    editor.edit_cell(1, "monday", "start", "06:00")
    editor.reset()

    assert editor.current == baseline


def test_invalid_edits_are_ignored(full_time_contract):
    """Unknown day, unknown employee or malformed time leave the state as is."""
    editor = _editor(full_time_contract)
    editor.start_editing()
    before = editor.state

    editor.edit_cell(1, "funday", "start", "08:00")
    editor.edit_cell(99, "monday", "start", "08:00")
    editor.edit_cell(1, "monday", "start", "8 o'clock")
    editor.edit_cell(1, "monday", "colour", "blue")

    assert editor.state == before


def test_edit_outside_editing_is_noop(full_time_contract):
    """Cells cannot be edited while read-only."""
    state = initial_state(generate([full_time_contract], 60), 60)
    after = reduce_editor(state, EditCell(1, "monday", "start", "06:00"))

    assert after is state


def test_reducer_does_not_mutate_input(full_time_contract):
    """The previous state keeps its schedules after an edit."""
    state = reduce_editor(initial_state(generate([full_time_contract], 60), 60), StartEditing())
    edited = reduce_editor(state, EditCell(1, "monday", "start", "06:00"))

    assert state.working[0].days["monday"].start == "10:00"
    assert edited.working[0].days["monday"].start == "06:00"


def test_apply_stores_totals_and_calls_back(full_time_contract):
    """Apply records per-employee totals and notifies the callback once."""
    received = []
    editor = _editor(full_time_contract, on_apply=received.append)

    editor.apply()  # not editing yet
    assert received == []

    editor.start_editing()
    editor.edit_cell(1, "friday", "end", "16:00")
    editor.apply()

    assert received == [{1: 29.0}]
    assert editor.state.applied_totals == {1: 29.0}
    assert editor.current[0].days["friday"].end == "16:00"


def test_rebase_ignored_while_editing(full_time_contract):
    """Regenerated schedules do not overwrite an edit in progress."""
    state = reduce_editor(initial_state(generate([full_time_contract], 60), 60), StartEditing())
    rebased = reduce_editor(state, Rebase(tuple(generate([full_time_contract], 30)), 30))

    assert rebased is state


def test_rebase_replaces_baseline_when_readonly(full_time_contract):
    """A new break configuration regenerates the visible schedules."""
    state = initial_state(generate([full_time_contract], 60), 60)
    rebased = reduce_editor(state, Rebase(tuple(generate([full_time_contract], 30)), 30))

    assert rebased.status is EditorStatus.READONLY
    assert rebased.break_minutes == 30
    assert rebased.current[0].days["monday"].end == "17:00"
    assert rebased.current[0].total_weekly_hours == 32.5


def test_reset_and_apply_ignored_when_readonly(full_time_contract):
    """Reset and Apply only act on an editing state."""
    state = initial_state(generate([full_time_contract], 60), 60)

    assert reduce_editor(state, Reset()) is state
    assert reduce_editor(state, Apply()) is state


def test_rebase_after_apply_clears_applied_totals(full_time_contract):
    """Applied totals belong to the week they were applied from."""
    state = reduce_editor(initial_state(generate([full_time_contract], 60), 60), StartEditing())
    applied = reduce_editor(state, Apply())
    assert applied.applied_totals == {1: 30.0}

    rebased = reduce_editor(applied, Rebase(tuple(generate([full_time_contract], 30)), 30))

    assert rebased.status is EditorStatus.READONLY
    assert rebased.applied_totals == {}
