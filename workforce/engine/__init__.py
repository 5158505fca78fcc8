"""Schedule generation, editing and the recomputation pipeline."""

from .editor import (
    Apply,
    EditCell,
    EditorState,
    EditorStatus,
    Rebase,
    Reset,
    ScheduleEditor,
    StartEditing,
    initial_state,
    reduce_editor,
)
from .generator import build_schedule, contract_from_employee, generate
from .pipeline import DerivedState, PlanningInputs, PlanningSession, recompute

__all__ = [
    "generate",
    "build_schedule",
    "contract_from_employee",
    "EditorStatus",
    "EditorState",
    "StartEditing",
    "EditCell",
    "Reset",
    "Apply",
    "Rebase",
    "initial_state",
    "reduce_editor",
    "ScheduleEditor",
    "PlanningInputs",
    "DerivedState",
    "recompute",
    "PlanningSession",
]
