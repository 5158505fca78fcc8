"""
Editable overlay on top of generated schedules.

The lifecycle is an explicit tagged state plus a pure reducer:

    readonly --StartEditing--> editing --Apply--> applied
                                  |  ^                |
                        EditCell  +--+                |
                                  |                   |
    readonly <------Reset---------+   StartEditing <--+

`reduce_editor` never mutates the state it receives. Unsupported
transitions and invalid edits return the input state unchanged.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union

from workforce.domain.types import DAY_NAMES, DaySlot, WeeklySchedule
from workforce.logging_config import get_logger
from workforce.services.timeplan import calculate_shift_hours, normalize_day, parse_time_string

logger = get_logger(__name__)

EDITABLE_FIELDS = ("start", "end", "working")


class EditorStatus(str, Enum):
    READONLY = "readonly"
    EDITING = "editing"
    APPLIED = "applied"


@dataclass(frozen=True)
class EditorState:
    status: EditorStatus
    baseline: Tuple[WeeklySchedule, ...]
    break_minutes: int
    working: Optional[Tuple[WeeklySchedule, ...]] = None
    applied_totals: Dict[int, float] = field(default_factory=dict)

    @property
    def current(self) -> Tuple[WeeklySchedule, ...]:
        """Schedules the rest of the system should see right now."""
        if self.status is EditorStatus.EDITING and self.working is not None:
            return self.working
        return self.baseline


@dataclass(frozen=True)
class StartEditing:
    pass


@dataclass(frozen=True)
class EditCell:
    employee_id: int
    day: str
    field: str
    value: Union[str, bool, None]


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class Apply:
    pass


@dataclass(frozen=True)
class Rebase:
    """New generator output (roster or break configuration changed)."""

    schedules: Tuple[WeeklySchedule, ...]
    break_minutes: int


EditorAction = Union[StartEditing, EditCell, Reset, Apply, Rebase]


def initial_state(schedules, break_minutes: int) -> EditorState:
    return EditorState(
        status=EditorStatus.READONLY,
        baseline=tuple(copy.deepcopy(list(schedules))),
        break_minutes=break_minutes,
    )


def day_contribution(slot: DaySlot, break_minutes: int) -> float:
    """Net hours of one day; 0 for rest days and for end <= start."""
    if not slot.working or not slot.start or not slot.end:
        return 0.0
    return calculate_shift_hours(slot.start, slot.end, break_minutes)


def weekly_total(schedule: WeeklySchedule, break_minutes: int) -> float:
    return round(sum(day_contribution(schedule.days[name], break_minutes) for name in DAY_NAMES), 2)


def _validated_value(field_name: str, value):
    """Return the value to store, or raise ValueError."""
    if field_name == "working":
        if not isinstance(value, bool):
            raise ValueError(f"'working' expects a bool, got {value!r}")
        return value
    parse_time_string(value)
    return value.strip()


def _edit_cell(state: EditorState, action: EditCell) -> EditorState:
    day = normalize_day(action.day)
    if day is None:
        logger.warning("Rejected edit: unknown day %r", action.day)
        return state
    if action.field not in EDITABLE_FIELDS:
        logger.warning("Rejected edit: unknown field %r", action.field)
        return state

    index = next(
        (i for i, s in enumerate(state.working) if s.employee_id == action.employee_id),
        None,
    )
    if index is None:
        logger.warning("Rejected edit: employee %s not in roster", action.employee_id)
        return state

    try:
        value = _validated_value(action.field, action.value)
    except (ValueError, TypeError, AttributeError) as e:
        logger.warning("Rejected edit for employee %s on %s: %s", action.employee_id, day, e)
        return state

    # Copy only the affected employee; the others are shared with the previous state
    edited = copy.deepcopy(state.working[index])
    setattr(edited.days[day], action.field, value)
    edited.total_weekly_hours = weekly_total(edited, state.break_minutes)

    working = list(state.working)
    working[index] = edited
    return replace(state, working=tuple(working))


def reduce_editor(state: EditorState, action: EditorAction) -> EditorState:
    """Apply one action and return the next state."""
    status = state.status

    if isinstance(action, StartEditing):
        if status in (EditorStatus.READONLY, EditorStatus.APPLIED):
            return replace(
                state,
                status=EditorStatus.EDITING,
                working=tuple(copy.deepcopy(list(state.baseline))),
            )

    elif isinstance(action, EditCell):
        if status is EditorStatus.EDITING:
            return _edit_cell(state, action)

    elif isinstance(action, Reset):
        if status is EditorStatus.EDITING:
            return replace(state, status=EditorStatus.READONLY, working=None)

    elif isinstance(action, Apply):
        if status is EditorStatus.EDITING:
            totals = {s.employee_id: s.total_weekly_hours for s in state.working}
            return replace(
                state,
                status=EditorStatus.APPLIED,
                baseline=state.working,
                working=None,
                applied_totals=totals,
            )

    elif isinstance(action, Rebase):
        if status is EditorStatus.EDITING:
            logger.info("Regenerated schedules ignored while an edited copy exists")
            return state
        return replace(
            state,
            status=EditorStatus.READONLY,
            baseline=tuple(copy.deepcopy(list(action.schedules))),
            break_minutes=action.break_minutes,
            applied_totals={},
        )

    logger.debug("Ignored %s in state %s", type(action).__name__, status.value)
    return state


class ScheduleEditor:
    """
    Stateful convenience wrapper around `reduce_editor`.

    Args:
        schedules: Generator output used as the initial baseline
        break_minutes: Break deducted from every working day
        on_apply: Called with the applied totals {employee_id: weekly hours}
    """

    def __init__(
        self,
        schedules,
        break_minutes: int,
        on_apply: Callable[[Dict[int, float]], None] | None = None,
    ):
        self.state = initial_state(schedules, break_minutes)
        self.on_apply = on_apply

    @property
    def status(self) -> EditorStatus:
        return self.state.status

    @property
    def current(self) -> List[WeeklySchedule]:
        return list(self.state.current)

    def dispatch(self, action: EditorAction) -> EditorState:
        previous = self.state
        self.state = reduce_editor(previous, action)
        if (
            isinstance(action, Apply)
            and previous.status is EditorStatus.EDITING
            and self.state.status is EditorStatus.APPLIED
            and self.on_apply is not None
        ):
            self.on_apply(dict(self.state.applied_totals))
        return self.state

    def start_editing(self) -> EditorState:
        return self.dispatch(StartEditing())

    def edit_cell(self, employee_id: int, day: str, field_name: str, value) -> None:
        self.dispatch(EditCell(employee_id, day, field_name, value))

    def reset(self) -> EditorState:
        return self.dispatch(Reset())

    def apply(self) -> EditorState:
        return self.dispatch(Apply())

    def rebase(self, schedules, break_minutes: int) -> EditorState:
        return self.dispatch(Rebase(tuple(schedules), break_minutes))
