"""Single recomputation pipeline for every derived planning value."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence

from workforce.config import PlanningConfig
from workforce.domain.types import (
    Alert,
    AnnualPlanning,
    CapacityResult,
    EmployeeContract,
    LeaveRecord,
    LeaveSummary,
    RoomType,
    WeeklySchedule,
)
from workforce.logging_config import get_logger
from workforce.services.alerts import generate_alerts
from workforce.services.annual import compute_annual_planning
from workforce.services.capacity import compute_capacity
from workforce.services.leave import DateLike, LeaveLedger

from .editor import EditorState, EditorStatus, ScheduleEditor
from .generator import generate

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlanningInputs:
    """Everything the derived state depends on."""

    room_types: Sequence[RoomType]
    contracts: Sequence[EmployeeContract]
    config: PlanningConfig = field(default_factory=PlanningConfig)
    leave_records: Sequence[LeaveRecord] = ()
    editor_state: Optional[EditorState] = None
    year: int = field(default_factory=lambda: date.today().year)
    as_of: Optional[date] = None


@dataclass(frozen=True)
class DerivedState:
    capacity: CapacityResult
    baseline: List[WeeklySchedule]
    schedules: List[WeeklySchedule]
    leave_summaries: Dict[int, LeaveSummary]
    annual_planning: Dict[int, AnnualPlanning]
    alerts: List[Alert]

    @property
    def warnings(self) -> List[str]:
        messages = [str(e) for e in self.capacity.configuration_errors]
        for schedule in self.schedules:
            messages.extend(schedule.warnings)
        return messages


def recompute(inputs: PlanningInputs) -> DerivedState:
    """
    Recompute capacity, schedules, leave summaries, annual planning and alerts.

    Pure with respect to `inputs`: nothing is cached and nothing is mutated.
    While an editor is in the editing state its working copy is what the
    summaries and alerts see; applied totals feed the annual planning.
    """
    cfg = inputs.config
    capacity = compute_capacity(inputs.room_types, cfg.staffing)
    baseline = generate(inputs.contracts, cfg.schedule.break_minutes)

    applied_totals: Dict[int, float] = {}
    if inputs.editor_state is not None:
        schedules = copy.deepcopy(list(inputs.editor_state.current))
        applied_totals = dict(inputs.editor_state.applied_totals)
    else:
        schedules = baseline

    ledger = LeaveLedger(cfg.leave, copy.deepcopy(list(inputs.leave_records)))
    employee_ids = [c.employee_id for c in inputs.contracts]
    summaries = ledger.summaries_for_year(employee_ids, inputs.year, inputs.as_of)

    annual = {
        s.employee_id: compute_annual_planning(
            s,
            cfg.staffing,
            inputs.year,
            leave_summary=summaries.get(s.employee_id),
            weekly_hours=applied_totals.get(s.employee_id),
        )
        for s in schedules
    }

    alerts = generate_alerts(
        capacity,
        schedules,
        summaries,
        inputs.contracts,
        staffing=cfg.staffing,
        hours_policy=cfg.hours,
        leave_policy=cfg.leave,
    )

    return DerivedState(
        capacity=capacity,
        baseline=baseline,
        schedules=schedules,
        leave_summaries=summaries,
        annual_planning=annual,
        alerts=alerts,
    )


class PlanningSession:
    """
    One operator's working session.

    Holds the declared inputs and re-runs `recompute` after every change, so
    `derived` is always consistent with them.
    """

    def __init__(
        self,
        room_types: Sequence[RoomType],
        contracts: Sequence[EmployeeContract],
        config: PlanningConfig | None = None,
        leave_records: Sequence[LeaveRecord] = (),
        year: int | None = None,
        as_of: date | None = None,
        on_apply: Callable[[Dict[int, float]], None] | None = None,
    ):
        self.config = config or PlanningConfig()
        self.room_types = list(room_types)
        self.contracts = list(contracts)
        self.ledger = LeaveLedger(self.config.leave, leave_records)
        self.year = year or date.today().year
        self.as_of = as_of
        self.editor = ScheduleEditor(
            generate(self.contracts, self.config.schedule.break_minutes),
            self.config.schedule.break_minutes,
            on_apply=on_apply,
        )
        self.derived = self.refresh()

    def inputs(self) -> PlanningInputs:
        return PlanningInputs(
            room_types=tuple(self.room_types),
            contracts=tuple(self.contracts),
            config=self.config,
            leave_records=tuple(self.ledger.records),
            editor_state=self.editor.state,
            year=self.year,
            as_of=self.as_of,
        )

    def refresh(self) -> DerivedState:
        self.derived = recompute(self.inputs())
        return self.derived

    def _regenerate(self, contracts: Sequence[EmployeeContract], break_minutes: int) -> None:
        """Rebase the editor on fresh generator output; raises before anything changes."""
        schedules = generate(contracts, break_minutes)
        self.editor.rebase(schedules, break_minutes)

    # Room inventory and HR parameters

    def set_room_types(self, room_types: Sequence[RoomType]) -> DerivedState:
        self.room_types = list(room_types)
        return self.refresh()

    def update_staffing(self, **changes) -> DerivedState:
        self.config = replace(self.config, staffing=replace(self.config.staffing, **changes))
        return self.refresh()

    # Roster and break configuration

    def set_contracts(self, contracts: Sequence[EmployeeContract]) -> DerivedState:
        contracts = list(contracts)
        self._regenerate(contracts, self.config.schedule.break_minutes)
        self.contracts = contracts
        return self.refresh()

    def set_break_minutes(self, break_minutes: int) -> DerivedState:
        self._regenerate(self.contracts, break_minutes)
        self.config = replace(self.config, schedule=replace(self.config.schedule, break_minutes=break_minutes))
        return self.refresh()

    # Leave

    def add_leave(self, employee_id: int, start_date: DateLike, end_date: DateLike, notes: str | None = None) -> LeaveRecord:
        record = self.ledger.add_leave(employee_id, start_date, end_date, notes)
        self.refresh()
        return record

    def delete_leave(self, leave_id: int) -> bool:
        deleted = self.ledger.delete_leave(leave_id)
        self.refresh()
        return deleted

    # Schedule editing

    @property
    def editor_status(self) -> EditorStatus:
        return self.editor.status

    def start_editing(self) -> DerivedState:
        self.editor.start_editing()
        return self.refresh()

    def edit_cell(self, employee_id: int, day: str, field_name: str, value) -> DerivedState:
        self.editor.edit_cell(employee_id, day, field_name, value)
        return self.refresh()

    def reset(self) -> DerivedState:
        self.editor.reset()
        return self.refresh()

    def apply(self) -> DerivedState:
        self.editor.apply()
        logger.info("Applied weekly totals for %d employees", len(self.editor.state.applied_totals))
        return self.refresh()
