"""Configuration loading (YAML or JSON) for the planning engine."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .errors import ConfigurationError, ValidationError
from .logging_config import get_logger

logger = get_logger(__name__)

DAYS_PER_YEAR = 365
WEEKS_PER_YEAR = 52


@dataclass
class StaffingConfig:
    """HR parameters driving the headcount calculation."""

    working_hours_per_staff_per_day: float = 7.0
    safety_margin_pct: float = 20.0  # percent, 20 means +20 %
    weekly_hours_per_staff: float = 35.0
    rest_days_per_week: float = 2.0
    annual_leave_days: float = 30.0

    @property
    def working_days_per_week(self) -> float:
        return 7 - self.rest_days_per_week

    def validate(self) -> List[ConfigurationError]:
        """Return every problem found; an empty list means the config is usable."""
        errors: List[ConfigurationError] = []

        for name in ("working_hours_per_staff_per_day", "safety_margin_pct", "weekly_hours_per_staff"):
            if getattr(self, name) <= 0:
                errors.append(ConfigurationError(f"{name} must be > 0, got {getattr(self, name)}", field=name))

        if not 0 <= self.rest_days_per_week < 7:
            errors.append(ConfigurationError(
                f"rest_days_per_week must be in [0, 7), got {self.rest_days_per_week}",
                field="rest_days_per_week",
            ))

        if self.annual_leave_days < 0:
            errors.append(ConfigurationError(
                f"annual_leave_days must be >= 0, got {self.annual_leave_days}",
                field="annual_leave_days",
            ))

        off_days = self.rest_days_per_week * WEEKS_PER_YEAR + self.annual_leave_days
        if off_days >= DAYS_PER_YEAR:
            errors.append(ConfigurationError(
                f"{self.rest_days_per_week:g} rest days/week x {WEEKS_PER_YEAR} + "
                f"{self.annual_leave_days:g} leave days leaves no working days in the year",
                field="rest_days_per_week",
            ))

        return errors


@dataclass
class ScheduleConfig:
    break_minutes: int = 60
    default_day_start: str = "09:00"


@dataclass
class HoursPolicy:
    """Weekly hours thresholds, as ratios of the contracted target."""

    low_ratio: float = 0.8
    compliant_ratio: float = 0.95
    high_ratio: float = 1.0


@dataclass
class LeavePolicy:
    legal_days: int = 30
    danger_threshold_days: int = 20
    warning_cutoff: str = "06-01"  # MM-DD
    danger_cutoff: str = "10-01"  # MM-DD
    block_over_entitlement: bool = False


@dataclass
class PlanningConfig:
    staffing: StaffingConfig = field(default_factory=StaffingConfig)
    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)
    hours: HoursPolicy = field(default_factory=HoursPolicy)
    leave: LeavePolicy = field(default_factory=LeavePolicy)


_SECTIONS = {
    "staffing": StaffingConfig,
    "schedule": ScheduleConfig,
    "hours": HoursPolicy,
    "leave": LeavePolicy,
}


def _build_section(cls, raw: Dict[str, Any] | None, section: str):
    if raw is None:
        return cls()
    if not isinstance(raw, dict):
        raise ValidationError(f"Config section '{section}' must be a mapping", code="CONFIG_INVALID")

    known = {f.name for f in fields(cls)}
    kwargs = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning("Ignoring unknown config key %s.%s", section, key)
            continue
        kwargs[key] = value
    return cls(**kwargs)


def config_from_dict(data: Dict[str, Any] | None) -> PlanningConfig:
    """Build a PlanningConfig from a plain mapping (e.g. parsed YAML)."""
    data = data or {}
    for key in data:
        if key not in _SECTIONS:
            logger.warning("Ignoring unknown config section %s", key)

    cfg = PlanningConfig(**{
        name: _build_section(cls, data.get(name), name)
        for name, cls in _SECTIONS.items()
    })

    if cfg.schedule.break_minutes < 0:
        raise ValidationError(
            f"schedule.break_minutes must be >= 0, got {cfg.schedule.break_minutes}",
            code="CONFIG_INVALID",
        )
    return cfg


def load_config(path: str | Path | None = None) -> PlanningConfig:
    """
    Load configuration from a YAML or JSON file.

    Args:
        path: Config file path; None returns the built-in defaults

    Returns:
        PlanningConfig

    Raises:
        FileNotFoundError: If the path does not exist
        ValidationError: If a section is malformed
    """
    if path is None:
        return PlanningConfig()

    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)

    cfg = config_from_dict(data)

    for problem in cfg.staffing.validate():
        logger.warning("Config %s: %s", path, problem)

    logger.debug("Loaded config from %s", path)
    return cfg
