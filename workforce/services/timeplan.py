"""Time-of-day helpers shared by the generator and the editor."""

from __future__ import annotations

from datetime import time
from typing import Dict

from workforce.domain.types import DAY_NAMES

MINUTES_PER_DAY = 24 * 60

WEEKLY_HOURS_ENUM: Dict[str, float] = {
    "H35": 35.0,
    "H39": 39.0,
    "H35_MODULABLE": 35.0,
    "H39_MODULABLE": 39.0,
}
DEFAULT_WEEKLY_HOURS = 35.0


def parse_time_string(value: str) -> time:
    """Parse 'HH:MM' into a time. Raises ValueError on malformed input."""
    if not isinstance(value, str):
        raise ValueError(f"Expected 'HH:MM' string, got {value!r}")
    parts = value.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Expected 'HH:MM', got {value!r}")
    hour, minute = int(parts[0]), int(parts[1])
    return time(hour, minute)


def to_minutes(value: str) -> int:
    t = parse_time_string(value)
    return t.hour * 60 + t.minute


def format_minutes(total: int) -> str:
    """Minutes since midnight -> 'HH:MM'. Caller guarantees 0 <= total < 1440."""
    return f"{total // 60:02d}:{total % 60:02d}"


def calculate_shift_hours(start: str, end: str, break_minutes: int = 0) -> float:
    """
    Net hours of a shift, never negative.

    A shift whose end is not after its start contributes 0 hours.
    """
    duration = to_minutes(end) - to_minutes(start)
    if duration <= 0:
        return 0.0
    return max(0, duration - break_minutes) / 60.0


def weekly_hours_from_enum(value: str | None) -> float:
    """Map the roster's weekly-hours enum (H35, H39_MODULABLE, ...) to hours."""
    if value is None:
        return DEFAULT_WEEKLY_HOURS
    return WEEKLY_HOURS_ENUM.get(str(value).strip().upper(), DEFAULT_WEEKLY_HOURS)


def day_name(iso_weekday: int) -> str:
    return DAY_NAMES[iso_weekday - 1]


def normalize_day(value: str) -> str | None:
    """Canonical day name or None when `value` is not one of the seven days."""
    if not isinstance(value, str):
        return None
    name = value.strip().lower()
    return name if name in DAY_NAMES else None
