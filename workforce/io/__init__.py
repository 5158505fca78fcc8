"""I/O utilities for CSV import/export."""

from .export_csv import (
    export_alerts_csv,
    export_annual_csv,
    export_schedules_csv,
    schedules_to_frame,
)
from .import_csv import import_employees_csv, import_leaves_csv, import_room_types_csv

__all__ = [
    "import_employees_csv",
    "import_room_types_csv",
    "import_leaves_csv",
    "schedules_to_frame",
    "export_schedules_csv",
    "export_alerts_csv",
    "export_annual_csv",
]
