from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..state.app_state import TimeClockState
from ..timelogs.model import TimeLog
from . import aggregation


@dataclass(frozen=True)
class MonthlyReport:
    employee: Employee
    year_month: str
    rows: list[dict]
    total_hours: float

    @property
    def total_display(self) -> str:
        return f"{self.total_hours:.2f}"

    @property
    def filename(self) -> str:
        return f"Levant_Uren_{self.employee.name.replace(' ', '_', 1)}_{self.year_month}.pdf"

    def to_dict(self) -> dict:
        return {
            "employee": self.employee.to_dict(),
            "month": self.year_month,
            "rows": self.rows,
            "total_hours": round(self.total_hours, 2),
        }


def _time_label(value) -> str:
    return value.astimezone().strftime("%H:%M") if value else "-"


def _validate_month(year_month: str) -> str:
    value = (year_month or "").strip()
    parts = value.split("-")
    if len(parts) != 2 or len(parts[0]) != 4 or len(parts[1]) != 2 or not value.replace("-", "").isdigit():
        raise ValidationError("Maand moet het formaat JJJJ-MM hebben")
    if not 1 <= int(parts[1]) <= 12:
        raise ValidationError("Maand moet het formaat JJJJ-MM hebben")
    return value


class HoursReportService:
    """Monthly hours per employee, used by the hours view and the PDF export."""

    def __init__(self, state: TimeClockState):
        self._state = state

    def _row(self, log: TimeLog) -> dict:
        edits = len(log.edits)
        return {
            "log_id": log.id,
            "date": log.date_key,
            "start": _time_label(log.clock_in),
            "end": _time_label(log.clock_out),
            "hours": f"{aggregation.log_hours(log):.2f}",
            "edited": edits > 0,
            "edited_label": f"Ja ({edits})" if edits else "Nee",
        }

    def build_monthly_report(self, *, employee_id: str, year_month: Optional[str] = None) -> MonthlyReport:
        employee = self._state.get_employee(employee_id)
        if not employee:
            raise NotFoundError("Medewerker niet gevonden")

        month = _validate_month(year_month) if year_month else self._state.now().strftime("%Y-%m")
        logs = aggregation.monthly_logs(self._state.logs, employee_id, month)
        return MonthlyReport(
            employee=employee,
            year_month=month,
            rows=[self._row(log) for log in logs],
            total_hours=aggregation.monthly_hours(logs, employee_id, month),
        )
