from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.datetime_utils import coerce_date


@dataclass(frozen=True)
class Shift:
    """Planned shift on the schedule (HH:MM start/end). Independent of time logs."""

    id: str
    employee_id: str
    work_date: date
    start_time: str
    end_time: str

    @classmethod
    def from_row(cls, row: dict) -> "Shift":
        return cls(
            id=str(row["id"]),
            employee_id=str(row["employee_id"]),
            work_date=coerce_date(row["date"]),
            start_time=str(row["start_time"])[:5],
            end_time=str(row["end_time"])[:5],
        )

    def to_row(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "start_time": self.start_time,
            "end_time": self.end_time,
        }

    def to_dict(self) -> dict:
        return {"id": self.id, **self.to_row()}
