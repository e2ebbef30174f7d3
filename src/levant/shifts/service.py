from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Iterable

from ..common.validators import require_non_empty
from ..core.constants import TABLE_SHIFTS
from ..core.exceptions import NotFoundError, ValidationError
from ..store.model import eq, gte, lt
from ..store.repository import RecordStore
from .model import Shift

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def week_days(start: date) -> list[date]:
    """Seven consecutive days starting at ``start``."""
    return [start + timedelta(days=i) for i in range(7)]


def shifts_for_day(shifts: Iterable[Shift], day: date) -> list[Shift]:
    return sorted((s for s in shifts if s.work_date == day), key=lambda s: s.start_time)


def _require_time(value: str, field_name: str) -> str:
    value = require_non_empty(value, field_name)
    if not _HHMM.match(value):
        raise ValidationError(f"{field_name} moet het formaat UU:MM hebben")
    return value


class ScheduleService:
    """Planned shifts, read and written straight through the record store."""

    def __init__(self, store: RecordStore):
        self._store = store

    def list_week(self, start: date) -> list[Shift]:
        end = start + timedelta(days=7)
        rows = self._store.select(
            TABLE_SHIFTS,
            [gte("date", start.strftime("%Y-%m-%d")), lt("date", end.strftime("%Y-%m-%d"))],
        )
        return sorted((Shift.from_row(r) for r in rows), key=lambda s: (s.work_date, s.start_time))

    def add_shift(self, *, employee_id: str, work_date: date, start_time: str, end_time: str) -> Shift:
        employee_id = require_non_empty(employee_id, "Medewerker")
        shift = Shift(
            id="",
            employee_id=employee_id,
            work_date=work_date,
            start_time=_require_time(start_time, "Starttijd"),
            end_time=_require_time(end_time, "Eindtijd"),
        )
        stored = self._store.insert(TABLE_SHIFTS, [shift.to_row()])
        return Shift.from_row(stored[0])

    def remove_shift(self, shift_id: str) -> None:
        if not self._store.select(TABLE_SHIFTS, [eq("id", shift_id)]):
            raise NotFoundError("Dienst niet gevonden")
        self._store.delete(TABLE_SHIFTS, [eq("id", shift_id)])

    week_days = staticmethod(week_days)
    shifts_for_day = staticmethod(shifts_for_day)
