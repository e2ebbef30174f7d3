"""Read-only views over the log collection (dashboard, hours, audit trail)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import format_duration, hours_between, to_iso
from ..core.enums import BoardStatus, LogStatus
from ..employees.model import Employee
from ..timelogs.model import AuditEntry, TimeLog


@dataclass(frozen=True)
class BoardRow:
    employee: Employee
    status: BoardStatus
    clock_in: Optional[datetime] = None
    duration: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "employee": self.employee.to_dict(),
            "status": self.status.value,
            "clock_in": to_iso(self.clock_in),
            "duration": self.duration,
        }


@dataclass(frozen=True)
class AuditTrailEntry:
    log_id: str
    employee_id: str
    log_date: date
    entry: AuditEntry

    def to_dict(self) -> dict:
        return {
            **self.entry.to_dict(),
            "log_id": self.log_id,
            "employee_id": self.employee_id,
            "log_date": self.log_date.strftime("%Y-%m-%d"),
        }


def active_employee_ids(logs: Iterable[TimeLog]) -> set[str]:
    return {log.employee_id for log in logs if log.status == LogStatus.ACTIVE}


def finished_today_ids(logs: Sequence[TimeLog], today: date) -> set[str]:
    active = active_employee_ids(logs)
    return {
        log.employee_id
        for log in logs
        if log.work_date == today and log.status == LogStatus.COMPLETED and log.employee_id not in active
    }


def employee_board(employees: Sequence[Employee], logs: Sequence[TimeLog], today: date, now: datetime) -> list[BoardRow]:
    """Status card per active employee: not started, working (with live duration) or finished."""

    active_logs = {log.employee_id: log for log in logs if log.status == LogStatus.ACTIVE}
    finished = finished_today_ids(logs, today)

    rows: list[BoardRow] = []
    for employee in employees:
        if not employee.is_active:
            continue
        current = active_logs.get(employee.id)
        if current:
            rows.append(
                BoardRow(
                    employee=employee,
                    status=BoardStatus.WORKING,
                    clock_in=current.clock_in,
                    duration=format_duration(current.clock_in, now),
                )
            )
        elif employee.id in finished:
            rows.append(BoardRow(employee=employee, status=BoardStatus.FINISHED))
        else:
            rows.append(BoardRow(employee=employee, status=BoardStatus.NOT_STARTED))
    return rows


def log_hours(log: TimeLog) -> float:
    if log.clock_out is None:
        return 0.0
    return hours_between(log.clock_in, log.clock_out)


def monthly_logs(logs: Iterable[TimeLog], employee_id: str, year_month: str) -> list[TimeLog]:
    """Completed logs of one employee whose date falls in ``YYYY-MM``, oldest first."""

    selected = [
        log
        for log in logs
        if log.employee_id == employee_id
        and log.status == LogStatus.COMPLETED
        and log.date_key.startswith(year_month)
    ]
    return sorted(selected, key=lambda log: log.work_date)


def monthly_hours(logs: Iterable[TimeLog], employee_id: str, year_month: str) -> float:
    return sum(log_hours(log) for log in monthly_logs(logs, employee_id, year_month))


def audit_trail(logs: Iterable[TimeLog]) -> list[AuditTrailEntry]:
    """Every edit of every log, most recent first."""

    trail = [
        AuditTrailEntry(log_id=log.id, employee_id=log.employee_id, log_date=log.work_date, entry=entry)
        for log in logs
        for entry in log.edits
    ]
    trail.sort(key=lambda item: item.entry.edited_at, reverse=True)
    return trail


def completed_logs_recent_first(logs: Iterable[TimeLog]) -> list[TimeLog]:
    completed = [log for log in logs if log.status == LogStatus.COMPLETED]
    return sorted(completed, key=lambda log: log.work_date, reverse=True)
