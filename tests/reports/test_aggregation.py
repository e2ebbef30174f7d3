from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from levant.core.enums import BoardStatus, LogStatus, Role
from levant.employees.model import Employee
from levant.reports import aggregation
from levant.timelogs.model import AuditEntry, TimeLog


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def _log(log_id: str, employee_id: str, start: datetime, hours: float | None, edits=()) -> TimeLog:
    end = start + timedelta(hours=hours) if hours is not None else None
    return TimeLog(
        id=log_id,
        employee_id=employee_id,
        work_date=start.date(),
        clock_in=start,
        clock_out=end,
        status=LogStatus.COMPLETED if end else LogStatus.ACTIVE,
        edits=tuple(edits),
    )


def test_monthly_hours_sums_completed_logs():
    logs = [
        _log("a", "emp1", _utc(2024, 3, 1, 9), 8),
        _log("b", "emp1", _utc(2024, 3, 2, 16), 7.5),
        _log("c", "emp1", _utc(2024, 2, 29, 9), 4),
        _log("d", "emp2", _utc(2024, 3, 3, 9), 3),
        _log("e", "emp1", _utc(2024, 3, 4, 9), None),
    ]

    assert aggregation.monthly_hours(logs, "emp1", "2024-03") == 15.5
    assert aggregation.monthly_hours(list(reversed(logs)), "emp1", "2024-03") == 15.5
    assert [log.id for log in aggregation.monthly_logs(list(reversed(logs)), "emp1", "2024-03")] == ["a", "b"]
    assert aggregation.monthly_hours(logs, "emp1", "2024-01") == 0


def test_board_status_per_employee():
    today = date(2024, 3, 15)
    now = _utc(2024, 3, 15, 20, 30)
    employees = [
        Employee("e1", "Anna", Role.BAR),
        Employee("e2", "Bram", Role.SERVER),
        Employee("e3", "Cem", Role.KITCHEN),
        Employee("e4", "Dana", Role.MANAGER, is_active=False),
    ]
    logs = [
        _log("a", "e1", _utc(2024, 3, 15, 17, 0), None),
        _log("b", "e2", _utc(2024, 3, 15, 11, 0), 4),
        _log("c", "e3", _utc(2024, 3, 14, 17, 0), 6),
    ]

    rows = {row.employee.id: row for row in aggregation.employee_board(employees, logs, today, now)}

    assert set(rows) == {"e1", "e2", "e3"}
    assert rows["e1"].status == BoardStatus.WORKING
    assert rows["e1"].duration == "3u 30m"
    assert rows["e2"].status == BoardStatus.FINISHED
    assert rows["e3"].status == BoardStatus.NOT_STARTED


def test_audit_trail_is_most_recent_first():
    first = AuditEntry(edited_at=_utc(2024, 3, 1, 10), reason="eerste", admin_name="Admin")
    second = AuditEntry(edited_at=_utc(2024, 3, 5, 10), reason="tweede", admin_name="Admin")
    third = AuditEntry(edited_at=_utc(2024, 3, 3, 10), reason="derde", admin_name="Admin")
    logs = [
        _log("a", "e1", _utc(2024, 3, 1, 9), 8, edits=[first, second]),
        _log("b", "e2", _utc(2024, 3, 2, 9), 8, edits=[third]),
        _log("c", "e2", _utc(2024, 3, 2, 9), 8),
    ]

    trail = aggregation.audit_trail(logs)

    assert [item.entry.reason for item in trail] == ["tweede", "derde", "eerste"]
    assert trail[1].to_dict()["log_id"] == "b"
    assert trail[1].to_dict()["log_date"] == "2024-03-02"


def test_completed_logs_recent_first():
    logs = [
        _log("a", "e1", _utc(2024, 3, 1, 9), 8),
        _log("b", "e1", _utc(2024, 3, 3, 9), None),
        _log("c", "e1", _utc(2024, 3, 2, 9), 8),
    ]

    assert [log.id for log in aggregation.completed_logs_recent_first(logs)] == ["c", "a"]
