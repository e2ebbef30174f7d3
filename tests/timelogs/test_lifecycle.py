from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from levant.core.constants import MANUAL_ADD_REASON
from levant.core.enums import LogStatus
from levant.core.exceptions import ValidationError
from levant.timelogs import lifecycle
from levant.timelogs.model import TimeLog


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_start_and_close_log(fixed_now):
    log = lifecycle.start_log("emp1", fixed_now)

    assert lifecycle.is_temp_id(log.id)
    assert log.status == LogStatus.ACTIVE
    assert log.clock_out is None
    assert log.work_date == fixed_now.date()

    closed = lifecycle.close_log(log, _utc(2024, 3, 15, 23, 0))

    assert closed.id == log.id
    assert closed.status == LogStatus.COMPLETED
    assert closed.clock_out == _utc(2024, 3, 15, 23, 0)
    assert closed.edits == ()


def test_edit_closes_an_open_log(fixed_now):
    log = TimeLog(
        id="l1",
        employee_id="emp1",
        work_date=date(2024, 1, 1),
        clock_in=_utc(2024, 1, 1, 9, 0),
        clock_out=None,
        status=LogStatus.ACTIVE,
    )

    edited = lifecycle.apply_edit(
        log,
        _utc(2024, 1, 1, 9, 0),
        _utc(2024, 1, 1, 17, 0),
        "forgot to clock out",
        admin_name="Admin",
        now=fixed_now,
    )

    assert edited.status == LogStatus.COMPLETED
    assert edited.clock_out == _utc(2024, 1, 1, 17, 0)
    assert len(edited.edits) == 1
    entry = edited.edits[0].to_dict()
    assert entry["previous_in"] == "2024-01-01T09:00:00+00:00"
    assert "previous_out" not in entry
    assert entry["new_in"] == "2024-01-01T09:00:00+00:00"
    assert entry["new_out"] == "2024-01-01T17:00:00+00:00"
    assert entry["reason"] == "forgot to clock out"
    assert entry["admin_name"] == "Admin"


def test_each_edit_appends_exactly_one_entry(fixed_now):
    log = lifecycle.close_log(lifecycle.start_log("emp1", _utc(2024, 3, 15, 17, 0)), _utc(2024, 3, 15, 23, 30))

    once = lifecycle.apply_edit(log, log.clock_in, _utc(2024, 3, 15, 23, 0), "te laat uitgeklokt", admin_name="Admin", now=fixed_now)
    twice = lifecycle.apply_edit(once, once.clock_in, None, "nog bezig", admin_name="Admin", now=fixed_now)

    assert len(once.edits) == 1
    assert twice.edits[:1] == once.edits
    assert len(twice.edits) == 2
    assert twice.status == LogStatus.ACTIVE
    assert twice.edits[1].previous_out == _utc(2024, 3, 15, 23, 0)


@pytest.mark.parametrize("reason", [None, "", "   "])
def test_edit_requires_a_reason(fixed_now, reason):
    log = lifecycle.start_log("emp1", fixed_now)

    with pytest.raises(ValidationError):
        lifecycle.apply_edit(log, fixed_now, None, reason, admin_name="Admin", now=fixed_now)


def test_edit_rejects_clock_out_before_clock_in(fixed_now):
    log = lifecycle.start_log("emp1", fixed_now)

    with pytest.raises(ValidationError):
        lifecycle.apply_edit(log, fixed_now, _utc(2024, 3, 15, 17, 0), "fout", admin_name="Admin", now=fixed_now)


def test_manual_log_gets_default_reason_and_no_previous_values(fixed_now):
    log = lifecycle.manual_log(
        "emp1",
        date(2024, 3, 14),
        _utc(2024, 3, 14, 17, 0),
        _utc(2024, 3, 14, 23, 0),
        None,
        admin_name="Admin",
        now=fixed_now,
    )

    assert log.status == LogStatus.COMPLETED
    [entry] = log.edits
    assert entry.reason == MANUAL_ADD_REASON
    assert entry.previous_in is None and entry.previous_out is None
    assert entry.new_out == _utc(2024, 3, 14, 23, 0)


def test_manual_log_without_clock_out_is_active(fixed_now):
    log = lifecycle.manual_log("emp1", date(2024, 3, 15), fixed_now, None, "vergeten", admin_name="Admin", now=fixed_now)

    assert log.status == LogStatus.ACTIVE
    assert log.edits[0].reason == "vergeten"


def test_retention_boundary():
    cutoff = lifecycle.retention_cutoff(date(2024, 3, 15))

    assert cutoff == date(2023, 12, 15)

    def _log(day: date) -> TimeLog:
        return TimeLog("x", "emp1", day, _utc(day.year, day.month, day.day, 9), None, LogStatus.ACTIVE)

    assert not lifecycle.is_expired(_log(date(2023, 12, 15)), cutoff)
    assert lifecycle.is_expired(_log(date(2023, 12, 14)), cutoff)


def test_row_round_trip_keeps_edits(fixed_now):
    log = lifecycle.manual_log("emp1", date(2024, 3, 14), _utc(2024, 3, 14, 17), _utc(2024, 3, 14, 23), None, admin_name="Admin", now=fixed_now)

    restored = TimeLog.from_row({"id": "l1", **log.to_row()})

    assert restored.edits == log.edits
    assert restored.clock_out == log.clock_out
