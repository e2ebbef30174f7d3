"""Time-log lifecycle rules.

Pure functions: they build or transform ``TimeLog`` values and never touch the
record store. The state controller decides when to persist the results.

    active  --close_log / apply_edit(new_out)-->  completed
    (apply_edit without new_out sets a log back to active)
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import months_before
from ..common.validators import optional_text, require_non_empty
from ..core.constants import MANUAL_ADD_REASON, RETENTION_MONTHS, TEMP_ID_PREFIX
from ..core.enums import LogStatus
from ..core.exceptions import ValidationError
from .model import AuditEntry, TimeLog


def temp_id() -> str:
    """Client-side placeholder id, replaced once the store returns the durable one."""
    return f"{TEMP_ID_PREFIX}{uuid.uuid4()}"


def is_temp_id(value: str) -> bool:
    return value.startswith(TEMP_ID_PREFIX)


def status_for(clock_out: Optional[datetime]) -> LogStatus:
    return LogStatus.COMPLETED if clock_out is not None else LogStatus.ACTIVE


def find_active_log(logs: Iterable[TimeLog], employee_id: str) -> Optional[TimeLog]:
    for log in logs:
        if log.employee_id == employee_id and log.is_active:
            return log
    return None


def start_log(employee_id: str, now: datetime) -> TimeLog:
    return TimeLog(
        id=temp_id(),
        employee_id=employee_id,
        work_date=now.date(),
        clock_in=now,
        clock_out=None,
        status=LogStatus.ACTIVE,
    )


def close_log(log: TimeLog, now: datetime) -> TimeLog:
    return replace(log, clock_out=now, status=LogStatus.COMPLETED)


def manual_log(
    employee_id: str,
    work_date: date,
    clock_in: datetime,
    clock_out: Optional[datetime],
    reason: Optional[str],
    *,
    admin_name: str,
    now: datetime,
) -> TimeLog:
    """Admin-inserted log, with one audit entry recording the inserted values."""

    if clock_out is not None and clock_out < clock_in:
        raise ValidationError("Eindtijd ligt voor de starttijd")

    entry = AuditEntry(
        edited_at=now,
        reason=optional_text(reason, "Reden") or MANUAL_ADD_REASON,
        admin_name=admin_name,
        new_in=clock_in,
        new_out=clock_out,
    )
    return TimeLog(
        id=temp_id(),
        employee_id=employee_id,
        work_date=work_date,
        clock_in=clock_in,
        clock_out=clock_out,
        status=status_for(clock_out),
        edits=(entry,),
    )


def apply_edit(
    log: TimeLog,
    new_in: datetime,
    new_out: Optional[datetime],
    reason: Optional[str],
    *,
    admin_name: str,
    now: datetime,
) -> TimeLog:
    """Overwrite clock-in/out and append exactly one audit entry."""

    reason = require_non_empty(reason, "Reden van wijziging")
    if new_out is not None and new_out < new_in:
        raise ValidationError("Eindtijd ligt voor de starttijd")

    entry = AuditEntry(
        edited_at=now,
        reason=reason,
        admin_name=admin_name,
        previous_in=log.clock_in,
        previous_out=log.clock_out,
        new_in=new_in,
        new_out=new_out,
    )
    return log.with_edit(entry, clock_in=new_in, clock_out=new_out, status=status_for(new_out))


def retention_cutoff(today: date, months: int = RETENTION_MONTHS) -> date:
    """Oldest log date that survives cleanup; logs dated on the cutoff are kept."""
    return months_before(today, months)


def is_expired(log: TimeLog, cutoff: date) -> bool:
    return log.work_date < cutoff


def without_completed(logs: Sequence[TimeLog]) -> list[TimeLog]:
    return [log for log in logs if log.status != LogStatus.COMPLETED]


def completed_logs(logs: Sequence[TimeLog]) -> list[TimeLog]:
    return [log for log in logs if log.status == LogStatus.COMPLETED]
