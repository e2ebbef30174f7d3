from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import coerce_date, coerce_datetime, to_iso
from ..core.enums import LogStatus


@dataclass(frozen=True)
class AuditEntry:
    """One administrative change to a log's clock-in/clock-out.

    Stored inside the log's ``edits`` column; ``edited_at`` travels as ``date``.
    """

    edited_at: datetime
    reason: str
    admin_name: str
    previous_in: Optional[datetime] = None
    previous_out: Optional[datetime] = None
    new_in: Optional[datetime] = None
    new_out: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> "AuditEntry":
        return cls(
            edited_at=coerce_datetime(data["date"]),
            reason=data.get("reason", ""),
            admin_name=data.get("admin_name", ""),
            previous_in=coerce_datetime(data.get("previous_in")),
            previous_out=coerce_datetime(data.get("previous_out")),
            new_in=coerce_datetime(data.get("new_in")),
            new_out=coerce_datetime(data.get("new_out")),
        )

    def to_dict(self) -> dict:
        out = {"date": to_iso(self.edited_at)}
        for key in ("previous_in", "previous_out", "new_in", "new_out"):
            value = getattr(self, key)
            if value is not None:
                out[key] = to_iso(value)
        out["reason"] = self.reason
        out["admin_name"] = self.admin_name
        return out


@dataclass(frozen=True)
class TimeLog:
    """A single shift worked by one employee.

    ``status`` is ``active`` exactly while ``clock_out`` is ``None``. ``edits`` is
    an append-only tuple; the only way to grow it is ``with_edit``.
    """

    id: str
    employee_id: str
    work_date: date
    clock_in: datetime
    clock_out: Optional[datetime]
    status: LogStatus
    edits: tuple[AuditEntry, ...] = field(default_factory=tuple)

    @property
    def is_active(self) -> bool:
        return self.status == LogStatus.ACTIVE

    @property
    def date_key(self) -> str:
        return self.work_date.strftime("%Y-%m-%d")

    def with_edit(self, entry: AuditEntry, **changes) -> "TimeLog":
        return replace(self, edits=self.edits + (entry,), **changes)

    @classmethod
    def from_row(cls, row: dict) -> "TimeLog":
        clock_out = coerce_datetime(row.get("clock_out"))
        status = row.get("status") or (LogStatus.COMPLETED.value if clock_out else LogStatus.ACTIVE.value)
        return cls(
            id=str(row["id"]),
            employee_id=str(row["employee_id"]),
            work_date=coerce_date(row["date"]),
            clock_in=coerce_datetime(row["clock_in"]),
            clock_out=clock_out,
            status=LogStatus(status),
            edits=tuple(AuditEntry.from_dict(e) for e in (row.get("edits") or [])),
        )

    def to_row(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "date": self.date_key,
            "clock_in": to_iso(self.clock_in),
            "clock_out": to_iso(self.clock_out),
            "status": self.status.value,
            "edits": [e.to_dict() for e in self.edits],
        }

    def to_dict(self) -> dict:
        return {"id": self.id, **self.to_row()}
